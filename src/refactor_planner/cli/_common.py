"""Shared CLI helpers."""

from rich.console import Console

from ..ranking.models import RiskLevel

console = Console()

RISK_STYLE = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
    RiskLevel.CRITICAL: "bold red",
}


def risk_text(level: RiskLevel) -> str:
    style = RISK_STYLE[level]
    return f"[{style}]{level.value}[/{style}]"


def score_style(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"
