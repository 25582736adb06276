"""Hotspot detection: the most central modules."""

from typing import Mapping

from ..graph.models import DependencyGraph
from .classification import percentile
from .models import CouplingMetrics, Hotspot, RiskLevel

CRITICAL_PERCENTILE = 95
HIGH_PERCENTILE = 80
MEDIUM_PERCENTILE = 50


def hotspot_risk(pct: int) -> RiskLevel:
    if pct >= CRITICAL_PERCENTILE:
        return RiskLevel.CRITICAL
    if pct >= HIGH_PERCENTILE:
        return RiskLevel.HIGH
    if pct >= MEDIUM_PERCENTILE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def hotspot_reason(pct: int, dependent_count: int, coupling: CouplingMetrics) -> str:
    parts = []
    if pct >= CRITICAL_PERCENTILE:
        parts.append(f"Top {100 - pct}% by centrality")
    if dependent_count > 5:
        parts.append(f"{dependent_count} dependents")
    if coupling.instability < 0.3:
        parts.append("stable core module")
    if not parts:
        parts.append("central in dependency graph")
    return ", ".join(parts)


def find_hotspots(
    graph: DependencyGraph,
    centrality: Mapping[str, float],
    coupling: Mapping[str, CouplingMetrics],
    count: int = 10,
    precision: int = 12,
) -> list[Hotspot]:
    """Top ``count`` modules by centrality (descending, ties by id)."""
    rounded = {m: round(v, precision) for m, v in centrality.items()}
    all_scores = list(rounded.values())
    ranked = sorted(rounded.items(), key=lambda kv: (-kv[1], kv[0]))

    hotspots = []
    for module, score in ranked[:count]:
        pct = percentile(score, all_scores)
        dependents = len(graph.dependents(module))
        metrics = coupling.get(module) or CouplingMetrics(
            path=module, afferent=dependents, efferent=0, instability=0.0
        )
        hotspots.append(
            Hotspot(
                path=module,
                centrality=round(centrality[module], 4),
                percentile=pct,
                dependent_count=dependents,
                dependency_count=len(graph.dependencies(module)),
                risk_level=hotspot_risk(pct),
                coupling=metrics,
                reason=hotspot_reason(pct, dependents, metrics),
            )
        )
    return hotspots
