"""Centrality and coupling engine."""

from .centrality import CentralityResult, compute_centrality
from .classification import classify_modules, compute_percentiles, percentile, round_half_up
from .coupling import compute_coupling, instability
from .engine import analyze_ranking
from .hotspots import find_hotspots, hotspot_risk
from .models import (
    Classification,
    CouplingMetrics,
    Hotspot,
    RankingAnalysis,
    RankingStats,
    RefactoringPhase,
    RiskLevel,
    SafeRefactoringOrder,
)
from .phases import compute_safe_order, phase_risk, risk_level
from .policy import RankingPolicy

__all__ = [
    "CentralityResult",
    "Classification",
    "CouplingMetrics",
    "Hotspot",
    "RankingAnalysis",
    "RankingPolicy",
    "RankingStats",
    "RefactoringPhase",
    "RiskLevel",
    "SafeRefactoringOrder",
    "analyze_ranking",
    "classify_modules",
    "compute_centrality",
    "compute_coupling",
    "compute_percentiles",
    "compute_safe_order",
    "find_hotspots",
    "hotspot_risk",
    "instability",
    "percentile",
    "phase_risk",
    "risk_level",
    "round_half_up",
]
