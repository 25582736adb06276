"""Thresholds and weights for centrality, classification and risk."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RankingPolicy:
    """Tunable parameters of the ranking engine.

    Attributes:
        leaf_percentile: Below this percentile (both Ca and centrality) a
            module counts as a leaf.
        core_percentile: At or above this percentile (Ca or centrality) a
            module counts as core.
        afferent_weight: Weight of Ca in the phase risk formula.
        centrality_weight: Weight of centrality in the phase risk formula.
        cycle_multiplier: Risk multiplier for phases that form a cycle.
        medium_risk / high_risk / critical_risk: Lower bounds of the risk
            levels above ``low``.
        damping: Rank propagation damping factor.
        max_iterations: Power iteration cap.
        tolerance: L1 convergence threshold.
        precision: Decimals kept on centrality before percentile comparison.
        hotspot_count: Number of hotspots reported.
    """

    leaf_percentile: float = 20.0
    core_percentile: float = 80.0
    afferent_weight: float = 10.0
    centrality_weight: float = 100.0
    cycle_multiplier: float = 1.5
    medium_risk: float = 10.0
    high_risk: float = 30.0
    critical_risk: float = 50.0
    damping: float = 0.85
    max_iterations: int = 100
    tolerance: float = 1e-6
    precision: int = 12
    hotspot_count: int = 10

    def __post_init__(self) -> None:
        if not 0 <= self.leaf_percentile <= 100:
            raise ValueError("leaf_percentile must be between 0 and 100")
        if not 0 <= self.core_percentile <= 100:
            raise ValueError("core_percentile must be between 0 and 100")
        if self.leaf_percentile > self.core_percentile:
            raise ValueError("leaf_percentile must not exceed core_percentile")
        if self.afferent_weight < 0 or self.centrality_weight < 0:
            raise ValueError("risk weights must be non-negative")
        if self.cycle_multiplier < 1:
            raise ValueError("cycle_multiplier must be >= 1")
        if not 0 <= self.medium_risk <= self.high_risk <= self.critical_risk:
            raise ValueError("risk thresholds must satisfy 0 <= medium <= high <= critical")
        if not 0 < self.damping < 1:
            raise ValueError("damping must be between 0 and 1 (exclusive)")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")
        if self.precision < 1:
            raise ValueError("precision must be >= 1")
        if self.hotspot_count < 0:
            raise ValueError("hotspot_count must be non-negative")
