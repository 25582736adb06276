"""Data models for centrality ranking and safe refactoring order."""

from dataclasses import dataclass, field
from enum import Enum


class Classification(Enum):
    """Position of a module in the dependency structure."""

    LEAF = "leaf"
    INTERMEDIATE = "intermediate"
    CORE = "core"


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2, RiskLevel.CRITICAL: 3}


@dataclass(frozen=True)
class CouplingMetrics:
    """Afferent/efferent coupling of one module.

    ``risk_score`` is ``centrality * Ca * 100`` rounded to two decimals,
    a quick "how much breaks if this changes" indicator.
    """

    path: str
    afferent: int  # Ca: modules depending on this one
    efferent: int  # Ce: modules this one depends on
    instability: float  # Ce / (Ca + Ce), 0.0 when isolated
    risk_score: float = 0.0


@dataclass(frozen=True)
class Hotspot:
    """A structurally central module that should be changed carefully."""

    path: str
    centrality: float
    percentile: int
    dependent_count: int
    dependency_count: int
    risk_level: RiskLevel
    coupling: CouplingMetrics
    reason: str


@dataclass(frozen=True)
class RefactoringPhase:
    """One strongly connected component scheduled as a unit."""

    order: int
    modules: tuple[str, ...]
    category: str  # leaf | intermediate | core | cycle
    risk_score: int
    risk_level: RiskLevel
    can_parallelize: bool
    prerequisites: tuple[int, ...] = ()  # orders of earlier phases

    @property
    def is_cycle(self) -> bool:
        return self.category == "cycle"


@dataclass
class SafeRefactoringOrder:
    phases: list[RefactoringPhase] = field(default_factory=list)
    total_modules: int = 0
    estimated_risk: RiskLevel = RiskLevel.LOW
    cycles: list[tuple[str, ...]] = field(default_factory=list)
    leaf_nodes: list[str] = field(default_factory=list)
    core_nodes: list[str] = field(default_factory=list)


@dataclass
class RankingStats:
    node_count: int = 0
    edge_count: int = 0
    iterations: int = 0
    converged: bool = False
    cycle_count: int = 0
    duration_ms: float = 0.0


@dataclass
class RankingAnalysis:
    """Everything the ranking engine computes for one graph snapshot."""

    centrality: dict[str, float] = field(default_factory=dict)
    coupling: dict[str, CouplingMetrics] = field(default_factory=dict)
    classification: dict[str, Classification] = field(default_factory=dict)
    hotspots: list[Hotspot] = field(default_factory=list)
    safe_order: SafeRefactoringOrder = field(default_factory=SafeRefactoringOrder)
    stats: RankingStats = field(default_factory=RankingStats)
    in_cycle: frozenset[str] = frozenset()

    def afferent(self, module: str) -> int:
        metrics = self.coupling.get(module)
        return metrics.afferent if metrics else 0
