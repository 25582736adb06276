"""Architecture analysis models.

Defines violation and health dataclasses for representing detected
circular dependencies, layer breaches and the overall health score.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..graph.models import CycleGroup, DependencyGraph


class ViolationKind(Enum):
    """Types of architecture violations."""

    CIRCULAR = "circular"
    LAYER = "layer-violation"


class Severity(Enum):
    """How much a violation costs the health score."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ArchViolation:
    """A dependency relationship that breaks the intended architecture."""

    kind: ViolationKind
    source: str  # "from" module
    target: str  # "to" module
    message: str
    severity: Severity
    fix: str = ""
    edges: tuple[tuple[str, str], ...] = ()  # concrete import edges involved

    @property
    def modules(self) -> tuple[str, ...]:
        """Every module the violation touches, sorted."""
        nodes = {self.source, self.target}
        for src, tgt in self.edges:
            nodes.add(src)
            nodes.add(tgt)
        return tuple(sorted(nodes))


@dataclass
class ArchHealth:
    """Top-level result of architecture health analysis."""

    score: float
    violations: list[ArchViolation] = field(default_factory=list)
    graph: DependencyGraph = field(default_factory=DependencyGraph)
    layers: dict[str, str] = field(default_factory=dict)  # module -> assigned layer
    cycles: list[CycleGroup] = field(default_factory=list)
    skipped_modules: list[str] = field(default_factory=list)  # unreadable records

    @property
    def dependency_graph(self) -> dict[str, list[str]]:
        return self.graph.to_dict()

    def violations_of(self, kind: ViolationKind) -> list[ArchViolation]:
        return [v for v in self.violations if v.kind is kind]

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity is Severity.ERROR)
