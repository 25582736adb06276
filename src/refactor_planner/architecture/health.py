"""Architecture health: cycles, layer violations and the overall score."""

from typing import Optional

from ..exceptions import ModuleReadError
from ..graph.algorithms import cycle_path, find_cycles
from ..graph.builder import build_dependency_graph
from ..graph.models import CycleGroup, DependencyGraph
from ..logging_config import get_logger
from ..scanning.base import ModuleSource
from ..scanning.models import ModuleRecord
from .layers import assign_layers, detect_layer_violations
from .models import ArchHealth, ArchViolation, Severity, ViolationKind
from .policy import HealthPolicy, LayerPolicy

logger = get_logger(__name__)


def detect_circular_violations(
    graph: DependencyGraph, cycles: Optional[list[CycleGroup]] = None
) -> list[ArchViolation]:
    """One ``error`` violation per strongly connected component of size >= 2."""
    if cycles is None:
        cycles = find_cycles(graph)

    violations = []
    for cycle in cycles:
        path = cycle_path(graph, cycle)
        violations.append(
            ArchViolation(
                kind=ViolationKind.CIRCULAR,
                source=path[0],
                target=path[1],
                message=f"Circular dependency: {' → '.join(path)}",
                severity=Severity.ERROR,
                fix=(
                    "Extract the shared code into a new module both sides depend on, "
                    "or invert one dependency"
                ),
                edges=cycle.edges,
            )
        )
    return violations


def read_modules(source: ModuleSource) -> tuple[list[ModuleRecord], list[str]]:
    """Load every record from ``source``.

    ``ScanError`` from listing propagates. A ``ModuleReadError`` for one
    module is logged and the module id is returned in the skipped list.
    """
    records: list[ModuleRecord] = []
    skipped: list[str] = []
    for module_id in source.list_modules():
        try:
            records.append(source.load(module_id))
        except ModuleReadError as e:
            logger.warning(f"Skipping module: {e}")
            skipped.append(module_id)
    return records, skipped


def analyze_architecture(
    source: ModuleSource,
    layer_policy: Optional[LayerPolicy] = None,
    health_policy: Optional[HealthPolicy] = None,
) -> ArchHealth:
    """Build the dependency graph and score its architecture."""
    layer_policy = layer_policy or LayerPolicy()
    health_policy = health_policy or HealthPolicy()

    records, skipped = read_modules(source)
    graph = build_dependency_graph(records)
    logger.debug(f"Built graph from {source.name}: {len(graph)} modules, {graph.edge_count} edges")

    cycles = find_cycles(graph)
    hints = {r.id: r.layer for r in records}
    layers = assign_layers(graph, layer_policy, hints)

    violations = detect_circular_violations(graph, cycles)
    violations.extend(detect_layer_violations(graph, layers, layer_policy))

    score = health_policy.score(violations)
    logger.debug(f"Architecture score {score:.1f} with {len(violations)} violation(s)")

    return ArchHealth(
        score=score,
        violations=violations,
        graph=graph,
        layers=layers,
        cycles=cycles,
        skipped_modules=skipped,
    )
