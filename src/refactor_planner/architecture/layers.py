"""Layer assignment and layer-violation detection."""

from typing import Mapping, Optional

from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .models import ArchViolation, Severity, ViolationKind
from .policy import LayerPolicy

logger = get_logger(__name__)


def assign_layers(
    graph: DependencyGraph,
    policy: LayerPolicy,
    hints: Optional[Mapping[str, Optional[str]]] = None,
) -> dict[str, str]:
    """Assign each module to a layer; modules no rule matches are left out."""
    hints = hints or {}
    layers: dict[str, str] = {}
    for module in sorted(graph.all_nodes):
        hint = hints.get(module)
        if hint is not None and not policy.is_known(hint):
            logger.warning(f"Ignoring unknown layer hint '{hint}' for {module}")
            hint = None
        layer = policy.assign(module, hint)
        if layer is not None:
            layers[module] = layer
    logger.debug(f"Assigned layers to {len(layers)}/{len(graph)} modules")
    return layers


def detect_layer_violations(
    graph: DependencyGraph, layers: Mapping[str, str], policy: LayerPolicy
) -> list[ArchViolation]:
    """One violation per edge whose target layer is not allowed for its source.

    Importing a higher layer is an error; importing a disallowed peer or
    lower layer is a warning.
    """
    violations: list[ArchViolation] = []
    for source, target in graph.edges():
        source_layer = layers.get(source)
        target_layer = layers.get(target)
        if source_layer is None or target_layer is None:
            continue
        if policy.may_depend(source_layer, target_layer):
            continue

        upward = policy.rank(target_layer) > policy.rank(source_layer)
        violations.append(
            ArchViolation(
                kind=ViolationKind.LAYER,
                source=source,
                target=target,
                message=(
                    f"Layer violation: {source_layer} layer ({source}) "
                    f"imports from {target_layer} layer ({target})"
                ),
                severity=Severity.ERROR if upward else Severity.WARNING,
                fix=_layer_fix(source_layer, target_layer, upward),
                edges=((source, target),),
            )
        )
    return violations


def _layer_fix(source_layer: str, target_layer: str, upward: bool) -> str:
    if upward:
        return (
            f"Move the shared logic into the {source_layer} layer or below, "
            f"or invert the dependency so {target_layer} depends on {source_layer}"
        )
    return f"Route the dependency through a layer {source_layer} is allowed to use"
