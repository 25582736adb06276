"""Afferent/efferent coupling and instability."""

from typing import Mapping, Optional

from ..graph.models import DependencyGraph
from .models import CouplingMetrics


def instability(afferent: int, efferent: int) -> float:
    """``Ce / (Ca + Ce)``; an isolated module is stable (0.0)."""
    total = afferent + efferent
    return efferent / total if total else 0.0


def compute_coupling(
    graph: DependencyGraph, centrality: Optional[Mapping[str, float]] = None
) -> dict[str, CouplingMetrics]:
    centrality = centrality or {}
    metrics: dict[str, CouplingMetrics] = {}
    for node in sorted(graph.all_nodes):
        ca = len(graph.dependents(node))
        ce = len(graph.dependencies(node))
        metrics[node] = CouplingMetrics(
            path=node,
            afferent=ca,
            efferent=ce,
            instability=instability(ca, ce),
            risk_score=round(centrality.get(node, 0.0) * ca * 100, 2),
        )
    return metrics
