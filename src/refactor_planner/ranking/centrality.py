"""Centrality by rank propagation over the import graph.

Each module passes its rank, split evenly, to the modules it imports, so
being depended upon (directly or transitively) raises a module's rank.
Modules that import nothing spread their rank uniformly over the graph.

    r' = (1 - d) / N + d * (M r + dangling(r) / N)

where ``M[j, i] = 1 / out_degree(i)`` for every edge ``i -> j``.
"""

from dataclasses import dataclass

import numpy as np

from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .policy import RankingPolicy

logger = get_logger(__name__)


@dataclass(frozen=True)
class CentralityResult:
    scores: dict[str, float]
    iterations: int
    converged: bool


def compute_centrality(graph: DependencyGraph, policy: RankingPolicy) -> CentralityResult:
    """Power iteration with damping and uniform dangling redistribution.

    Nodes are indexed in sorted order so the same graph always produces the
    same floating point result. The final vector is renormalized to sum to 1.
    """
    nodes = sorted(graph.all_nodes)
    n = len(nodes)
    if n == 0:
        return CentralityResult(scores={}, iterations=0, converged=True)

    index = {node: i for i, node in enumerate(nodes)}
    transition = np.zeros((n, n), dtype=np.float64)
    dangling = np.zeros(n, dtype=bool)

    for node in nodes:
        deps = graph.dependencies(node)
        i = index[node]
        if not deps:
            dangling[i] = True
            continue
        share = 1.0 / len(deps)
        for dep in deps:
            transition[index[dep], i] += share

    d = policy.damping
    rank = np.full(n, 1.0 / n)
    converged = False
    iterations = 0

    for iterations in range(1, policy.max_iterations + 1):
        dangling_mass = rank[dangling].sum()
        new_rank = (1.0 - d) / n + d * (transition @ rank + dangling_mass / n)
        delta = np.abs(new_rank - rank).sum()
        rank = new_rank
        if delta < policy.tolerance:
            converged = True
            break

    total = rank.sum()
    if total > 0:
        rank = rank / total

    if not converged:
        logger.warning(f"Centrality did not converge after {iterations} iterations")
    else:
        logger.debug(f"Centrality converged after {iterations} iterations ({n} modules)")

    scores = {node: float(rank[index[node]]) for node in nodes}
    return CentralityResult(scores=scores, iterations=iterations, converged=converged)
