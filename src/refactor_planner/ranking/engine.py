"""Ranking engine: runs centrality, coupling, classification and ordering."""

import time
from typing import Optional

from ..graph.algorithms import find_cycles
from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .centrality import compute_centrality
from .classification import classify_modules
from .coupling import compute_coupling
from .hotspots import find_hotspots
from .models import RankingAnalysis, RankingStats
from .phases import compute_safe_order
from .policy import RankingPolicy

logger = get_logger(__name__)


def analyze_ranking(
    graph: DependencyGraph, policy: Optional[RankingPolicy] = None
) -> RankingAnalysis:
    """Compute every ranking artifact for one graph snapshot."""
    policy = policy or RankingPolicy()
    start = time.time()

    centrality = compute_centrality(graph, policy)
    coupling = compute_coupling(graph, centrality.scores)
    classification = classify_modules(coupling, centrality.scores, policy)
    hotspots = find_hotspots(
        graph,
        centrality.scores,
        coupling,
        count=policy.hotspot_count,
        precision=policy.precision,
    )
    safe_order = compute_safe_order(graph, coupling, centrality.scores, classification, policy)

    in_cycle = frozenset(m for cycle in find_cycles(graph) for m in cycle.nodes)
    stats = RankingStats(
        node_count=len(graph),
        edge_count=graph.edge_count,
        iterations=centrality.iterations,
        converged=centrality.converged,
        cycle_count=len(safe_order.cycles),
        duration_ms=(time.time() - start) * 1000,
    )
    logger.debug(
        f"Ranked {stats.node_count} modules: {len(hotspots)} hotspots, "
        f"{len(safe_order.phases)} phases, {stats.cycle_count} cycles"
    )

    return RankingAnalysis(
        centrality=centrality.scores,
        coupling=coupling,
        classification=classification,
        hotspots=hotspots,
        safe_order=safe_order,
        stats=stats,
        in_cycle=in_cycle,
    )
