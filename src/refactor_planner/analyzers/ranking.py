"""RankingAnalyzer: centrality, coupling, hotspots and safe order.

Reads ``dependency_graph`` from the options bag, so on a plain run it
declines and is picked up by the enrichment pass once the architecture
analyzer has produced a graph.
"""

from collections.abc import Mapping
from typing import Optional

from ..graph.builder import graph_from_mapping
from ..graph.models import DependencyGraph
from ..orchestration.models import AnalyzerContext, AnalyzerResult, BaseAnalyzer
from ..ranking.engine import analyze_ranking
from ..ranking.policy import RankingPolicy


class RankingAnalyzer(BaseAnalyzer):
    id = "ranking"
    depends_on = ("architecture",)

    def __init__(self, policy: Optional[RankingPolicy] = None):
        self.policy = policy or RankingPolicy()

    def should_run(self, ctx: AnalyzerContext) -> bool:
        return bool(ctx.options.get("dependency_graph"))

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult:
        graph = ctx.options["dependency_graph"]
        if isinstance(graph, Mapping):
            graph = graph_from_mapping(graph)
        if not isinstance(graph, DependencyGraph):
            return AnalyzerResult.error(
                f"dependency_graph must be a DependencyGraph or mapping, got {type(graph).__name__}"
            )
        return AnalyzerResult.success(analyze_ranking(graph, self.policy))
