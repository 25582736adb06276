"""RecommendationsAnalyzer: the prioritized to-do list."""

from typing import Optional

from ..orchestration.models import AnalyzerContext, AnalyzerResult, BaseAnalyzer
from ..recommendations import generate_recommendations


class RecommendationsAnalyzer(BaseAnalyzer):
    id = "recommendations"
    depends_on = ("architecture", "domains", "ranking", "migration")

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit

    def should_run(self, ctx: AnalyzerContext) -> bool:
        return "arch_health" in ctx.options and "domains" in ctx.options

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult:
        recs = generate_recommendations(
            ctx.options["arch_health"],
            domains=ctx.options["domains"],
            ranking=ctx.data("ranking"),
            plan=ctx.data("migration"),
            limit=self.limit,
        )
        return AnalyzerResult.success(recs)
