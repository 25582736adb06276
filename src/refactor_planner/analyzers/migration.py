"""MigrationAnalyzer: orders raw actions into an executable plan."""

from typing import Iterable, Optional

from ..orchestration.models import AnalyzerContext, AnalyzerResult, BaseAnalyzer
from ..planning.builder import build_plan
from ..planning.models import RawAction
from ..ranking.policy import RankingPolicy


class MigrationAnalyzer(BaseAnalyzer):
    """Plans ``actions`` (constructor or ``options["actions"]``).

    Runs once ``arch_health`` is in the options; uses the ranking result,
    when there is one, to score action risk.
    """

    id = "migration"
    depends_on = ("architecture", "ranking")

    def __init__(
        self,
        actions: Optional[Iterable[RawAction]] = None,
        policy: Optional[RankingPolicy] = None,
    ):
        self.actions = list(actions) if actions is not None else []
        self.policy = policy or RankingPolicy()

    def should_run(self, ctx: AnalyzerContext) -> bool:
        return "arch_health" in ctx.options

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult:
        actions = ctx.options.get("actions", self.actions)
        plan = build_plan(actions, ranking=ctx.data("ranking"), policy=self.policy)
        return AnalyzerResult.success(plan)
