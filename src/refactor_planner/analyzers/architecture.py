"""ArchitectureAnalyzer: builds the dependency graph and scores it."""

from typing import Optional

from ..architecture.health import analyze_architecture
from ..architecture.policy import HealthPolicy, LayerPolicy
from ..exceptions import ScanError
from ..logging_config import get_logger
from ..orchestration.models import AnalyzerContext, AnalyzerResult, BaseAnalyzer
from ..scanning.base import ModuleSource

logger = get_logger(__name__)


class ArchitectureAnalyzer(BaseAnalyzer):
    """Reads modules from a source (constructor or ``options["source"]``)."""

    id = "architecture"

    def __init__(
        self,
        source: Optional[ModuleSource] = None,
        layer_policy: Optional[LayerPolicy] = None,
        health_policy: Optional[HealthPolicy] = None,
    ):
        self.source = source
        self.layer_policy = layer_policy or LayerPolicy()
        self.health_policy = health_policy or HealthPolicy()

    def _source(self, ctx: AnalyzerContext) -> Optional[ModuleSource]:
        return ctx.options.get("source", self.source)

    def should_run(self, ctx: AnalyzerContext) -> bool:
        return self._source(ctx) is not None

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult:
        source = self._source(ctx)
        try:
            health = analyze_architecture(source, self.layer_policy, self.health_policy)
        except ScanError as e:
            return AnalyzerResult.error(str(e))

        logger.debug(
            f"Architecture: score {health.score:.0f}, {len(health.violations)} violation(s), "
            f"{len(health.skipped_modules)} skipped module(s)"
        )
        return AnalyzerResult.success(health)
