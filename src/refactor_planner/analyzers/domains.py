"""DomainsAnalyzer: domain coherence over the architecture graph."""

from types import MappingProxyType

from ..architecture.domains import analyze_domains
from ..architecture.models import ArchHealth
from ..orchestration.models import AnalyzerContext, AnalyzerResult, BaseAnalyzer, InputSpec


class DomainsAnalyzer(BaseAnalyzer):
    id = "domains"
    consumes = MappingProxyType({"arch_health": InputSpec(source="architecture", type=ArchHealth)})

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult:
        health: ArchHealth = ctx.inputs["arch_health"]
        return AnalyzerResult.success(analyze_domains(health.graph))
