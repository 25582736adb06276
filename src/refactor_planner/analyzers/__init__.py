"""Built-in analyzers wiring the engines into the orchestrator."""

from typing import TYPE_CHECKING, Iterable, Optional

from .architecture import ArchitectureAnalyzer
from .domains import DomainsAnalyzer
from .migration import MigrationAnalyzer
from .ranking import RankingAnalyzer
from .recommendations import RecommendationsAnalyzer

if TYPE_CHECKING:
    from ..config import PlannerConfig
    from ..planning.models import RawAction
    from ..scanning.base import ModuleSource


def get_default_analyzers(
    config: "PlannerConfig",
    source: Optional["ModuleSource"] = None,
    actions: Optional[Iterable["RawAction"]] = None,
) -> list:
    """Return the built-in analyzers in registration order.

    1. ArchitectureAnalyzer: graph, violations, health score
    2. DomainsAnalyzer: typed input from architecture
    3. RankingAnalyzer: needs dependency_graph (enrichment pass)
    4. MigrationAnalyzer: needs arch_health (enrichment pass)
    5. RecommendationsAnalyzer: needs arch_health and domains (enrichment pass)
    """
    return [
        ArchitectureAnalyzer(source, config.layers, config.health),
        DomainsAnalyzer(),
        RankingAnalyzer(config.ranking),
        MigrationAnalyzer(actions, config.ranking),
        RecommendationsAnalyzer(limit=config.max_recommendations),
    ]


__all__ = [
    "ArchitectureAnalyzer",
    "DomainsAnalyzer",
    "MigrationAnalyzer",
    "RankingAnalyzer",
    "RecommendationsAnalyzer",
    "get_default_analyzers",
]
