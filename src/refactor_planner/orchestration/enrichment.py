"""Second-pass enrichment rules.

Some plugins read their inputs from the options bag instead of declaring
typed inputs. On the first pass those options are usually absent, so the
plugin declines. After the pass, values are extracted from successful
results, merged into the options, and the declining plugins get one more
chance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .models import AnalyzerResult

Extractor = Callable[[Mapping[str, AnalyzerResult]], Optional[Any]]


@dataclass(frozen=True)
class EnrichmentRule:
    """Re-run ``analyzer_id`` once every key in ``needs`` is available."""

    analyzer_id: str
    needs: tuple[str, ...]


def _data(results: Mapping[str, AnalyzerResult], analyzer_id: str) -> Any:
    result = results.get(analyzer_id)
    return result.data if result is not None and result.ok else None


def extract_arch_health(results: Mapping[str, AnalyzerResult]) -> Any:
    return _data(results, "architecture")


def extract_dependency_graph(results: Mapping[str, AnalyzerResult]) -> Any:
    """The graph inside the architecture result, only when it has modules."""
    graph = getattr(extract_arch_health(results), "graph", None)
    if graph is None or len(graph) == 0:
        return None
    return graph


def extract_domains(results: Mapping[str, AnalyzerResult]) -> Any:
    return _data(results, "domains")


DEFAULT_ENRICHMENT_RULES: tuple[EnrichmentRule, ...] = (
    EnrichmentRule("ranking", ("dependency_graph",)),
    EnrichmentRule("migration", ("arch_health",)),
    EnrichmentRule("recommendations", ("arch_health", "domains")),
)

DEFAULT_EXTRACTORS: dict[str, Extractor] = {
    "arch_health": extract_arch_health,
    "dependency_graph": extract_dependency_graph,
    "domains": extract_domains,
}


def extract_options(
    results: Mapping[str, AnalyzerResult], extractors: Mapping[str, Extractor]
) -> dict[str, Any]:
    """Run every extractor; keys whose extractor yields None are left out."""
    extracted = {}
    for key, extractor in extractors.items():
        value = extractor(results)
        if value is not None:
            extracted[key] = value
    return extracted
