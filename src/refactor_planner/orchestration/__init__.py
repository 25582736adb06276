"""Execution orchestrator for analysis plugins."""

from .enrichment import DEFAULT_ENRICHMENT_RULES, DEFAULT_EXTRACTORS, EnrichmentRule
from .models import (
    Analyzer,
    AnalyzerContext,
    AnalyzerResult,
    AnalyzerStatus,
    BaseAnalyzer,
    InputSpec,
    SkipCause,
)
from .orchestrator import Orchestrator, RunResult, RunStats
from .toposort import resolve_analyzer_order

__all__ = [
    "DEFAULT_ENRICHMENT_RULES",
    "DEFAULT_EXTRACTORS",
    "Analyzer",
    "AnalyzerContext",
    "AnalyzerResult",
    "AnalyzerStatus",
    "BaseAnalyzer",
    "EnrichmentRule",
    "InputSpec",
    "Orchestrator",
    "RunResult",
    "RunStats",
    "SkipCause",
    "resolve_analyzer_order",
]
