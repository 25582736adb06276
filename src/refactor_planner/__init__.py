"""
Refactor Planner - dependency-safe restructuring plans for codebases

Builds the internal module dependency graph, reports circular and layer
violations with a health score, ranks modules by centrality and coupling,
and orders proposed restructuring actions into safe phases.
"""

__version__ = "0.1.0"

from .api import analyze, create_default_orchestrator
from .config import PlannerConfig, load_config
from .orchestration import (
    AnalyzerContext,
    AnalyzerResult,
    AnalyzerStatus,
    BaseAnalyzer,
    InputSpec,
    Orchestrator,
    RunResult,
    SkipCause,
)

__all__ = [
    "analyze",  # Main entry point
    "create_default_orchestrator",
    "Orchestrator",  # Advanced usage (custom plugins)
    "AnalyzerContext",
    "AnalyzerResult",
    "AnalyzerStatus",
    "BaseAnalyzer",
    "InputSpec",
    "PlannerConfig",
    "RunResult",
    "SkipCause",
    "load_config",
]
