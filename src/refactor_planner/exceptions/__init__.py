"""Exception hierarchy for Refactor Planner."""

from .analysis import AnalysisError, InputValidationError, ModuleReadError, ScanError
from .base import RefactorPlannerError
from .config import (
    ConfigurationError,
    DuplicateAnalyzerError,
    InvalidConfigError,
    InvalidPolicyError,
)

__all__ = [
    "RefactorPlannerError",
    "AnalysisError",
    "ScanError",
    "ModuleReadError",
    "InputValidationError",
    "ConfigurationError",
    "DuplicateAnalyzerError",
    "InvalidConfigError",
    "InvalidPolicyError",
]
