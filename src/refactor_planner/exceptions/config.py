"""Configuration exceptions: plugin registration, policies, settings."""

from typing import Any

from .base import RefactorPlannerError


class ConfigurationError(RefactorPlannerError):
    """Base class for configuration-related errors.

    Configuration errors are fatal: they are raised while the run is being
    set up and are never converted into analyzer results.
    """

    pass


class DuplicateAnalyzerError(ConfigurationError):
    """Raised when two analyzers are registered under the same id."""

    def __init__(self, analyzer_id: str):
        super().__init__(
            f"Analyzer '{analyzer_id}' is already registered",
            details={"analyzer_id": analyzer_id},
        )
        self.analyzer_id = analyzer_id


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidPolicyError(ConfigurationError):
    """Raised when a layer policy is internally inconsistent."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid layer policy: {reason}", details={"reason": reason})
        self.reason = reason
