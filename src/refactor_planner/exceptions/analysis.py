"""Analysis-related exceptions: module scanning, plugin inputs."""

from typing import Optional

from .base import RefactorPlannerError


class AnalysisError(RefactorPlannerError):
    """Base class for analysis-related errors."""

    pass


class ScanError(AnalysisError):
    """Raised when the module source cannot be listed at all."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Cannot scan modules from {source}",
            details={"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason


class ModuleReadError(AnalysisError):
    """Raised when a single module record cannot be read."""

    def __init__(self, module_id: str, reason: str):
        super().__init__(
            f"Cannot read module: {module_id}",
            details={"module": module_id, "reason": reason},
        )
        self.module_id = module_id
        self.reason = reason


class InputValidationError(AnalysisError):
    """Raised when a typed analyzer input has the wrong type."""

    def __init__(self, analyzer_id: str, name: str, expected: str, actual: Optional[str]):
        super().__init__(
            f"Input '{name}' of analyzer '{analyzer_id}' expected {expected}, got {actual}",
            details={"analyzer_id": analyzer_id, "input": name},
        )
        self.analyzer_id = analyzer_id
        self.name = name
        self.expected = expected
        self.actual = actual
