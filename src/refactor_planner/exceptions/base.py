"""Base exception for Refactor Planner."""

from typing import Any, Dict, Optional


class RefactorPlannerError(Exception):
    """Base exception for all Refactor Planner errors.

    ``details`` carries machine-readable context (module id, config key,
    analyzer id) that the CLI reports next to the message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({details_str})"
