"""Refactoring plan builder."""

from .builder import DEFAULT_RISK, action_risk, build_plan
from .models import (
    KIND_PRECEDENCE,
    ActionKind,
    EnhancedMigrationPlan,
    ExecutionStep,
    RawAction,
    RefactoringAction,
    RiskSummary,
)

__all__ = [
    "DEFAULT_RISK",
    "KIND_PRECEDENCE",
    "ActionKind",
    "EnhancedMigrationPlan",
    "ExecutionStep",
    "RawAction",
    "RefactoringAction",
    "RiskSummary",
    "action_risk",
    "build_plan",
]
