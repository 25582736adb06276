"""Refactoring action and migration plan models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..ranking.models import RiskLevel


class ActionKind(Enum):
    """Restructuring operations, in the order a plan applies them."""

    CREATE_BARREL = "create-barrel"
    MOVE = "move"
    MERGE = "merge"
    DELETE = "delete"


# Fixed precedence: barrels give stable import points before anything moves.
KIND_PRECEDENCE = (ActionKind.CREATE_BARREL, ActionKind.MOVE, ActionKind.MERGE, ActionKind.DELETE)


@dataclass(frozen=True)
class RawAction:
    """An unordered action proposed by an external detector."""

    kind: ActionKind
    sources: tuple[str, ...]
    target: Optional[str] = None
    reason: str = ""
    affected_imports: tuple[str, ...] = ()  # modules whose imports must be rewritten


@dataclass(frozen=True)
class RefactoringAction:
    """A raw action placed in the plan."""

    id: str  # "<kind>-<n>"
    kind: ActionKind
    sources: tuple[str, ...]
    order: int
    risk_level: RiskLevel
    can_parallelize: bool
    rollback_point: bool
    target: Optional[str] = None
    prerequisite: tuple[str, ...] = ()
    reason: str = ""
    affected_imports: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExecutionStep:
    step: int
    action_id: str
    can_parallelize: bool


@dataclass
class RiskSummary:
    safe: int = 0  # low
    medium: int = 0
    risky: int = 0  # high and critical


@dataclass
class EnhancedMigrationPlan:
    """Ordered, risk-scored plan. Pure data; nothing is applied."""

    actions: list[RefactoringAction] = field(default_factory=list)
    execution_order: list[ExecutionStep] = field(default_factory=list)
    rollback_points: list[str] = field(default_factory=list)
    files_affected: int = 0
    imports_to_update: int = 0
    risk_summary: RiskSummary = field(default_factory=RiskSummary)

    def get(self, action_id: str) -> Optional[RefactoringAction]:
        for action in self.actions:
            if action.id == action_id:
                return action
        return None
