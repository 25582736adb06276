"""Refactoring plan builder.

Orders raw actions by a fixed precedence (barrels, moves, merges,
deletes), wires prerequisites between them, marks rollback points and
assigns each action a risk level.
"""

from collections import defaultdict
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..ranking.models import RankingAnalysis, RiskLevel
from ..ranking.phases import phase_risk, risk_level
from ..ranking.policy import RankingPolicy
from .models import (
    KIND_PRECEDENCE,
    ActionKind,
    EnhancedMigrationPlan,
    ExecutionStep,
    RawAction,
    RefactoringAction,
    RiskSummary,
)

logger = get_logger(__name__)

DEFAULT_RISK = {
    ActionKind.CREATE_BARREL: RiskLevel.LOW,
    ActionKind.MOVE: RiskLevel.MEDIUM,
    ActionKind.MERGE: RiskLevel.MEDIUM,
    ActionKind.DELETE: RiskLevel.HIGH,
}

PARALLEL_KINDS = frozenset({ActionKind.CREATE_BARREL, ActionKind.DELETE})
ROLLBACK_KINDS = frozenset({ActionKind.CREATE_BARREL, ActionKind.MERGE})


def action_risk(
    action: RawAction,
    ranking: Optional[RankingAnalysis] = None,
    policy: Optional[RankingPolicy] = None,
) -> RiskLevel:
    """Risk of an action from the ranking of its sources, or a per-kind default."""
    if ranking is None:
        return DEFAULT_RISK[action.kind]
    known = [s for s in action.sources if s in ranking.centrality]
    if not known:
        return DEFAULT_RISK[action.kind]
    policy = policy or RankingPolicy()
    in_cycle = any(s in ranking.in_cycle for s in known)
    score = phase_risk(known, ranking.coupling, ranking.centrality, in_cycle, policy)
    return risk_level(score, policy)


def build_plan(
    actions: Iterable[RawAction],
    ranking: Optional[RankingAnalysis] = None,
    policy: Optional[RankingPolicy] = None,
) -> EnhancedMigrationPlan:
    """Turn unordered raw actions into an executable plan.

    Prerequisites: barrels need nothing; each move waits for the previous
    move; each merge waits for the last move; each delete waits for every
    merge. A rollback point follows every barrel and every merge.
    """
    by_kind: dict[ActionKind, list[RawAction]] = defaultdict(list)
    for action in actions:
        by_kind[action.kind].append(action)

    planned: list[RefactoringAction] = []
    move_ids: list[str] = []
    merge_ids: list[str] = []

    for kind in KIND_PRECEDENCE:
        for n, raw in enumerate(by_kind.get(kind, []), start=1):
            action_id = f"{kind.value}-{n}"
            if kind is ActionKind.MOVE:
                prerequisite = tuple(move_ids[-1:])
                move_ids.append(action_id)
            elif kind is ActionKind.MERGE:
                prerequisite = tuple(move_ids[-1:])
                merge_ids.append(action_id)
            elif kind is ActionKind.DELETE:
                prerequisite = tuple(merge_ids)
            else:
                prerequisite = ()

            planned.append(
                RefactoringAction(
                    id=action_id,
                    kind=kind,
                    sources=raw.sources,
                    target=raw.target,
                    order=len(planned) + 1,
                    prerequisite=prerequisite,
                    risk_level=action_risk(raw, ranking, policy),
                    reason=raw.reason,
                    can_parallelize=kind in PARALLEL_KINDS,
                    rollback_point=kind in ROLLBACK_KINDS,
                    affected_imports=raw.affected_imports,
                )
            )

    plan = EnhancedMigrationPlan(
        actions=planned,
        execution_order=[
            ExecutionStep(step=a.order, action_id=a.id, can_parallelize=a.can_parallelize)
            for a in planned
        ],
        rollback_points=[a.id for a in planned if a.rollback_point],
        files_affected=_files_affected(planned),
        imports_to_update=sum(len(a.affected_imports) for a in planned),
        risk_summary=_risk_summary(planned),
    )
    logger.debug(
        f"Planned {len(planned)} action(s) with {len(plan.rollback_points)} rollback point(s)"
    )
    return plan


def _files_affected(actions: list[RefactoringAction]) -> int:
    files: set[str] = set()
    for action in actions:
        files.update(action.sources)
        files.update(action.affected_imports)
        if action.target:
            files.add(action.target)
    return len(files)


def _risk_summary(actions: list[RefactoringAction]) -> RiskSummary:
    summary = RiskSummary()
    for action in actions:
        if action.risk_level is RiskLevel.LOW:
            summary.safe += 1
        elif action.risk_level is RiskLevel.MEDIUM:
            summary.medium += 1
        else:
            summary.risky += 1
    return summary
