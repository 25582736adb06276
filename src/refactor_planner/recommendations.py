"""Recommendation synthesis.

Merges architecture violations, hotspots, domain coherence and high-risk
plan actions into one prioritized list. Priorities start as a running
counter (architecture first) and are then pulled forward for
recommendations that touch central, heavily depended-upon modules.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional

from .architecture.domains import COHERENCE_THRESHOLD, DomainInfo
from .architecture.models import ArchHealth, Severity, ViolationKind
from .logging_config import get_logger
from .planning.models import EnhancedMigrationPlan
from .ranking.classification import round_half_up
from .ranking.models import CouplingMetrics, RankingAnalysis, RiskLevel

logger = get_logger(__name__)


@dataclass(frozen=True)
class PriorityEnrichment:
    final_priority: float
    centrality_boost: float
    coupling_boost: float
    reason: str


@dataclass(frozen=True)
class Recommendation:
    id: str
    priority: float
    category: str  # architecture | hotspot | structure | migration
    title: str
    description: str
    expected_improvement: int
    effort: str  # trivial | low | medium | high
    affected_files: tuple[str, ...] = ()
    auto_fixable: bool = False
    priority_reason: str = ""


def enrich_priority(
    priority: float,
    affected_files: Iterable[str],
    centrality: Mapping[str, float],
    coupling: Mapping[str, CouplingMetrics],
) -> PriorityEnrichment:
    """Lower (= more urgent) priority for recommendations on central modules.

    ``final = max(1, priority - c/100 - k/100)`` where
    ``c = round_half_up(avg_centrality * 500)`` and
    ``k = round_half_up(avg_Ca * 0.3 * 100)``, then rounded half-up to one
    decimal. Files that are not modules of the graph are ignored; with no
    matches the priority is unchanged.
    """
    files = list(affected_files)
    if not files:
        return PriorityEnrichment(priority, 0.0, 0.0, "no affected files")

    matched = [f for f in files if f in centrality]
    if not matched:
        return PriorityEnrichment(priority, 0.0, 0.0, "no matching modules")

    avg_centrality = sum(centrality[f] for f in matched) / len(matched)
    avg_ca = sum(coupling[f].afferent for f in matched if f in coupling) / len(matched)

    centrality_boost = -round_half_up(avg_centrality * 500) / 100
    coupling_boost = -round_half_up(avg_ca * 0.3 * 100) / 100
    final = max(1.0, priority + centrality_boost + coupling_boost)

    reasons = []
    if centrality_boost < -1:
        reasons.append(f"high centrality (boost: {centrality_boost})")
    if coupling_boost < -0.5:
        reasons.append(f"high coupling (Ca boost: {coupling_boost})")

    return PriorityEnrichment(
        final_priority=round_half_up(final * 10) / 10,
        centrality_boost=centrality_boost,
        coupling_boost=coupling_boost,
        reason=", ".join(reasons) if reasons else "standard priority",
    )


@dataclass
class _Counter:
    value: int = 1

    def next(self) -> int:
        current = self.value
        self.value += 1
        return current


def _architecture(health: ArchHealth, counter: _Counter) -> list[Recommendation]:
    recs = []
    for violation in health.violations:
        if violation.severity is not Severity.ERROR:
            continue
        n = counter.next()
        title = (
            "Fix circular dependency"
            if violation.kind is ViolationKind.CIRCULAR
            else "Fix layer violation"
        )
        recs.append(
            Recommendation(
                id=f"arch-{n}",
                priority=n,
                category="architecture",
                title=title,
                description=violation.message,
                expected_improvement=15,
                effort="high",
                affected_files=violation.modules,
            )
        )
    return recs


def _hotspots(ranking: RankingAnalysis, counter: _Counter) -> list[Recommendation]:
    recs = []
    for hotspot in ranking.hotspots:
        if hotspot.risk_level not in (RiskLevel.CRITICAL, RiskLevel.HIGH):
            continue
        n = counter.next()
        recs.append(
            Recommendation(
                id=f"hotspot-{n}",
                priority=n,
                category="hotspot",
                title=f"Stabilize hotspot: {hotspot.path}",
                description=f"{hotspot.reason}; change with care and add tests first",
                expected_improvement=10 if hotspot.risk_level is RiskLevel.CRITICAL else 5,
                effort="medium",
                affected_files=(hotspot.path,),
            )
        )
    return recs


def _domains(domains: Iterable[DomainInfo], counter: _Counter) -> list[Recommendation]:
    recs = []
    for domain in domains:
        if domain.coherence >= COHERENCE_THRESHOLD:
            continue
        n = counter.next()
        recs.append(
            Recommendation(
                id=f"domain-{n}",
                priority=n,
                category="structure",
                title=f"Improve domain coherence: {domain.name}",
                description=domain.suggestion or f"Move {len(domain.should_move)} misplaced modules",
                expected_improvement=5,
                effort="medium",
                affected_files=tuple(m.module for m in domain.should_move),
                auto_fixable=bool(domain.should_move),
            )
        )
    return recs


def _migration(plan: EnhancedMigrationPlan, counter: _Counter) -> list[Recommendation]:
    recs = []
    for action in plan.actions:
        if action.risk_level not in (RiskLevel.HIGH, RiskLevel.CRITICAL):
            continue
        n = counter.next()
        target = f" into {action.target}" if action.target else ""
        recs.append(
            Recommendation(
                id=f"migration-{n}",
                priority=n,
                category="migration",
                title=f"Review {action.risk_level.value}-risk {action.kind.value}: {action.id}",
                description=(
                    f"{action.kind.value} {', '.join(action.sources)}{target}"
                    + (f" ({action.reason})" if action.reason else "")
                ),
                expected_improvement=3,
                effort="low",
                affected_files=action.sources,
            )
        )
    return recs


def generate_recommendations(
    arch_health: ArchHealth,
    domains: Iterable[DomainInfo] = (),
    ranking: Optional[RankingAnalysis] = None,
    plan: Optional[EnhancedMigrationPlan] = None,
    limit: Optional[int] = None,
) -> list[Recommendation]:
    """Prioritized recommendations, most urgent first."""
    counter = _Counter()
    recs = _architecture(arch_health, counter)
    if ranking is not None:
        recs.extend(_hotspots(ranking, counter))
    recs.extend(_domains(domains, counter))
    if plan is not None:
        recs.extend(_migration(plan, counter))

    if ranking is not None:
        enriched = []
        for rec in recs:
            boost = enrich_priority(
                rec.priority, rec.affected_files, ranking.centrality, ranking.coupling
            )
            enriched.append(
                replace(rec, priority=boost.final_priority, priority_reason=boost.reason)
            )
        recs = enriched

    recs.sort(key=lambda r: (r.priority, _id_key(r.id)))
    logger.debug(f"Synthesized {len(recs)} recommendation(s)")
    return recs[:limit] if limit is not None else recs


def _id_key(rec_id: str) -> tuple[int, str]:
    # "arch-10" sorts after "arch-9"
    prefix, _, number = rec_id.rpartition("-")
    return (int(number), prefix) if number.isdigit() else (0, rec_id)


def total_improvement(recommendations: Iterable[Recommendation]) -> int:
    return sum(r.expected_improvement for r in recommendations)


def group_by_category(recommendations: Iterable[Recommendation]) -> dict[str, list[Recommendation]]:
    grouped: dict[str, list[Recommendation]] = {}
    for rec in recommendations:
        grouped.setdefault(rec.category, []).append(rec)
    return grouped
