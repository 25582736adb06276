"""Safe refactoring order: SCC condensation grouped into dependency levels.

Modules nobody depends on come first (changing them cannot break anything
else), the most depended-upon modules come last, and each cycle is one
atomic phase.
"""

from typing import Iterable, Mapping

from ..graph.algorithms import condense
from ..graph.models import DependencyGraph
from .classification import round_half_up
from .models import Classification, CouplingMetrics, RefactoringPhase, RiskLevel, SafeRefactoringOrder
from .policy import RankingPolicy


def phase_risk(
    modules: Iterable[str],
    coupling: Mapping[str, CouplingMetrics],
    centrality: Mapping[str, float],
    is_cycle: bool,
    policy: RankingPolicy,
) -> int:
    """``round_half_up(mean(Ca*W1 + centrality*W2) * (cycle multiplier if cycle))``."""
    modules = list(modules)
    if not modules:
        return 0
    total = 0.0
    for module in modules:
        metrics = coupling.get(module)
        ca = metrics.afferent if metrics else 0
        total += ca * policy.afferent_weight + centrality.get(module, 0.0) * policy.centrality_weight
    mean = total / len(modules)
    return round_half_up(mean * (policy.cycle_multiplier if is_cycle else 1.0))


def risk_level(score: float, policy: RankingPolicy) -> RiskLevel:
    if score >= policy.critical_risk:
        return RiskLevel.CRITICAL
    if score >= policy.high_risk:
        return RiskLevel.HIGH
    if score >= policy.medium_risk:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _levels(condensed: dict[int, set[int]]) -> list[list[int]]:
    """Kahn levels over the condensed DAG, starting from unreferenced components."""
    in_degree = {c: 0 for c in condensed}
    for deps in condensed.values():
        for dep in deps:
            in_degree[dep] += 1

    current = sorted(c for c, deg in in_degree.items() if deg == 0)
    levels: list[list[int]] = []
    while current:
        levels.append(current)
        following: set[int] = set()
        for comp in current:
            for dep in condensed[comp]:
                in_degree[dep] -= 1
                if in_degree[dep] == 0:
                    following.add(dep)
        current = sorted(following)
    return levels


def compute_safe_order(
    graph: DependencyGraph,
    coupling: Mapping[str, CouplingMetrics],
    centrality: Mapping[str, float],
    classification: Mapping[str, Classification],
    policy: RankingPolicy,
) -> SafeRefactoringOrder:
    """Group modules into ordered, risk-scored refactoring phases."""
    if not graph.all_nodes:
        return SafeRefactoringOrder()

    components, _, condensed = condense(graph)
    cycles = [tuple(c) for c in components if len(c) > 1]

    phases: list[RefactoringPhase] = []
    component_phase: dict[int, int] = {}
    for level in _levels(condensed):
        scored = []
        for comp in level:
            members = components[comp]
            is_cycle = len(members) > 1
            score = phase_risk(members, coupling, centrality, is_cycle, policy)
            scored.append((score, members[0], comp, is_cycle))

        for score, _, comp, is_cycle in sorted(scored):
            members = components[comp]
            order = len(phases) + 1
            component_phase[comp] = order
            # Earlier phases hold the dependents of this component.
            prerequisites = tuple(
                sorted(
                    component_phase[other]
                    for other, deps in condensed.items()
                    if comp in deps and other in component_phase
                )
            )
            phases.append(
                RefactoringPhase(
                    order=order,
                    modules=tuple(members),
                    category=_category(members, is_cycle, classification),
                    risk_score=score,
                    risk_level=risk_level(score, policy),
                    can_parallelize=not is_cycle and len(members) > 1,
                    prerequisites=prerequisites,
                )
            )

    max_risk = max(p.risk_score for p in phases)
    return SafeRefactoringOrder(
        phases=phases,
        total_modules=len(graph),
        estimated_risk=risk_level(max_risk, policy),
        cycles=cycles,
        leaf_nodes=sorted(m for m, c in classification.items() if c is Classification.LEAF),
        core_nodes=sorted(m for m, c in classification.items() if c is Classification.CORE),
    )


def _category(
    members: list[str], is_cycle: bool, classification: Mapping[str, Classification]
) -> str:
    if is_cycle:
        return "cycle"
    if all(classification.get(m) is Classification.LEAF for m in members):
        return Classification.LEAF.value
    if all(classification.get(m) is Classification.CORE for m in members):
        return Classification.CORE.value
    return Classification.INTERMEDIATE.value
