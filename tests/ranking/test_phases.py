"""Tests for ranking/phases.py and ranking/engine.py."""

import pytest

from refactor_planner.graph import graph_from_mapping
from refactor_planner.ranking import (
    CouplingMetrics,
    RankingPolicy,
    RiskLevel,
    analyze_ranking,
    phase_risk,
    risk_level,
)


class TestPhaseRisk:
    def test_formula(self):
        coupling = {"m": CouplingMetrics(path="m", afferent=2, efferent=0, instability=0.0)}
        policy = RankingPolicy()
        assert phase_risk(["m"], coupling, {"m": 0.1}, False, policy) == 30
        assert phase_risk(["m"], coupling, {"m": 0.1}, True, policy) == 45

    def test_empty(self):
        assert phase_risk([], {}, {}, False, RankingPolicy()) == 0

    def test_half_rounds_up(self):
        assert phase_risk(["m"], {}, {"m": 0.125}, False, RankingPolicy()) == 13

    def test_risk_levels(self):
        policy = RankingPolicy()
        assert risk_level(9, policy) is RiskLevel.LOW
        assert risk_level(10, policy) is RiskLevel.MEDIUM
        assert risk_level(30, policy) is RiskLevel.HIGH
        assert risk_level(50, policy) is RiskLevel.CRITICAL


class TestSafeOrder:
    def test_chain_runs_from_dependents_to_dependencies(self, chain_graph):
        order = analyze_ranking(chain_graph).safe_order
        assert [p.modules for p in order.phases] == [("a",), ("b",), ("c",), ("d",)]
        assert [p.prerequisites for p in order.phases] == [(), (1,), (2,), (3,)]
        assert order.phases[0].category == "leaf"
        assert order.total_modules == 4

    def test_star(self, star_graph):
        order = analyze_ranking(star_graph).safe_order
        assert [p.modules for p in order.phases] == [("w",), ("x",), ("y",), ("z",), ("core",)]
        core_phase = order.phases[-1]
        assert core_phase.prerequisites == (1, 2, 3, 4)
        assert core_phase.category == "core"
        assert core_phase.risk_level is RiskLevel.CRITICAL
        assert order.phases[0].risk_score == 12
        assert order.estimated_risk is RiskLevel.CRITICAL
        assert order.leaf_nodes == ["w", "x", "y", "z"]
        assert order.core_nodes == ["core"]

    def test_cycle_is_one_phase(self, mutual_graph):
        order = analyze_ranking(mutual_graph).safe_order
        (phase,) = order.phases
        assert phase.modules == ("A", "B")
        assert phase.is_cycle
        assert not phase.can_parallelize
        assert phase.prerequisites == ()
        # (Ca*10 + 0.5*100) * 1.5
        assert phase.risk_score == 90
        assert order.cycles == [("A", "B")]

    def test_every_module_in_exactly_one_phase(self):
        graph = graph_from_mapping(
            {"app": ["svc", "util"], "svc": ["repo", "util"], "repo": ["svc"], "util": []}
        )
        order = analyze_ranking(graph).safe_order
        placed = [m for p in order.phases for m in p.modules]
        assert sorted(placed) == sorted(graph.all_nodes)
        assert len(placed) == len(set(placed))

    def test_phase_orders_respect_dependencies(self):
        graph = graph_from_mapping(
            {"app": ["svc", "util"], "svc": ["repo", "util"], "repo": ["svc"], "util": []}
        )
        order = analyze_ranking(graph).safe_order
        phase_of = {m: p.order for p in order.phases for m in p.modules}
        for src, tgt in graph.edges():
            if phase_of[src] != phase_of[tgt]:
                assert phase_of[src] < phase_of[tgt]
        cycle_phase = next(p for p in order.phases if p.is_cycle)
        assert cycle_phase.modules == ("repo", "svc")
        assert cycle_phase.prerequisites == (phase_of["app"],)

    def test_empty_graph(self):
        analysis = analyze_ranking(graph_from_mapping({}))
        assert analysis.safe_order.phases == []
        assert analysis.safe_order.estimated_risk is RiskLevel.LOW
        assert analysis.hotspots == []


class TestAnalyzeRanking:
    def test_stats(self, mutual_graph):
        analysis = analyze_ranking(mutual_graph)
        assert analysis.stats.node_count == 2
        assert analysis.stats.edge_count == 2
        assert analysis.stats.cycle_count == 1
        assert analysis.stats.converged
        assert analysis.in_cycle == frozenset({"A", "B"})

    def test_afferent_lookup(self, star_graph):
        analysis = analyze_ranking(star_graph)
        assert analysis.afferent("core") == 4
        assert analysis.afferent("unknown") == 0


class TestRankingPolicy:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"leaf_percentile": 120},
            {"leaf_percentile": 90, "core_percentile": 80},
            {"cycle_multiplier": 0.5},
            {"medium_risk": 40, "high_risk": 30},
            {"damping": 1.0},
            {"max_iterations": 0},
            {"tolerance": 0},
            {"hotspot_count": -1},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RankingPolicy(**kwargs)
