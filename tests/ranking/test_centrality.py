"""Tests for ranking/centrality.py and ranking/coupling.py."""

import pytest

from refactor_planner.graph import graph_from_mapping
from refactor_planner.ranking import RankingPolicy, compute_centrality, compute_coupling, instability


class TestComputeCentrality:
    def test_empty_graph(self):
        result = compute_centrality(graph_from_mapping({}), RankingPolicy())
        assert result.scores == {}
        assert result.converged

    def test_scores_sum_to_one(self, chain_graph, star_graph, mutual_graph):
        for graph in (chain_graph, star_graph, mutual_graph):
            result = compute_centrality(graph, RankingPolicy())
            assert sum(result.scores.values()) == pytest.approx(1.0)
            assert all(score > 0 for score in result.scores.values())

    def test_depended_upon_modules_rank_higher(self, chain_graph):
        scores = compute_centrality(chain_graph, RankingPolicy()).scores
        assert scores["a"] < scores["b"] < scores["c"] < scores["d"]

    def test_star_core(self, star_graph):
        scores = compute_centrality(star_graph, RankingPolicy()).scores
        assert scores["core"] == pytest.approx(0.88 / 1.68, abs=1e-4)
        assert scores["w"] == pytest.approx(scores["z"])

    def test_symmetric_pair(self, mutual_graph):
        scores = compute_centrality(mutual_graph, RankingPolicy()).scores
        assert scores["A"] == pytest.approx(0.5)
        assert scores["B"] == pytest.approx(0.5)

    def test_single_module(self):
        result = compute_centrality(graph_from_mapping({"solo": []}), RankingPolicy())
        assert result.scores == {"solo": pytest.approx(1.0)}

    def test_converges(self, star_graph):
        result = compute_centrality(star_graph, RankingPolicy())
        assert result.converged
        assert 1 <= result.iterations <= 100

    def test_iteration_cap(self, star_graph):
        result = compute_centrality(star_graph, RankingPolicy(max_iterations=1))
        assert result.iterations == 1
        assert not result.converged
        assert sum(result.scores.values()) == pytest.approx(1.0)

    def test_deterministic(self, star_mapping):
        first = compute_centrality(graph_from_mapping(star_mapping), RankingPolicy()).scores
        second = compute_centrality(
            graph_from_mapping(dict(reversed(list(star_mapping.items())))), RankingPolicy()
        ).scores
        assert first == second


class TestCoupling:
    def test_instability(self):
        assert instability(0, 0) == 0.0
        assert instability(0, 3) == 1.0
        assert instability(3, 1) == 0.25

    def test_star(self, star_graph):
        metrics = compute_coupling(star_graph)
        assert metrics["core"].afferent == 4
        assert metrics["core"].efferent == 0
        assert metrics["core"].instability == 0.0
        assert metrics["w"].instability == 1.0

    def test_risk_score(self, star_graph):
        metrics = compute_coupling(star_graph, {"core": 0.5})
        assert metrics["core"].risk_score == 200.0
        assert metrics["w"].risk_score == 0.0
