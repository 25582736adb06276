"""Tests for recommendations.py."""

import pytest

from refactor_planner.architecture import analyze_architecture, analyze_domains
from refactor_planner.planning import ActionKind, RawAction, build_plan
from refactor_planner.ranking import CouplingMetrics, analyze_ranking
from refactor_planner.recommendations import (
    enrich_priority,
    generate_recommendations,
    group_by_category,
    total_improvement,
)
from refactor_planner.scanning import InMemorySource


def _coupling(module, afferent):
    return CouplingMetrics(path=module, afferent=afferent, efferent=0, instability=0.0)


class TestEnrichPriority:
    def test_no_files(self):
        result = enrich_priority(5, [], {}, {})
        assert result.final_priority == 5
        assert result.reason == "no affected files"

    def test_no_matching_modules(self):
        result = enrich_priority(5, ["README.md"], {"a": 0.5}, {})
        assert result.final_priority == 5
        assert result.reason == "no matching modules"

    def test_boosts(self):
        result = enrich_priority(5, ["core"], {"core": 0.5}, {"core": _coupling("core", 4)})
        assert result.centrality_boost == -2.5
        assert result.coupling_boost == -1.2
        assert result.final_priority == 1.3
        assert result.reason == "high centrality (boost: -2.5), high coupling (Ca boost: -1.2)"

    def test_boost_half_rounds_up(self):
        result = enrich_priority(10, ["core"], {"core": 0.125}, {"core": _coupling("core", 0)})
        assert result.centrality_boost == -0.63
        assert result.final_priority == 9.4

    def test_floor_at_one(self):
        result = enrich_priority(2, ["core"], {"core": 0.9}, {"core": _coupling("core", 10)})
        assert result.final_priority == 1.0

    def test_unknown_files_ignored_in_average(self):
        centrality = {"a": 0.1}
        coupling = {"a": _coupling("a", 1)}
        alone = enrich_priority(10, ["a"], centrality, coupling)
        mixed = enrich_priority(10, ["a", "docs/x.md"], centrality, coupling)
        assert alone == mixed
        assert alone.reason == "standard priority"


class TestGenerateRecommendations:
    @pytest.fixture
    def health(self, layered_source):
        return analyze_architecture(layered_source)

    def test_order_without_ranking(self, health):
        recs = generate_recommendations(health, analyze_domains(health.graph))
        assert [r.id for r in recs] == ["arch-1", "arch-2", "domain-3", "domain-4", "domain-5"]
        assert [r.priority for r in recs] == [1, 2, 3, 4, 5]
        assert recs[0].title == "Fix circular dependency"
        assert recs[1].title == "Fix layer violation"
        assert recs[0].affected_files == ("src/domain/account", "src/domain/user")

    def test_domain_recommendations(self, health):
        recs = generate_recommendations(health, analyze_domains(health.graph))
        core = recs[2]
        assert core.category == "structure"
        assert core.affected_files == ("src/core/log",)
        assert core.auto_fixable
        assert not recs[3].auto_fixable

    def test_limit(self, health):
        recs = generate_recommendations(health, analyze_domains(health.graph), limit=2)
        assert [r.id for r in recs] == ["arch-1", "arch-2"]

    def test_ranking_pulls_central_work_forward(self, health):
        ranking = analyze_ranking(health.graph)
        recs = generate_recommendations(health, analyze_domains(health.graph), ranking=ranking)
        priorities = [r.priority for r in recs]
        assert priorities == sorted(priorities)
        assert all(r.priority >= 1 for r in recs)
        assert all(r.priority_reason for r in recs)
        # Already at the floor; ties break on the numeric id
        assert recs[0].id == "arch-1"

    def test_high_risk_actions(self):
        health = analyze_architecture(InMemorySource.from_mapping({"a": ["b"], "b": []}))
        plan = build_plan([RawAction(kind=ActionKind.DELETE, sources=("a",), reason="unused")])
        (rec,) = generate_recommendations(health, plan=plan)
        assert rec.id == "migration-1"
        assert rec.category == "migration"
        assert rec.title == "Review high-risk delete: delete-1"
        assert rec.description == "delete a (unused)"

    def test_clean_project(self):
        health = analyze_architecture(InMemorySource.from_mapping({"src/app/a": ["src/app/b"]}))
        assert generate_recommendations(health, analyze_domains(health.graph)) == []


class TestHelpers:
    def test_total_and_grouping(self, layered_source):
        health = analyze_architecture(layered_source)
        recs = generate_recommendations(health, analyze_domains(health.graph))
        assert total_improvement(recs) == 45
        grouped = group_by_category(recs)
        assert sorted(grouped) == ["architecture", "structure"]
        assert len(grouped["structure"]) == 3
