"""End-to-end tests for the public API."""

import json
import logging

import pytest

from refactor_planner import AnalyzerStatus, analyze
from refactor_planner.exceptions import ScanError
from refactor_planner.planning import ActionKind, RawAction


@pytest.fixture(autouse=True)
def no_config_files(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)


class TestAnalyze:
    def test_manifest_with_embedded_actions(self, manifest_file):
        run = analyze(manifest_file)
        assert all(r.status is AnalyzerStatus.SUCCESS for r in run.results.values())

        health = run.data("architecture")
        assert health.score == 100.0
        assert len(health.graph) == 4

        plan = run.data("migration")
        assert [a.id for a in plan.actions] == ["create-barrel-1", "merge-1", "delete-1"]
        assert plan.get("delete-1").prerequisite == ("merge-1",)
        assert plan.rollback_points == ["create-barrel-1", "merge-1"]

        ranking = run.data("ranking")
        assert ranking.hotspots[0].path == "src/lib/util"
        assert ranking.safe_order.phases[0].modules == ("src/app/main",)
        assert ranking.safe_order.phases[-1].modules == ("src/lib/util",)

    def test_separate_actions_file(self, manifest_file, tmp_path):
        actions = tmp_path / "actions.json"
        actions.write_text(
            json.dumps([{"kind": "move", "sources": ["src/lib/old"], "target": "src/app/old"}]),
            encoding="utf-8",
        )
        plan = analyze(manifest_file, actions=actions).data("migration")
        assert [a.id for a in plan.actions] == ["move-1"]

    def test_action_objects(self, manifest_file):
        actions = [RawAction(kind=ActionKind.DELETE, sources=("src/app/main",))]
        plan = analyze(manifest_file, actions=actions).data("migration")
        assert [a.id for a in plan.actions] == ["delete-1"]

    def test_source_object(self, layered_source):
        run = analyze(layered_source)
        assert run.data("architecture").score == 70.0
        assert run.data("migration").actions == []

    def test_overrides(self, manifest_file):
        run = analyze(manifest_file, hotspot_count=1, max_recommendations=1)
        assert len(run.data("ranking").hotspots) == 1

    def test_unreadable_manifest(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(ScanError):
            analyze(path)

    def test_logging_follows_configured_verbosity(self, manifest_file, monkeypatch):
        monkeypatch.setenv("REFACTOR_PLANNER_VERBOSITY", "quiet")
        analyze(manifest_file)
        assert logging.getLogger("refactor_planner").level == logging.ERROR
