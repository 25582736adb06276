"""Tests for architecture/policy.py and architecture/layers.py."""

import logging

import pytest

from refactor_planner.architecture import (
    HealthPolicy,
    LayerPolicy,
    Severity,
    ViolationKind,
    assign_layers,
    detect_layer_violations,
)
from refactor_planner.exceptions import InvalidPolicyError
from refactor_planner.graph import graph_from_mapping


class TestLayerPolicy:
    def test_default_allows_self_and_lower(self):
        policy = LayerPolicy()
        assert policy.layers == ("core", "domain", "integration", "ui")
        assert policy.may_depend("ui", "core")
        assert policy.may_depend("domain", "domain")
        assert not policy.may_depend("core", "domain")

    def test_explicit_allowed_always_includes_self(self):
        policy = LayerPolicy(layers=("a", "b"), allowed={"b": ["a"]})
        assert policy.allowed["b"] == frozenset({"a", "b"})

    def test_empty_layers_rejected(self):
        with pytest.raises(InvalidPolicyError):
            LayerPolicy(layers=())

    def test_duplicate_layers_rejected(self):
        with pytest.raises(InvalidPolicyError):
            LayerPolicy(layers=("a", "a"))

    def test_allowed_unknown_target_rejected(self):
        with pytest.raises(InvalidPolicyError) as exc_info:
            LayerPolicy(layers=("a",), allowed={"a": ["ghost"]})
        assert "ghost" in str(exc_info.value)

    def test_allowed_unknown_source_rejected(self):
        with pytest.raises(InvalidPolicyError):
            LayerPolicy(layers=("a",), allowed={"ghost": ["a"]})

    def test_assignment_to_unknown_layer_rejected(self):
        with pytest.raises(InvalidPolicyError):
            LayerPolicy(assignments={"src/x": "presentation"})

    def test_rule_to_unknown_layer_rejected(self):
        with pytest.raises(InvalidPolicyError):
            LayerPolicy(rules=(("*x/*", "presentation"),))

    def test_assign_priority(self):
        policy = LayerPolicy(
            assignments={"src/ui/special": "core"},
            rules=(("*ui/*", "ui"),),
        )
        assert policy.assign("src/ui/special", hint="domain") == "core"
        assert policy.assign("src/ui/page", hint="domain") == "domain"
        assert policy.assign("src/ui/page") == "ui"
        assert policy.assign("src/other/x") is None

    def test_conventional_rules(self):
        policy = LayerPolicy.conventional()
        assert policy.assign("src/core/log") == "core"
        assert policy.assign("src/services/user") == "domain"
        assert policy.assign("src/components/button") == "ui"
        assert policy.assign("src/adapters/http") == "integration"

    def test_conventional_drops_rules_for_missing_layers(self):
        policy = LayerPolicy.conventional(layers=("core", "ui"))
        assert policy.assign("src/services/user") is None
        assert policy.assign("src/ui/page") == "ui"

    def test_from_dict(self):
        policy = LayerPolicy.from_dict(
            {
                "order": ["base", "app"],
                "allowed": {"base": []},
                "assignments": {"main": "app"},
                "rules": [["lib/*", "base"]],
            }
        )
        assert policy.layers == ("base", "app")
        assert policy.assign("main") == "app"
        assert policy.assign("lib/io") == "base"

    def test_from_dict_malformed_rule(self):
        with pytest.raises(InvalidPolicyError):
            LayerPolicy.from_dict({"rules": [["only-a-glob"]]})


class TestAssignLayers:
    def test_unknown_hint_warned_and_ignored(self, caplog):
        graph = graph_from_mapping({"src/ui/page": []})
        policy = LayerPolicy.conventional()
        with caplog.at_level(logging.WARNING):
            layers = assign_layers(graph, policy, {"src/ui/page": "frontend"})
        assert layers == {"src/ui/page": "ui"}
        assert "frontend" in caplog.text

    def test_unassigned_modules_left_out(self):
        graph = graph_from_mapping({"misc/x": [], "src/core/y": []})
        layers = assign_layers(graph, LayerPolicy.conventional())
        assert layers == {"src/core/y": "core"}


class TestDetectLayerViolations:
    def test_upward_import_is_error(self):
        graph = graph_from_mapping({"src/core/log": ["src/ui/theme"]})
        policy = LayerPolicy.conventional()
        layers = assign_layers(graph, policy)
        (violation,) = detect_layer_violations(graph, layers, policy)
        assert violation.kind is ViolationKind.LAYER
        assert violation.severity is Severity.ERROR
        assert violation.source == "src/core/log"
        assert violation.target == "src/ui/theme"
        assert violation.edges == (("src/core/log", "src/ui/theme"),)
        assert "core layer" in violation.message
        assert violation.fix

    def test_disallowed_downward_import_is_warning(self):
        policy = LayerPolicy(layers=("core", "domain", "ui"), allowed={"ui": ["domain"]})
        graph = graph_from_mapping({"page": ["log"]})
        layers = {"page": "ui", "log": "core"}
        (violation,) = detect_layer_violations(graph, layers, policy)
        assert violation.severity is Severity.WARNING

    def test_allowed_and_unassigned_edges_pass(self):
        policy = LayerPolicy.conventional()
        graph = graph_from_mapping({"src/ui/page": ["src/core/log", "misc/thing"]})
        layers = assign_layers(graph, policy)
        assert detect_layer_violations(graph, layers, policy) == []


class TestHealthPolicy:
    def test_defaults(self):
        policy = HealthPolicy()
        assert policy.score([]) == 100.0
        assert policy.penalty(Severity.ERROR) == 15.0
        assert policy.penalty(Severity.WARNING) == 5.0
        assert policy.penalty(Severity.INFO) == 1.0

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            HealthPolicy(base=0)
        with pytest.raises(ValueError):
            HealthPolicy(warning_penalty=-1)

    def test_base_capped_at_100(self):
        assert HealthPolicy(base=100).base == 100
        with pytest.raises(ValueError, match="base"):
            HealthPolicy(base=120)

    def test_penalties_ordered_by_severity(self):
        with pytest.raises(ValueError, match="error >= warning >= info"):
            HealthPolicy(error_penalty=5, warning_penalty=10)
        with pytest.raises(ValueError, match="error >= warning >= info"):
            HealthPolicy(warning_penalty=0.5, info_penalty=1)
        assert HealthPolicy(error_penalty=5, warning_penalty=5, info_penalty=5).penalty(Severity.INFO) == 5
