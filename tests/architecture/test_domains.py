"""Tests for architecture/domains.py."""

from refactor_planner.architecture import ROOT_DOMAIN, analyze_domains, domain_of
from refactor_planner.graph import graph_from_mapping


class TestDomainOf:
    def test_first_segment_after_src(self):
        assert domain_of("src/billing/invoice") == "billing"
        assert domain_of("billing/invoice") == "billing"

    def test_root_modules(self):
        assert domain_of("src/main") == ROOT_DOMAIN
        assert domain_of("main") == ROOT_DOMAIN


class TestAnalyzeDomains:
    def test_fully_coherent_domain(self):
        graph = graph_from_mapping({"src/billing/a": ["src/billing/b"], "src/billing/b": []})
        (domain,) = analyze_domains(graph)
        assert domain.name == "billing"
        assert domain.path == "src/billing"
        assert domain.files == 2
        assert domain.coherence == 1.0
        assert domain.suggestion == ""

    def test_domain_without_edges_is_coherent(self):
        graph = graph_from_mapping({"src/a/x": [], "src/b/y": []})
        assert [d.coherence for d in analyze_domains(graph)] == [1.0, 1.0]

    def test_misplaced_module(self):
        graph = graph_from_mapping(
            {
                "src/billing/invoice": ["src/billing/tax"],
                "src/billing/tax": [],
                "src/billing/user_format": ["src/users/model", "src/users/name"],
                "src/users/model": [],
                "src/users/name": [],
            }
        )
        billing = next(d for d in analyze_domains(graph) if d.name == "billing")
        assert billing.internal_edges == 1
        assert billing.outgoing_edges == 3
        assert billing.coherence == round(1 / 3, 4)
        assert [(m.module, m.suggested_domain) for m in billing.should_move] == [
            ("src/billing/user_format", "users")
        ]
        assert "src/billing/user_format" not in billing.belongs_here
        assert billing.suggestion.startswith("Move 1 module")

    def test_split_external_imports_not_moved(self, layered_source):
        from refactor_planner.architecture import analyze_architecture

        domains = {d.name: d for d in analyze_domains(analyze_architecture(layered_source).graph)}
        assert sorted(domains) == ["core", "domain", "ui"]

        ui = domains["ui"]
        assert ui.should_move == []
        assert ui.coherence == 0.0
        assert "0%" in ui.suggestion

        assert [m.suggested_domain for m in domains["core"].should_move] == ["ui"]
        assert domains["domain"].coherence == round(2 / 3, 4)

    def test_sorted_by_name(self):
        graph = graph_from_mapping({"src/z/a": [], "main": [], "src/a/b": []})
        assert [d.name for d in analyze_domains(graph)] == [".", "a", "z"]
