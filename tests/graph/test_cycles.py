"""Tests for graph/algorithms.py."""

from refactor_planner.graph import condense, cycle_path, find_cycles, graph_from_mapping, tarjan_scc


class TestTarjanScc:
    def test_acyclic_components_are_singletons(self, chain_graph):
        sccs = tarjan_scc(chain_graph.adjacency, chain_graph.all_nodes)
        assert sorted(sccs) == [["a"], ["b"], ["c"], ["d"]]

    def test_dependencies_before_dependents(self, chain_graph):
        sccs = tarjan_scc(chain_graph.adjacency, chain_graph.all_nodes)
        assert sccs == [["d"], ["c"], ["b"], ["a"]]

    def test_mutual_pair(self, mutual_graph):
        assert tarjan_scc(mutual_graph.adjacency, mutual_graph.all_nodes) == [["A", "B"]]

    def test_deep_chain_does_not_recurse(self):
        n = 5000
        mapping = {f"m{i:05d}": [f"m{i + 1:05d}"] for i in range(n)}
        graph = graph_from_mapping(mapping)
        sccs = tarjan_scc(graph.adjacency, graph.all_nodes)
        assert len(sccs) == n + 1

    def test_cycle_reaching_another_cycle(self):
        graph = graph_from_mapping({"a": ["b"], "b": ["a", "c"], "c": ["d"], "d": ["c"]})
        assert tarjan_scc(graph.adjacency, graph.all_nodes) == [["c", "d"], ["a", "b"]]

    def test_edges_outside_node_set_ignored(self):
        sccs = tarjan_scc({"a": ["b", "ghost"], "b": ["a"]}, frozenset({"a", "b"}))
        assert sccs == [["a", "b"]]


class TestFindCycles:
    def test_none_in_dag(self, chain_graph, star_graph):
        assert find_cycles(chain_graph) == []
        assert find_cycles(star_graph) == []

    def test_two_separate_cycles(self):
        graph = graph_from_mapping(
            {"x": ["y"], "y": ["x"], "a": ["b"], "b": ["c"], "c": ["a"], "free": ["a"]}
        )
        cycles = find_cycles(graph)
        assert [c.nodes for c in cycles] == [("a", "b", "c"), ("x", "y")]
        assert cycles[0].edges == (("a", "b"), ("b", "c"), ("c", "a"))
        assert "free" not in cycles[0]
        assert cycles[1].internal_edge_count == 2


class TestCyclePath:
    def test_pair(self, mutual_graph):
        (cycle,) = find_cycles(mutual_graph)
        assert cycle_path(mutual_graph, cycle) == ["A", "B", "A"]

    def test_shortest_loop_through_first_member(self):
        graph = graph_from_mapping({"a": ["b", "c"], "b": ["c"], "c": ["a"]})
        (cycle,) = find_cycles(graph)
        assert cycle_path(graph, cycle) == ["a", "c", "a"]


class TestCondense:
    def test_condensed_graph_is_acyclic(self):
        graph = graph_from_mapping({"a": ["b"], "b": ["a", "c"], "c": []})
        components, component_of, condensed = condense(graph)
        assert ["a", "b"] in components
        ab = component_of["a"]
        c = component_of["c"]
        assert component_of["b"] == ab
        assert condensed[ab] == {c}
        assert condensed[c] == set()
