"""Data models for the module dependency graph.

Edges are directed: ``adjacency[A]`` contains ``B`` means A imports/depends
on B. The graph is built once per run and treated as an immutable snapshot.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DependencyGraph:
    """Module dependency graph built from resolved import edges.

    Invariants: every edge references a node in ``all_nodes``, adjacency
    lists are sorted and duplicate-free, and there are no self-loops.
    """

    adjacency: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    all_nodes: frozenset[str] = field(default_factory=frozenset)
    edge_count: int = 0

    def dependencies(self, node: str) -> list[str]:
        """Modules that ``node`` depends on."""
        return self.adjacency.get(node, [])

    def dependents(self, node: str) -> list[str]:
        """Modules that depend on ``node``."""
        return self.reverse.get(node, [])

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.adjacency.get(source, [])

    def edges(self) -> list[tuple[str, str]]:
        """All edges in deterministic (source, target) order."""
        return [(src, tgt) for src in sorted(self.adjacency) for tgt in self.adjacency[src]]

    def to_dict(self) -> dict[str, list[str]]:
        """Plain ``{module: [dependencies]}`` mapping, sorted by module."""
        return {node: list(self.adjacency.get(node, [])) for node in sorted(self.all_nodes)}

    def __len__(self) -> int:
        return len(self.all_nodes)


@dataclass(frozen=True)
class CycleGroup:
    """A strongly connected component with more than one node (a real cycle)."""

    nodes: tuple[str, ...]  # sorted
    edges: tuple[tuple[str, str], ...]  # internal edges, sorted

    @property
    def internal_edge_count(self) -> int:
        return len(self.edges)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes
