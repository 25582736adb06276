"""Structural analysis: dependency graph construction and algorithms."""

from .algorithms import condense, cycle_path, find_cycles, tarjan_scc
from .builder import build_dependency_graph, graph_from_mapping
from .models import CycleGroup, DependencyGraph

__all__ = [
    "CycleGroup",
    "DependencyGraph",
    "build_dependency_graph",
    "condense",
    "cycle_path",
    "find_cycles",
    "graph_from_mapping",
    "tarjan_scc",
]
