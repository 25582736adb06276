"""Dependency graph construction from resolved import edges."""

from typing import Iterable, Mapping

from ..logging_config import get_logger
from ..scanning.models import ModuleRecord
from .models import DependencyGraph

logger = get_logger(__name__)


def build_dependency_graph(records: Iterable[ModuleRecord]) -> DependencyGraph:
    """Build a dependency graph from module records.

    Imports naming a module that is not in ``records`` are dropped (the
    scanner should already have removed external packages), self-imports
    are ignored and repeated imports collapse to a single edge.
    """
    imports_by_module: dict[str, tuple[str, ...]] = {}
    for record in records:
        if record.id in imports_by_module:
            logger.debug(f"Module {record.id} listed twice; merging imports")
            imports_by_module[record.id] = imports_by_module[record.id] + record.imports
        else:
            imports_by_module[record.id] = record.imports

    return _build(imports_by_module)


def graph_from_mapping(mapping: Mapping[str, Iterable[str]]) -> DependencyGraph:
    """Build a graph from ``{module: [dependencies]}``.

    Unlike :func:`build_dependency_graph`, dependency ids that never appear
    as keys still become nodes, so ``{"a": ["b"]}`` has nodes ``a`` and ``b``.
    """
    imports_by_module: dict[str, tuple[str, ...]] = {}
    for node, deps in mapping.items():
        deps = tuple(deps)
        imports_by_module[node] = imports_by_module.get(node, ()) + deps
        for dep in deps:
            imports_by_module.setdefault(dep, ())
    return _build(imports_by_module)


def _build(imports_by_module: dict[str, tuple[str, ...]]) -> DependencyGraph:
    all_nodes = frozenset(imports_by_module)
    adjacency: dict[str, list[str]] = {}
    reverse: dict[str, list[str]] = {node: [] for node in sorted(all_nodes)}
    edge_count = 0
    dropped = 0

    for node in sorted(all_nodes):
        targets: set[str] = set()
        for imp in imports_by_module[node]:
            if imp == node:
                continue
            if imp not in all_nodes:
                dropped += 1
                continue
            targets.add(imp)
        adjacency[node] = sorted(targets)
        for target in adjacency[node]:
            reverse[target].append(node)
        edge_count += len(targets)

    if dropped:
        logger.debug(f"Dropped {dropped} import(s) to unknown modules")

    return DependencyGraph(
        adjacency=adjacency,
        reverse=reverse,
        all_nodes=all_nodes,
        edge_count=edge_count,
    )
