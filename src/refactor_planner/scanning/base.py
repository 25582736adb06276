"""Module source protocol and an in-memory implementation."""

from __future__ import annotations

from typing import Iterable, Protocol

from ..exceptions import ModuleReadError
from .models import ModuleRecord


class ModuleSource(Protocol):
    """Supplies module records to the dependency graph builder.

    ``list_modules`` failing means the whole scan failed (``ScanError``).
    ``load`` failing for one module (``ModuleReadError``) only skips that
    module.
    """

    @property
    def name(self) -> str: ...

    def list_modules(self) -> list[str]: ...

    def load(self, module_id: str) -> ModuleRecord: ...


class InMemorySource:
    """Module source over records that are already in memory."""

    def __init__(self, records: Iterable[ModuleRecord], name: str = "<memory>"):
        self._records: dict[str, ModuleRecord] = {}
        for record in records:
            self._records[record.id] = record
        self._name = name

    @classmethod
    def from_mapping(cls, graph: dict[str, list[str]], layers: dict[str, str] | None = None):
        """Build a source from a ``{module: [dependencies]}`` mapping."""
        layers = layers or {}
        nodes = set(graph)
        for deps in graph.values():
            nodes.update(deps)
        records = [
            ModuleRecord(id=node, imports=tuple(graph.get(node, [])), layer=layers.get(node))
            for node in sorted(nodes)
        ]
        return cls(records)

    @property
    def name(self) -> str:
        return self._name

    def list_modules(self) -> list[str]:
        return list(self._records)

    def load(self, module_id: str) -> ModuleRecord:
        try:
            return self._records[module_id]
        except KeyError:
            raise ModuleReadError(module_id, "unknown module") from None
