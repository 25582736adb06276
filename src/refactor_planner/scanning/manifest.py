"""JSON manifest module source.

A manifest is the hand-off format between an external import scanner and
the planner::

    {
      "modules": [
        {"id": "src/ui/page", "imports": ["src/domain/user"], "layer": "ui"},
        {"id": "src/domain/user", "imports": []}
      ],
      "actions": [
        {"kind": "merge", "sources": ["src/util/a", "src/util/b"], "target": "src/util"}
      ]
    }

``actions`` is optional and may also live in its own file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ..exceptions import ModuleReadError, ScanError
from ..logging_config import get_logger
from ..planning.models import ActionKind, RawAction
from .models import ModuleRecord

logger = get_logger(__name__)


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ScanError(str(path), e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise ScanError(str(path), f"invalid JSON: {e}") from e


class ManifestSource:
    """Module source backed by a JSON manifest file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._entries: Optional[dict[str, Any]] = None
        self._document: Optional[dict[str, Any]] = None

    @property
    def name(self) -> str:
        return str(self.path)

    def _load_document(self) -> dict[str, Any]:
        if self._document is None:
            document = _read_json(self.path)
            if not isinstance(document, dict) or not isinstance(document.get("modules"), list):
                raise ScanError(str(self.path), "manifest must be an object with a 'modules' list")
            self._document = document
        return self._document

    def _load_entries(self) -> dict[str, Any]:
        if self._entries is not None:
            return self._entries
        document = self._load_document()
        entries: dict[str, Any] = {}
        for index, entry in enumerate(document["modules"]):
            module_id = entry.get("id") if isinstance(entry, dict) else None
            if not isinstance(module_id, str) or not module_id:
                # Keep a placeholder so the bad entry is reported by load().
                module_id = f"#{index}"
            if module_id in entries:
                logger.warning(f"Duplicate module '{module_id}' in {self.path}; keeping the first")
                continue
            entries[module_id] = entry
        self._entries = entries
        return entries

    def list_modules(self) -> list[str]:
        return list(self._load_entries())

    def load(self, module_id: str) -> ModuleRecord:
        entry = self._load_entries().get(module_id)
        if not isinstance(entry, dict) or entry.get("id") != module_id:
            raise ModuleReadError(module_id, "entry has no valid 'id'")

        imports = entry.get("imports", [])
        if not isinstance(imports, list) or not all(isinstance(i, str) for i in imports):
            raise ModuleReadError(module_id, "'imports' must be a list of strings")

        layer = entry.get("layer")
        if layer is not None and not isinstance(layer, str):
            raise ModuleReadError(module_id, "'layer' must be a string")

        return ModuleRecord(id=module_id, imports=tuple(imports), layer=layer)

    def actions(self) -> list[RawAction]:
        """Raw restructuring actions embedded in the manifest, if any."""
        document = self._load_document()
        return parse_actions(document.get("actions", []), origin=str(self.path))


def load_actions(path: str | Path) -> list[RawAction]:
    """Load raw actions from a standalone JSON file (a list or ``{"actions": [...]}``)."""
    path = Path(path)
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("actions", [])
    return parse_actions(data, origin=str(path))


def parse_actions(data: Any, origin: str = "<actions>") -> list[RawAction]:
    """Convert JSON action entries to :class:`RawAction`; malformed entries are skipped."""
    if not isinstance(data, list):
        raise ScanError(origin, "'actions' must be a list")

    actions: list[RawAction] = []
    for index, entry in enumerate(data):
        try:
            kind = ActionKind(entry["kind"])
            sources = entry.get("sources")
            if sources is None and "source" in entry:
                sources = [entry["source"]]
            if not isinstance(sources, list) or not sources:
                raise ValueError("'sources' must be a non-empty list")
            actions.append(
                RawAction(
                    kind=kind,
                    sources=tuple(str(s) for s in sources),
                    target=entry.get("target"),
                    reason=entry.get("reason", ""),
                    affected_imports=tuple(entry.get("affected_imports", [])),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping action #{index} in {origin}: {e}")
    return actions
