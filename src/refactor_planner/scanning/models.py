"""Module records supplied by an import scanner."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ModuleRecord:
    """One in-project module with its resolved intra-project imports.

    External-package imports are expected to be dropped by the scanner;
    any import that does not name a known module is ignored when the graph
    is built.
    """

    id: str  # unique path identifier, e.g. "src/app/services/user"
    imports: tuple[str, ...] = field(default_factory=tuple)
    layer: Optional[str] = None  # layer hint from the scanner, validated by the policy
