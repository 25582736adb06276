"""Module sources: where module lists and import edges come from."""

from .base import InMemorySource, ModuleSource
from .manifest import ManifestSource, load_actions, parse_actions
from .models import ModuleRecord

__all__ = [
    "InMemorySource",
    "ManifestSource",
    "ModuleRecord",
    "ModuleSource",
    "load_actions",
    "parse_actions",
]
