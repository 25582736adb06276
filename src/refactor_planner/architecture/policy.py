"""Layer and health policies.

A :class:`LayerPolicy` is an ordered enumeration of layers (lowest first)
plus an "allowed to depend on" relation and the rules that map modules to
layers. A :class:`HealthPolicy` turns violations into a 0-100 score.
Both are validated when constructed, not when a graph is checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import InvalidPolicyError
from .models import ArchViolation, Severity

DEFAULT_LAYERS = ("core", "domain", "integration", "ui")

# Directory conventions used by LayerPolicy.conventional().
_CONVENTIONAL_RULES = (
    ("*core/*", "core"),
    ("*shared/*", "core"),
    ("*utils/*", "core"),
    ("*domain/*", "domain"),
    ("*models/*", "domain"),
    ("*services/*", "domain"),
    ("*integrations/*", "integration"),
    ("*adapters/*", "integration"),
    ("*api/*", "integration"),
    ("*ui/*", "ui"),
    ("*components/*", "ui"),
    ("*pages/*", "ui"),
)


@dataclass(frozen=True)
class LayerPolicy:
    """Ordered layers and the dependencies allowed between them.

    Attributes:
        layers: Layer names, lowest (most foundational) first.
        allowed: Layer -> layers it may depend on. Defaults to "itself and
            every lower layer" for each layer not listed.
        assignments: Explicit module id -> layer mapping (highest priority).
        rules: ``(glob, layer)`` pairs tried in order after explicit
            assignments and scanner hints.
    """

    layers: tuple[str, ...] = DEFAULT_LAYERS
    allowed: Mapping[str, frozenset[str]] = field(default_factory=dict)
    assignments: Mapping[str, str] = field(default_factory=dict)
    rules: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        layers = tuple(self.layers)
        if not layers:
            raise InvalidPolicyError("at least one layer is required")
        if len(set(layers)) != len(layers):
            raise InvalidPolicyError(f"duplicate layer names in {list(layers)}")
        known = set(layers)

        allowed: dict[str, frozenset[str]] = {}
        for rank, layer in enumerate(layers):
            if layer in self.allowed:
                targets = frozenset(self.allowed[layer])
                unknown = targets - known
                if unknown:
                    raise InvalidPolicyError(
                        f"layer '{layer}' allows unknown layer(s) {sorted(unknown)}"
                    )
                allowed[layer] = targets | {layer}
            else:
                allowed[layer] = frozenset(layers[: rank + 1])
        extra = set(self.allowed) - known
        if extra:
            raise InvalidPolicyError(f"'allowed' names unknown layer(s) {sorted(extra)}")

        for module, layer in self.assignments.items():
            if layer not in known:
                raise InvalidPolicyError(f"module '{module}' assigned to unknown layer '{layer}'")
        for pattern, layer in self.rules:
            if layer not in known:
                raise InvalidPolicyError(f"rule '{pattern}' targets unknown layer '{layer}'")

        object.__setattr__(self, "layers", layers)
        object.__setattr__(self, "allowed", allowed)
        object.__setattr__(self, "rules", tuple((p, lay) for p, lay in self.rules))

    @classmethod
    def conventional(cls, layers: Iterable[str] = DEFAULT_LAYERS) -> LayerPolicy:
        """Policy using common directory names (core/, domain/, ui/, ...)."""
        layers = tuple(layers)
        rules = tuple((p, lay) for p, lay in _CONVENTIONAL_RULES if lay in layers)
        return cls(layers=layers, rules=rules)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LayerPolicy:
        """Build a policy from a ``[layers]`` TOML table.

        Keys: ``order`` (list), ``allowed`` (table of lists),
        ``assignments`` (table), ``rules`` (list of ``[glob, layer]``),
        ``conventional`` (bool, prepend the directory-name rules).
        """
        order = tuple(data.get("order", DEFAULT_LAYERS))
        rules = [tuple(r) for r in data.get("rules", [])]
        if data.get("conventional", False):
            rules = list(cls.conventional(order).rules) + rules
        for rule in rules:
            if len(rule) != 2:
                raise InvalidPolicyError(f"rule {list(rule)} must be [glob, layer]")
        return cls(
            layers=order,
            allowed={k: frozenset(v) for k, v in data.get("allowed", {}).items()},
            assignments=dict(data.get("assignments", {})),
            rules=tuple(rules),  # type: ignore[arg-type]
        )

    def rank(self, layer: str) -> int:
        """Position of ``layer`` (0 = lowest)."""
        return self.layers.index(layer)

    def is_known(self, layer: Optional[str]) -> bool:
        return layer is not None and layer in self.allowed

    def may_depend(self, source_layer: str, target_layer: str) -> bool:
        """True if a module in ``source_layer`` may import ``target_layer``."""
        return target_layer in self.allowed[source_layer]

    def assign(self, module_id: str, hint: Optional[str] = None) -> Optional[str]:
        """Layer for ``module_id``: explicit assignment, then hint, then first rule."""
        if module_id in self.assignments:
            return self.assignments[module_id]
        if self.is_known(hint):
            return hint
        for pattern, layer in self.rules:
            if fnmatchcase(module_id, pattern) or fnmatchcase(module_id + "/", pattern):
                return layer
        return None


@dataclass(frozen=True)
class HealthPolicy:
    """Score curve: ``max(0, base - sum(penalty per violation severity))``."""

    base: float = 100.0
    error_penalty: float = 15.0
    warning_penalty: float = 5.0
    info_penalty: float = 1.0

    def __post_init__(self) -> None:
        if not 0 < self.base <= 100:
            raise ValueError(f"base must be in (0, 100], got {self.base}")
        for name in ("error_penalty", "warning_penalty", "info_penalty"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if not self.error_penalty >= self.warning_penalty >= self.info_penalty:
            raise ValueError("penalties must not decrease with severity (error >= warning >= info)")

    def penalty(self, severity: Severity) -> float:
        return {
            Severity.ERROR: self.error_penalty,
            Severity.WARNING: self.warning_penalty,
            Severity.INFO: self.info_penalty,
        }[severity]

    def score(self, violations: Iterable[ArchViolation]) -> float:
        """Health score in [0, base]; 100 means no violations with the defaults."""
        total = sum(self.penalty(v.severity) for v in violations)
        return max(0.0, self.base - total)
