"""Configuration loading and management for Refactor Planner.

Configuration sources are merged in priority order:
    1. Defaults (defined in PlannerConfig and the policy dataclasses)
    2. Global config (~/.refactor-planner.toml)
    3. Project config (./refactor-planner.toml)
    4. Explicit config file
    5. Environment variables (REFACTOR_PLANNER_* prefix)
    6. Keyword overrides (typically from CLI flags)

A config file looks like::

    max_recommendations = 20

    [ranking]
    core_percentile = 75
    hotspot_count = 5

    [health]
    error_penalty = 20

    [layers]
    order = ["core", "domain", "ui"]
    rules = [["src/core/*", "core"], ["src/ui/*", "ui"]]

Example:
    >>> config = load_config(verbose=True, hotspot_count=3)
    >>> config.verbosity
    'verbose'
    >>> config.ranking.hotspot_count
    3
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .architecture.policy import HealthPolicy, LayerPolicy
from .exceptions import ConfigurationError, InvalidConfigError
from .ranking.policy import RankingPolicy

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "REFACTOR_PLANNER_"
CONFIG_FILENAME = "refactor-planner.toml"

_SECTIONS = ("ranking", "health", "layers")


@dataclass(frozen=True)
class PlannerConfig:
    """Top-level settings plus the ranking, health and layer policies.

    Attributes:
        verbosity: Logging verbosity level.
        max_recommendations: Cap on synthesized recommendations.
        enable_enrichment: Run the second (enrichment) orchestrator pass.
        ranking: Centrality, classification and risk parameters.
        health: Health score curve.
        layers: Layer ordering, allowed dependencies and assignment rules.
    """

    verbosity: Verbosity = "normal"
    max_recommendations: int = 50
    enable_enrichment: bool = True

    ranking: RankingPolicy = field(default_factory=RankingPolicy)
    health: HealthPolicy = field(default_factory=HealthPolicy)
    layers: LayerPolicy = field(default_factory=LayerPolicy)

    def __post_init__(self) -> None:
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got '{self.verbosity}'")
        if self.max_recommendations < 1:
            raise ValueError("max_recommendations must be at least 1")


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> PlannerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides. ``verbose``/``quiet`` booleans map to
            ``verbosity``; a ranking field name (e.g. ``hotspot_count``)
            overrides that field of the ``[ranking]`` section.

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml_file(config_file))

    _merge(merged, _load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    ranking_fields = {f.name for f in fields(RankingPolicy)}
    for key in list(overrides):
        if key in ranking_fields:
            merged.setdefault("ranking", {})[key] = overrides.pop(key)
    _merge(merged, overrides)

    return _build_config(merged)


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Shallow merge, except policy sections which merge key by key."""
    for key, value in source.items():
        if key in _SECTIONS and isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key].update(value)
        else:
            target[key] = dict(value) if isinstance(value, dict) else value


def _build_config(merged: dict[str, Any]) -> PlannerConfig:
    kwargs = dict(merged)

    section = kwargs.pop("ranking", None)
    if section is not None:
        kwargs["ranking"] = _build_section("ranking", RankingPolicy, section)
    section = kwargs.pop("health", None)
    if section is not None:
        kwargs["health"] = _build_section("health", HealthPolicy, section)
    section = kwargs.pop("layers", None)
    if isinstance(section, dict):
        # InvalidPolicyError is already a ConfigurationError
        kwargs["layers"] = LayerPolicy.from_dict(section)
    elif section is not None:
        kwargs["layers"] = section

    try:
        return PlannerConfig(**kwargs)
    except TypeError as e:
        raise InvalidConfigError("config", sorted(kwargs), str(e)) from e
    except ValueError as e:
        raise InvalidConfigError("config", "", str(e)) from e


def _build_section(name: str, cls: type, section: Any) -> Any:
    if isinstance(section, cls):
        return section
    if not isinstance(section, dict):
        raise InvalidConfigError(name, section, "expected a table")
    try:
        return cls(**section)
    except TypeError as e:
        raise InvalidConfigError(name, sorted(section), str(e)) from e
    except ValueError as e:
        raise InvalidConfigError(name, section, str(e)) from e


def _load_env_vars() -> dict[str, Any]:
    """Load top-level scalar fields from REFACTOR_PLANNER_* variables.

    Supported environment variables:
        REFACTOR_PLANNER_VERBOSITY: quiet/normal/verbose
        REFACTOR_PLANNER_MAX_RECOMMENDATIONS: int
        REFACTOR_PLANNER_ENABLE_ENRICHMENT: bool (true/false/1/0)
    """
    type_hints = get_type_hints(PlannerConfig)
    result: dict[str, Any] = {}

    for field_name in PlannerConfig.__dataclass_fields__:
        if field_name in _SECTIONS:
            continue
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            parsed = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")
    if type_hint is int:
        return int(value)
    if type_hint is float:
        return float(value)
    if type_hint is str or origin is Literal:
        return value
    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e
