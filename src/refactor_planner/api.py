"""Public API for Refactor Planner.

Example:
    >>> from refactor_planner import analyze
    >>>
    >>> run = analyze("modules.json")
    >>> run.data("architecture").score
    85.0
    >>> [a.id for a in run.data("migration").actions]
    []
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from .analyzers import get_default_analyzers
from .config import PlannerConfig, load_config
from .logging_config import get_logger, setup_logging
from .orchestration.orchestrator import Orchestrator, RunResult
from .planning.models import RawAction
from .scanning.base import ModuleSource
from .scanning.manifest import ManifestSource, load_actions

logger = get_logger(__name__)


def create_default_orchestrator(
    config: Optional[PlannerConfig] = None,
    source: Optional[ModuleSource] = None,
    actions: Optional[Iterable[RawAction]] = None,
) -> Orchestrator:
    """An orchestrator with the built-in analyzers registered."""
    config = config or PlannerConfig()
    return Orchestrator(
        get_default_analyzers(config, source=source, actions=actions),
        enable_enrichment=config.enable_enrichment,
    )


def analyze(
    source: Union[str, Path, ModuleSource],
    actions: Union[None, str, Path, Iterable[RawAction]] = None,
    config_file: Optional[Path] = None,
    options: Optional[dict[str, Any]] = None,
    **overrides: Any,
) -> RunResult:
    """Run the full pipeline: architecture, domains, ranking, plan, recommendations.

    Logging is (re)configured from the resolved ``verbosity`` setting.

    Args:
        source: A JSON manifest path or any ModuleSource
        actions: Raw actions, or a path to an actions JSON file. When omitted
            and ``source`` is a manifest, its embedded actions are used.
        config_file: Optional explicit config file path
        options: Extra entries for the analyzer options bag
        **overrides: Configuration overrides (e.g. ``hotspot_count=5``)

    Raises:
        ConfigurationError: If configuration is invalid
        ScanError: If the manifest or actions file cannot be read
    """
    config = load_config(config_file=config_file, **overrides)
    setup_logging(config.verbosity)
    logger.debug(f"Configuration loaded: {config.verbosity} mode")

    if isinstance(source, (str, Path)):
        source = ManifestSource(source)

    if isinstance(actions, (str, Path)):
        raw_actions = load_actions(actions)
    elif actions is not None:
        raw_actions = list(actions)
    elif isinstance(source, ManifestSource):
        raw_actions = source.actions()
    else:
        raw_actions = []

    logger.debug(f"Analyzing {source.name} with {len(raw_actions)} raw action(s)")
    orchestrator = create_default_orchestrator(config, source=source, actions=raw_actions)
    return orchestrator.run(project_root=str(Path.cwd()), options=options)
