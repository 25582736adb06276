"""Orchestrator: runs registered analyzers in dependency order.

Every analyzer attempt resolves to exactly one :class:`AnalyzerResult`.
Exceptions raised by an analyzer never escape ``run()``; they are turned
into ``status: error`` results, and dependents of a failed analyzer are
skipped without being invoked.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import DuplicateAnalyzerError, InputValidationError
from ..logging_config import get_logger
from .enrichment import (
    DEFAULT_ENRICHMENT_RULES,
    DEFAULT_EXTRACTORS,
    EnrichmentRule,
    Extractor,
    extract_options,
)
from .models import (
    Analyzer,
    AnalyzerContext,
    AnalyzerResult,
    AnalyzerStatus,
    SkipCause,
    dependency_ids,
)
from .toposort import resolve_analyzer_order

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunStats:
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    duration_ms: float = 0.0

    @property
    def total(self) -> int:
        return self.succeeded + self.skipped + self.failed


@dataclass(frozen=True)
class RunResult:
    """Results of one orchestrator run, keyed by analyzer id in execution order."""

    results: Mapping[str, AnalyzerResult] = field(default_factory=lambda: MappingProxyType({}))
    order: tuple[str, ...] = ()
    broken_edges: tuple[tuple[str, str], ...] = ()
    enriched: tuple[str, ...] = ()  # analyzers re-run by the enrichment pass
    stats: RunStats = field(default_factory=RunStats)

    def __getitem__(self, analyzer_id: str) -> AnalyzerResult:
        return self.results[analyzer_id]

    def __contains__(self, analyzer_id: object) -> bool:
        return analyzer_id in self.results

    def get(self, analyzer_id: str) -> Optional[AnalyzerResult]:
        return self.results.get(analyzer_id)

    def data(self, analyzer_id: str) -> Any:
        result = self.results.get(analyzer_id)
        return result.data if result is not None and result.ok else None


class Orchestrator:
    """Registry and executor for analyzers.

    Each instance owns its registry; there is no global state, so tests
    and embedders can build as many independent orchestrators as they
    need.
    """

    def __init__(
        self,
        analyzers: Iterable[Analyzer] = (),
        enrichment_rules: Iterable[EnrichmentRule] = DEFAULT_ENRICHMENT_RULES,
        extractors: Optional[Mapping[str, Extractor]] = None,
        enable_enrichment: bool = True,
    ):
        self._analyzers: dict[str, Analyzer] = {}
        self.enrichment_rules = tuple(enrichment_rules)
        self.extractors = dict(DEFAULT_EXTRACTORS if extractors is None else extractors)
        self.enable_enrichment = enable_enrichment
        for analyzer in analyzers:
            self.register(analyzer)

    # ── Registry ───────────────────────────────────────────────────────

    def register(self, analyzer: Analyzer) -> None:
        """Add an analyzer. Raises DuplicateAnalyzerError if the id is taken."""
        if analyzer.id in self._analyzers:
            raise DuplicateAnalyzerError(analyzer.id)
        self._analyzers[analyzer.id] = analyzer
        logger.debug(f"Registered analyzer {analyzer.id}")

    def unregister(self, analyzer_id: str) -> Analyzer:
        return self._analyzers.pop(analyzer_id)

    def get(self, analyzer_id: str) -> Optional[Analyzer]:
        return self._analyzers.get(analyzer_id)

    @property
    def ids(self) -> list[str]:
        return list(self._analyzers)

    def __len__(self) -> int:
        return len(self._analyzers)

    def __contains__(self, analyzer_id: object) -> bool:
        return analyzer_id in self._analyzers

    # ── Execution ──────────────────────────────────────────────────────

    def run(self, project_root: str = ".", options: Optional[Mapping[str, Any]] = None) -> RunResult:
        """Run every registered analyzer once, then the enrichment pass."""
        start = time.perf_counter()
        ordered, broken = resolve_analyzer_order(list(self._analyzers.values()))
        broken_set = set(broken)

        results: dict[str, AnalyzerResult] = {}
        base_options = dict(options or {})

        for analyzer in ordered:
            results[analyzer.id] = self._execute(
                analyzer, project_root, base_options, results, broken_set
            )

        enriched: list[str] = []
        if self.enable_enrichment:
            enriched = self._enrich(ordered, project_root, base_options, results, broken_set)

        counts = {status: 0 for status in AnalyzerStatus}
        for result in results.values():
            counts[result.status] += 1

        stats = RunStats(
            succeeded=counts[AnalyzerStatus.SUCCESS],
            skipped=counts[AnalyzerStatus.SKIPPED],
            failed=counts[AnalyzerStatus.ERROR],
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        logger.debug(
            f"Run finished: {stats.succeeded} succeeded, {stats.skipped} skipped, "
            f"{stats.failed} failed in {stats.duration_ms:.1f}ms"
        )

        return RunResult(
            results=MappingProxyType(dict(results)),
            order=tuple(a.id for a in ordered),
            broken_edges=tuple(broken),
            enriched=tuple(enriched),
            stats=stats,
        )

    def _enrich(
        self,
        ordered: list[Analyzer],
        project_root: str,
        options: dict[str, Any],
        results: dict[str, AnalyzerResult],
        broken: set[tuple[str, str]],
    ) -> list[str]:
        extracted = extract_options(results, self.extractors)
        if not extracted:
            return []

        enriched_options = dict(options)
        enriched_options.update(extracted)
        needs = {rule.analyzer_id: rule.needs for rule in self.enrichment_rules}

        rerun: list[str] = []
        for analyzer in ordered:
            keys = needs.get(analyzer.id)
            if keys is None:
                continue
            first = results[analyzer.id]
            if first.status is not AnalyzerStatus.SKIPPED or first.cause is not SkipCause.DECLINED:
                continue
            if not all(k in enriched_options for k in keys):
                continue

            logger.debug(f"Re-running {analyzer.id} with enriched options {sorted(keys)}")
            results[analyzer.id] = self._execute(
                analyzer, project_root, enriched_options, results, broken
            )
            rerun.append(analyzer.id)
        return rerun

    def _execute(
        self,
        analyzer: Analyzer,
        project_root: str,
        options: Mapping[str, Any],
        results: dict[str, AnalyzerResult],
        broken: set[tuple[str, str]],
    ) -> AnalyzerResult:
        start = time.perf_counter()
        result = self._attempt(analyzer, project_root, options, results, broken)
        duration_ms = (time.perf_counter() - start) * 1000

        if result.status is AnalyzerStatus.ERROR:
            logger.warning(f"Analyzer {analyzer.id} failed: {result.reason}")
        elif result.status is AnalyzerStatus.SKIPPED:
            logger.debug(f"Analyzer {analyzer.id} skipped: {result.reason}")
        else:
            logger.debug(f"Analyzer {analyzer.id} completed in {duration_ms:.1f}ms")
        return result.with_duration(duration_ms)

    def _attempt(
        self,
        analyzer: Analyzer,
        project_root: str,
        options: Mapping[str, Any],
        results: dict[str, AnalyzerResult],
        broken: set[tuple[str, str]],
    ) -> AnalyzerResult:
        for dep in dependency_ids(analyzer):
            if (analyzer.id, dep) in broken:
                continue
            upstream = results.get(dep)
            if upstream is not None and upstream.status is AnalyzerStatus.ERROR:
                return AnalyzerResult.skipped(
                    f"dependency '{dep}' failed", cause=SkipCause.UPSTREAM_ERROR
                )

        try:
            inputs = self._resolve_inputs(analyzer, results)
        except InputValidationError as e:
            return AnalyzerResult.error(str(e))
        except _MissingInput as e:
            return AnalyzerResult.skipped(str(e), cause=SkipCause.MISSING_INPUT)
        except Exception as e:
            return AnalyzerResult.error(f"input extraction failed: {e}")

        ctx = AnalyzerContext(
            project_root=project_root,
            options=MappingProxyType(dict(options)),
            results=MappingProxyType(results),
            inputs=MappingProxyType(inputs),
        )

        try:
            if not analyzer.should_run(ctx):
                return AnalyzerResult.skipped("should_run() returned False", SkipCause.DECLINED)
            result = analyzer.analyze(ctx)
        except Exception as e:
            return AnalyzerResult.error(f"{type(e).__name__}: {e}")

        if not isinstance(result, AnalyzerResult):
            return AnalyzerResult.error(
                f"analyze() returned {type(result).__name__}, expected AnalyzerResult"
            )
        return result

    @staticmethod
    def _resolve_inputs(analyzer: Analyzer, results: Mapping[str, AnalyzerResult]) -> dict[str, Any]:
        inputs: dict[str, Any] = {}
        for name, spec in getattr(analyzer, "consumes", {}).items():
            source = results.get(spec.source)
            value = None
            if source is not None and source.ok and source.data is not None:
                value = spec.extract(source.data) if spec.extract else source.data

            if value is None:
                if spec.required:
                    raise _MissingInput(f"input '{name}' from '{spec.source}' is unavailable")
                continue
            if not isinstance(value, spec.type):
                raise InputValidationError(
                    analyzer.id, name, spec.type_name, type(value).__name__
                )
            inputs[name] = value
        return inputs


class _MissingInput(Exception):
    pass
