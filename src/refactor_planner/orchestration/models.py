"""Analyzer protocol, execution context and result types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, Optional, Protocol, TypeVar, Union

T = TypeVar("T")


class AnalyzerStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


class SkipCause(Enum):
    """Why an analyzer was skipped."""

    UPSTREAM_ERROR = "upstream-error"  # a dependency failed
    MISSING_INPUT = "missing-input"  # a required typed input was unavailable
    DECLINED = "declined"  # should_run() returned False


@dataclass(frozen=True)
class AnalyzerResult(Generic[T]):
    """Outcome of one analyzer attempt. Exactly one status per attempt."""

    status: AnalyzerStatus
    data: Optional[T] = None
    reason: Optional[str] = None
    cause: Optional[SkipCause] = None
    duration_ms: float = 0.0

    @classmethod
    def success(cls, data: T) -> AnalyzerResult[T]:
        return cls(status=AnalyzerStatus.SUCCESS, data=data)

    @classmethod
    def skipped(cls, reason: str, cause: SkipCause = SkipCause.DECLINED) -> AnalyzerResult[T]:
        return cls(status=AnalyzerStatus.SKIPPED, reason=reason, cause=cause)

    @classmethod
    def error(cls, reason: str) -> AnalyzerResult[T]:
        return cls(status=AnalyzerStatus.ERROR, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is AnalyzerStatus.SUCCESS

    def with_duration(self, duration_ms: float) -> AnalyzerResult[T]:
        return replace(self, duration_ms=duration_ms)


@dataclass(frozen=True)
class InputSpec:
    """A typed input resolved from another analyzer's successful result.

    ``extract`` maps the producer's data to the value handed over; without
    it the data itself is used. The value must be an instance of ``type``.
    """

    source: str
    type: Union[type, tuple[type, ...]] = object
    extract: Optional[Callable[[Any], Any]] = None
    required: bool = True

    @property
    def type_name(self) -> str:
        if isinstance(self.type, tuple):
            return " | ".join(t.__name__ for t in self.type)
        return self.type.__name__


@dataclass(frozen=True)
class AnalyzerContext:
    """What an analyzer sees while it runs.

    ``results`` is a read-only view of the results recorded so far; only
    the orchestrator writes to it.
    """

    project_root: str
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    results: Mapping[str, AnalyzerResult] = field(default_factory=lambda: MappingProxyType({}))
    inputs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def result(self, analyzer_id: str) -> Optional[AnalyzerResult]:
        return self.results.get(analyzer_id)

    def data(self, analyzer_id: str) -> Any:
        """Data of a successful result, or None."""
        result = self.results.get(analyzer_id)
        return result.data if result is not None and result.ok else None


class Analyzer(Protocol):
    """An independently authored analysis plugin."""

    id: str
    depends_on: tuple[str, ...]  # analyzers that must run first
    consumes: Mapping[str, InputSpec]  # typed inputs; their sources also run first

    def should_run(self, ctx: AnalyzerContext) -> bool: ...

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult: ...


class BaseAnalyzer:
    """Convenience base: no dependencies, no inputs, always runs."""

    id: str = ""
    depends_on: tuple[str, ...] = ()
    consumes: Mapping[str, InputSpec] = MappingProxyType({})

    def should_run(self, ctx: AnalyzerContext) -> bool:
        return True

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


def dependency_ids(analyzer: Analyzer) -> list[str]:
    """``depends_on`` followed by the sources of ``consumes``, without repeats."""
    ids: list[str] = []
    for dep in getattr(analyzer, "depends_on", ()):
        if dep not in ids:
            ids.append(dep)
    for spec in getattr(analyzer, "consumes", {}).values():
        if spec.source not in ids:
            ids.append(spec.source)
    return ids
