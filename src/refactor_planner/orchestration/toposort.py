"""Depth-first ordering of analyzers by their declared dependencies.

Unlike ``graphlib.TopologicalSorter``, a dependency cycle does not abort
the ordering: the edge that closes the cycle is dropped with a warning and
the remaining order still puts every other dependency first.
"""

from __future__ import annotations

from typing import Sequence

from ..logging_config import get_logger
from .models import Analyzer, dependency_ids

logger = get_logger(__name__)


def resolve_analyzer_order(
    analyzers: Sequence[Analyzer],
) -> tuple[list[Analyzer], list[tuple[str, str]]]:
    """Order analyzers so dependencies come first.

    Roots are visited in registration order, and each analyzer's
    dependencies in declaration order, so the result is stable.

    Returns:
        (ordered analyzers, broken ``(analyzer, dependency)`` edges)
    """
    by_id = {a.id: a for a in analyzers}
    visiting: set[str] = set()
    done: set[str] = set()
    order: list[Analyzer] = []
    broken: list[tuple[str, str]] = []

    for root in analyzers:
        if root.id in done:
            continue
        visiting.add(root.id)
        stack = [(root, iter(dependency_ids(root)))]

        while stack:
            analyzer, deps = stack[-1]
            descended = False
            for dep in deps:
                if dep in done:
                    continue
                if dep not in by_id:
                    logger.warning(
                        f"Analyzer '{analyzer.id}' depends on unknown analyzer '{dep}'; "
                        "treating it as satisfied"
                    )
                    continue
                if dep in visiting:
                    logger.warning(
                        f"Dependency cycle: '{analyzer.id}' -> '{dep}'; dropping this edge"
                    )
                    broken.append((analyzer.id, dep))
                    continue
                visiting.add(dep)
                stack.append((by_id[dep], iter(dependency_ids(by_id[dep]))))
                descended = True
                break

            if not descended:
                stack.pop()
                visiting.discard(analyzer.id)
                done.add(analyzer.id)
                order.append(analyzer)

    return order, broken
