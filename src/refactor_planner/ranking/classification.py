"""Percentiles and leaf/intermediate/core classification."""

import math
from bisect import bisect_left
from typing import Iterable, Mapping, Sequence

from .models import Classification, CouplingMetrics
from .policy import RankingPolicy


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up (12.5 -> 13, 94.5 -> 95)."""
    return math.floor(value + 0.5)


def percentile(value: float, values: Iterable[float]) -> int:
    """``round_half_up(100 * |{x in values: x < value}| / |values|)``, 0 when empty."""
    ordered = sorted(values)
    if not ordered:
        return 0
    below = bisect_left(ordered, value)
    return round_half_up(100 * below / len(ordered))


def compute_percentiles(values: Mapping[str, float]) -> dict[str, int]:
    """Given {module: value}, return {module: percentile 0-100}.

    Ties get the same (left-side) percentile.
    """
    ordered = sorted(values.values())
    n = len(ordered)
    return {key: round_half_up(100 * bisect_left(ordered, v) / n) for key, v in values.items()}


def _is_low(value: float, pct: int, ordered: Sequence[float], threshold: float) -> bool:
    # A "low" percentile needs something strictly above it; an all-tied
    # distribution has no low end.
    return pct < threshold and bool(ordered) and ordered[-1] > value


def classify_modules(
    coupling: Mapping[str, CouplingMetrics],
    centrality: Mapping[str, float],
    policy: RankingPolicy,
) -> dict[str, Classification]:
    """Classify every module in ``coupling``.

    Centrality is rounded to ``policy.precision`` decimals first so values
    that differ only by floating point noise compare equal.
    """
    rounded = {m: round(centrality.get(m, 0.0), policy.precision) for m in coupling}
    afferent = {m: float(c.afferent) for m, c in coupling.items()}

    ca_pct = compute_percentiles(afferent)
    cent_pct = compute_percentiles(rounded)
    ca_sorted = sorted(afferent.values())
    cent_sorted = sorted(rounded.values())

    result: dict[str, Classification] = {}
    for module in sorted(coupling):
        ca = afferent[module]
        low_ca = _is_low(ca, ca_pct[module], ca_sorted, policy.leaf_percentile)
        low_cent = _is_low(
            rounded[module], cent_pct[module], cent_sorted, policy.leaf_percentile
        )

        if ca == 0 or (low_ca and low_cent):
            result[module] = Classification.LEAF
        elif (
            ca_pct[module] >= policy.core_percentile
            or cent_pct[module] >= policy.core_percentile
        ):
            result[module] = Classification.CORE
        else:
            result[module] = Classification.INTERMEDIATE
    return result
