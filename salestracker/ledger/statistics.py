"""Mini README: Pure statistics backing the analytics summary.

Structure:
    * continuous_percentile - interpolated percentile over sorted values.
    * summarise - builds an ``AnalyticsSummary`` from raw amounts.

The interpolation matches SQL ``PERCENTILE_CONT``: for ``n`` sorted values the
percentile ``p`` sits at position ``p * (n - 1)`` and falls between the two
nearest ranks, weighted by the fractional distance.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .models import AnalyticsSummary


def continuous_percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Return the ``fraction`` percentile of ascending ``sorted_values``."""

    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"Percentile fraction must be within [0, 1], got {fraction}")
    if not sorted_values:
        return 0.0

    position = fraction * (len(sorted_values) - 1)
    lower_index = math.floor(position)
    upper_index = math.ceil(position)
    lower = float(sorted_values[lower_index])
    upper = float(sorted_values[upper_index])
    if lower_index == upper_index:
        return lower
    return lower + (upper - lower) * (position - lower_index)


def summarise(amounts: Iterable[float]) -> AnalyticsSummary:
    """Compute sum, mean, count, median and 90th percentile of ``amounts``."""

    ordered = sorted(float(amount) for amount in amounts)
    if not ordered:
        return AnalyticsSummary()

    total = math.fsum(ordered)
    return AnalyticsSummary(
        sum=total,
        average=total / len(ordered),
        count=len(ordered),
        median=continuous_percentile(ordered, 0.5),
        percentile90=continuous_percentile(ordered, 0.9),
    )
