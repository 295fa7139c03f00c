"""Windowed aggregates over a flat numeric series.

Both functions return a list the same length as ``values``. Indices without
a full window of history hold ``None``. Nothing here raises for short input
or a non-positive window; the result is simply all ``None``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def rolling_mean(values: Sequence[float], window: int) -> list[float | None]:
    """Simple moving average over ``values[i - window + 1 .. i]``."""
    n = len(values)
    if window <= 0 or window > n:
        return [None] * n

    result: list[float | None] = [None] * (window - 1)
    for i in range(window - 1, n):
        total = 0.0
        for j in range(i - window + 1, i + 1):
            total += values[j]
        result.append(total / window)
    return result


def rolling_population_std(
    values: Sequence[float],
    window: int,
    means: Sequence[float | None],
) -> list[float | None]:
    """Population standard deviation of each window around its own mean.

    ``means`` must be ``rolling_mean(values, window)`` (or an equivalent
    series), so the mean at ``i`` covers the same window as the variance.
    The divisor is ``window``, not ``window - 1``.
    """
    n = len(values)
    if window <= 0 or window > n:
        return [None] * n

    result: list[float | None] = []
    for i in range(n):
        mean = means[i] if i < len(means) else None
        if i < window - 1 or mean is None:
            result.append(None)
            continue
        variance = 0.0
        for j in range(i - window + 1, i + 1):
            variance += (values[j] - mean) ** 2
        result.append(math.sqrt(variance / window))
    return result
