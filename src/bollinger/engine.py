"""Bollinger Bands engine: source projection, rolling stats, bands, offset.

Usage::

    from bollinger import BandEngine, BollingerSettings
    bands = BandEngine().compute(bars, BollingerSettings(length=20))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from bollinger.cache import CacheBackend, NoCache
from bollinger.config import BollingerSettings, Source, coerce_source
from bollinger.models.band_point import BandPoint
from bollinger.models.bar import Bar
from bollinger.rolling import rolling_mean, rolling_population_std

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PROJECTIONS: dict[Source, Callable[[Bar], float]] = {
    Source.OPEN: lambda b: b.open,
    Source.HIGH: lambda b: b.high,
    Source.LOW: lambda b: b.low,
    Source.CLOSE: lambda b: b.close,
    Source.HL2: lambda b: (b.high + b.low) / 2,
    Source.HLC3: lambda b: (b.high + b.low + b.close) / 3,
    Source.OHLC4: lambda b: (b.open + b.high + b.low + b.close) / 4,
}


def project_source(bars: Sequence[Bar], source: Source | str | None) -> list[float]:
    """Map each bar to the scalar selected by ``source`` (close if unknown)."""
    project = _PROJECTIONS[coerce_source(source)]
    return [project(b) for b in bars]


def apply_offset(series: Sequence[T | None], offset: int) -> list[T | None]:
    """Shift ``series`` so output ``i`` holds input ``i - offset``.

    Positions whose source index falls outside the series become ``None``.
    """
    n = len(series)
    if offset == 0:
        return list(series)

    result: list[T | None] = []
    for i in range(n):
        src = i - offset
        result.append(series[src] if 0 <= src < n else None)
    return result


def compute_bands(bars: Sequence[Bar], settings: BollingerSettings) -> list[BandPoint]:
    """Compute Bollinger Bands aligned index-for-index with ``bars``.

    Never raises for short input or a non-positive length; such cases
    produce points with every band value undefined.
    """
    if not bars:
        return []

    length = settings.length
    multiplier = settings.stddev_multiplier
    logger.debug(
        "Computing bands: %d bars, length=%d, source=%s, offset=%d",
        len(bars), length, settings.source, settings.offset,
    )

    # 1. Source projection
    values = project_source(bars, settings.source)

    # 2-3. Basis and dispersion over identical windows
    basis = rolling_mean(values, length)
    dispersion = rolling_population_std(values, length, basis)

    # 4. Band derivation
    upper: list[float | None] = []
    lower: list[float | None] = []
    for mid, sd in zip(basis, dispersion):
        if mid is None or sd is None:
            upper.append(None)
            lower.append(None)
        else:
            upper.append(mid + multiplier * sd)
            lower.append(mid - multiplier * sd)

    # 5. Offset, each series independently
    basis = apply_offset(basis, settings.offset)
    upper = apply_offset(upper, settings.offset)
    lower = apply_offset(lower, settings.offset)

    # 6. Assembly
    return [
        BandPoint(
            timestamp=bar.timestamp,
            basis=basis[i],
            upper=upper[i],
            lower=lower[i],
        )
        for i, bar in enumerate(bars)
    ]


class BandEngine:
    """Stateless band calculator with an optional memoization layer.

    Usage::

        engine = BandEngine(cache=BandCache())
        bands = engine.compute(bars, settings)

    Results are identical with or without a cache; the cache only skips
    recomputation when the same bars and settings come back.
    """

    def __init__(self, cache: CacheBackend | None = None) -> None:
        self.cache: CacheBackend = cache if cache is not None else NoCache()

    def compute(self, bars: Sequence[Bar], settings: BollingerSettings) -> list[BandPoint]:
        """Get bands: cache -> compute -> store."""
        cached = self.cache.get(bars, settings)
        if cached is not None:
            logger.debug("Band cache hit for %d bars", len(bars))
            return cached

        bands = compute_bands(bars, settings)
        self.cache.store(bars, settings, bands)
        return bands

    def clear_cache(self) -> None:
        self.cache.clear()
