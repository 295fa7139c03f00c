"""Bar (OHLCV) data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bar:
    """Single price bar (OHLCV).

    Attributes:
        timestamp: Opaque ordering key, passed through untouched.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
    """

    timestamp: str
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
