"""DataFrame interop and indicator CSV export.

Lets DataFrame-oriented callers move between pandas and the typed
``Bar``/``BandPoint`` models, and produces the "download indicator data"
CSV: one row per bar with its band values alongside.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from bollinger.errors import BollingerError, BollingerErrorCode
from bollinger.models.band_point import BandPoint
from bollinger.models.bar import Bar

EXPORT_COLUMNS = [
    "Timestamp", "Open", "High", "Low", "Close", "Volume",
    "Upper Band", "Basis", "Lower Band",
]
BAND_COLUMNS = ["Upper Band", "Basis", "Lower Band"]


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    records = [
        {
            "timestamp": b.timestamp,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "volume": b.volume,
        }
        for b in bars
    ]
    return pd.DataFrame(records, columns=["timestamp", "open", "high", "low", "close", "volume"])


def frame_to_bars(df: pd.DataFrame) -> list[Bar]:
    """Convert a frame with timestamp/open/high/low/close[/volume] columns."""
    bars: list[Bar] = []
    for _, row in df.iterrows():
        volume = row.get("volume")
        bars.append(Bar(
            timestamp=str(row["timestamp"]),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(volume) if pd.notna(volume) else 0.0,
        ))
    return bars


def bands_to_frame(bars: Sequence[Bar], bands: Sequence[BandPoint]) -> pd.DataFrame:
    """Join bars with their bands; undefined band values become NaN."""
    if len(bars) != len(bands):
        raise BollingerError(
            f"Expected one band point per bar, got {len(bands)} for {len(bars)} bars",
            code=BollingerErrorCode.MISALIGNED_SERIES,
        )
    records = [
        {
            "Timestamp": bar.timestamp,
            "Open": bar.open,
            "High": bar.high,
            "Low": bar.low,
            "Close": bar.close,
            "Volume": bar.volume,
            "Upper Band": band.upper,
            "Basis": band.basis,
            "Lower Band": band.lower,
        }
        for bar, band in zip(bars, bands)
    ]
    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)
    df[BAND_COLUMNS] = df[BAND_COLUMNS].astype(float)
    return df


def export_csv(
    bars: Sequence[Bar],
    bands: Sequence[BandPoint],
    path: Path | str | None = None,
) -> str:
    """Render bars and bands as CSV text, writing it to ``path`` if given.

    Band values are written with two decimals and undefined ones as empty
    cells; bar prices and volume are written as-is.
    """
    if not bands:
        raise BollingerError(
            "No indicator data available; load chart data first.",
            code=BollingerErrorCode.NO_DATA,
        )
    df = bands_to_frame(bars, bands)
    for col in BAND_COLUMNS:
        df[col] = df[col].map(lambda v: "" if pd.isna(v) else f"{v:.2f}")
    text = df.to_csv(index=False)
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text


def latest_bands(bands: Sequence[BandPoint]) -> BandPoint | None:
    """Most recent band point (the chart's live readout), or None."""
    return bands[-1] if bands else None


@dataclass(frozen=True)
class PriceChange:
    """Latest close and its move from the previous close.

    Attributes:
        price: Close of the last bar.
        change: ``price`` minus the previous close.
        change_pct: ``change`` as a percentage of the previous close;
            None when the previous close is zero.
    """

    price: float
    change: float
    change_pct: float | None


def price_change(bars: Sequence[Bar]) -> PriceChange | None:
    """Header readout for the chart, or None without bars.

    A single bar has no previous close, so its change is zero.
    """
    if not bars:
        return None
    latest = bars[-1]
    if len(bars) == 1:
        return PriceChange(price=latest.close, change=0.0, change_pct=0.0)
    previous = bars[-2]
    change = latest.close - previous.close
    pct = change / previous.close * 100 if previous.close else None
    return PriceChange(price=latest.close, change=change, change_pct=pct)
