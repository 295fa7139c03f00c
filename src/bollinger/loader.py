"""CSV ingestion: turn an uploaded OHLCV file into a list of bars.

Column detection is forgiving: headers are matched case-insensitively by
substring, so ``Date``, ``Open Price`` or ``Vol`` are all recognized.
Rows with non-numeric or non-positive prices are skipped rather than
failing the whole file.
"""

from __future__ import annotations

import io
import logging
import warnings
from pathlib import Path

import numpy as np
import pandas as pd

from bollinger.errors import BollingerError, BollingerErrorCode
from bollinger.models.bar import Bar
from bollinger.quality import validate_bars

logger = logging.getLogger(__name__)

MAX_ROWS = 1000
DEFAULT_VOLUME = 1_000_000.0

OHLCV_FIELDS = ("open", "high", "low", "close", "volume")
TIMESTAMP_NAMES = ("timestamp", "date", "time")
VOLUME_NAMES = ("volume", "vol")


def _find_column(headers: list[str], names: tuple[str, ...]) -> str | None:
    """First header containing any of ``names``, tried in order."""
    for name in names:
        for header in headers:
            if name in header:
                return header
    return None


def _synthetic_timestamp(row_number: int) -> str:
    return f"2024-01-{row_number:02d}T00:00:00Z"


def parse_csv(text: str) -> list[Bar]:
    """Parse OHLCV CSV text into bars.

    Raises:
        BollingerError: ``INVALID_CSV`` when there is no data row,
            ``UNSUPPORTED_FORMAT`` when no header looks like OHLCV,
            ``MISSING_COLUMNS`` when open/high/low/close are not all present,
            ``NO_DATA`` when every row was rejected.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise BollingerError(
            "CSV file must contain at least a header row and one data row.",
            code=BollingerErrorCode.INVALID_CSV,
        )

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            frame = pd.read_csv(
                io.StringIO("\n".join(lines)),
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                nrows=MAX_ROWS,
                index_col=False,
                on_bad_lines="skip",
            )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise BollingerError(
            f"Error reading CSV file: {e}",
            code=BollingerErrorCode.INVALID_CSV,
        ) from e
    for w in caught:
        logger.warning("CSV parser: %s", w.message)

    headers = [str(c).strip().lower() for c in frame.columns]
    frame.columns = headers

    if not any(f in h for f in OHLCV_FIELDS for h in headers):
        raise BollingerError(
            "This CSV format is not supported. Expected OHLCV columns "
            "(timestamp/date, open, high, low, close, volume); "
            f"found: {', '.join(headers)}",
            code=BollingerErrorCode.UNSUPPORTED_FORMAT,
        )

    ts_col = _find_column(headers, TIMESTAMP_NAMES)
    price_cols = {name: _find_column(headers, (name,)) for name in ("open", "high", "low", "close")}
    vol_col = _find_column(headers, VOLUME_NAMES)

    missing = [name for name, col in price_cols.items() if col is None]
    if missing:
        raise BollingerError(
            f"CSV must contain Open, High, Low, and Close price columns "
            f"(missing: {', '.join(missing)}).",
            code=BollingerErrorCode.MISSING_COLUMNS,
        )

    prices = {
        name: pd.to_numeric(frame[col], errors="coerce")
        for name, col in price_cols.items()
    }
    valid = pd.Series(True, index=frame.index)
    for series in prices.values():
        valid &= np.isfinite(series) & (series > 0)

    if vol_col is not None:
        volume = pd.to_numeric(frame[vol_col], errors="coerce").fillna(DEFAULT_VOLUME)
    else:
        volume = pd.Series(DEFAULT_VOLUME, index=frame.index)

    skipped = int((~valid).sum())
    if skipped:
        logger.warning("Skipping %d CSV rows with invalid prices", skipped)

    bars: list[Bar] = []
    for position, idx in enumerate(frame.index):
        if not valid[idx]:
            continue
        if ts_col is not None:
            timestamp = str(frame.at[idx, ts_col]).strip()
        else:
            timestamp = _synthetic_timestamp(position + 1)
        bars.append(Bar(
            timestamp=timestamp,
            open=float(prices["open"][idx]),
            high=float(prices["high"][idx]),
            low=float(prices["low"][idx]),
            close=float(prices["close"][idx]),
            volume=float(volume[idx]),
        ))

    if not bars:
        raise BollingerError(
            "No valid OHLCV data found. Open, High, Low and Close must be "
            "positive numbers.",
            code=BollingerErrorCode.NO_DATA,
        )

    logger.info("Loaded %d bars from CSV", len(bars))
    for check in validate_bars(bars).failed_checks:
        logger.warning("CSV quality check %s failed: %s", check.name, check.message)
    return bars


def load_csv(path: Path | str) -> list[Bar]:
    """Read and parse a ``.csv`` file."""
    fp = Path(path)
    if fp.suffix.lower() != ".csv":
        raise BollingerError(
            f"Please select a valid CSV file (.csv extension required): {fp.name}",
            code=BollingerErrorCode.UNSUPPORTED_FORMAT,
        )
    return parse_csv(fp.read_text(encoding="utf-8"))
