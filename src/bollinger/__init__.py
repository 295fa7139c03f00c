"""bollinger: Bollinger Bands over OHLCV bars for chart overlays.

Pure computation engine (source projection, SMA, population standard
deviation, bands, offset) plus CSV ingestion, demo data and export.

Quick start::

    from bollinger import BandEngine, generate_demo_bars, settings_from_env
    bars = generate_demo_bars()
    bands = BandEngine().compute(bars, settings_from_env())
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeVar

from bollinger.cache import BandCache, CacheBackend, NoCache
from bollinger.config import (
    DEFAULT_SETTINGS,
    SETTINGS_RANGES,
    BollingerSettings,
    FillStyle,
    LineDash,
    LineStyle,
    MAType,
    Source,
    clamp_settings,
    coerce_source,
)
from bollinger.demo import generate_demo_bars
from bollinger.engine import BandEngine, apply_offset, compute_bands, project_source
from bollinger.errors import BollingerError, BollingerErrorCode
from bollinger.export import (
    PriceChange,
    bands_to_frame,
    bars_to_frame,
    export_csv,
    frame_to_bars,
    latest_bands,
    price_change,
)
from bollinger.loader import load_csv, parse_csv
from bollinger.models.band_point import BandPoint
from bollinger.models.bar import Bar
from bollinger.quality import ValidationCheck, ValidationResult, validate_bars
from bollinger.rolling import rolling_mean, rolling_population_std

__version__ = "0.1.0"

T = TypeVar("T")

__all__ = [
    # Engine
    "BandEngine",
    "compute_bands",
    "project_source",
    "apply_offset",
    "rolling_mean",
    "rolling_population_std",
    # Cache
    "CacheBackend",
    "BandCache",
    "NoCache",
    # Config
    "BollingerSettings",
    "Source",
    "MAType",
    "LineDash",
    "LineStyle",
    "FillStyle",
    "DEFAULT_SETTINGS",
    "SETTINGS_RANGES",
    "clamp_settings",
    "coerce_source",
    "settings_from_env",
    # Errors
    "BollingerError",
    "BollingerErrorCode",
    # Models
    "Bar",
    "BandPoint",
    # Ingestion, quality, export
    "parse_csv",
    "load_csv",
    "validate_bars",
    "ValidationCheck",
    "ValidationResult",
    "generate_demo_bars",
    "bars_to_frame",
    "frame_to_bars",
    "bands_to_frame",
    "export_csv",
    "latest_bands",
    "price_change",
    "PriceChange",
]


def _env_number(name: str, default: str, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name, default).strip()
    try:
        return cast(raw)
    except ValueError as e:
        raise BollingerError(
            f"{name} must be a number, got {raw!r}",
            code=BollingerErrorCode.INVALID_SETTINGS,
        ) from e


def settings_from_env() -> BollingerSettings:
    """Zero-config factory: reads indicator inputs from env vars.

    Environment variables:
        BOLLINGER_LENGTH: Window size (default: 20).
        BOLLINGER_SOURCE: open/high/low/close/hl2/hlc3/ohlc4 (default: "close").
        BOLLINGER_STDDEV: Standard deviation multiplier (default: 2).
        BOLLINGER_OFFSET: Series offset in bars (default: 0).

    Style attributes keep their defaults.
    """
    return BollingerSettings(
        length=_env_number("BOLLINGER_LENGTH", "20", int),
        source=coerce_source(os.getenv("BOLLINGER_SOURCE", "close")),
        stddev_multiplier=_env_number("BOLLINGER_STDDEV", "2", float),
        offset=_env_number("BOLLINGER_OFFSET", "0", int),
    )
