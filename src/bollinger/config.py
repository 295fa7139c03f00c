"""Bollinger Bands settings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class Source(Enum):
    """Per-bar scalar fed into the rolling statistics."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    HL2 = "hl2"
    HLC3 = "hlc3"
    OHLC4 = "ohlc4"


class MAType(Enum):
    """Moving average kind used for the basis line."""

    SMA = "sma"


class LineDash(Enum):
    """Line drawing style for the rendering collaborator."""

    SOLID = "solid"
    DASHED = "dashed"


@dataclass(frozen=True)
class LineStyle:
    """Visual attributes for one band line (not used in computation)."""

    visible: bool = True
    color: str = "#f7c52d"
    width: int = 1
    style: LineDash = LineDash.SOLID


@dataclass(frozen=True)
class FillStyle:
    """Visual attributes for the area between the bands."""

    visible: bool = True
    opacity: int = 10


@dataclass(frozen=True)
class BollingerSettings:
    """Configuration for one Bollinger Bands computation.

    Attributes:
        length: Window size; bars required before a value is defined.
        source: Bar field (or derived price) used per bar. Plain strings are
            accepted; unknown ones resolve to close at compute time.
        stddev_multiplier: Multiplier applied to the standard deviation.
        offset: Shift of all three series along the index axis. Positive
            values show at bar ``i`` the value computed for bar ``i - offset``.
        ma_type: Moving average kind (SMA only).
        basis: Style of the middle line.
        upper: Style of the upper band.
        lower: Style of the lower band.
        fill: Style of the fill between the bands.
    """

    length: int = 20
    source: Source | str = Source.CLOSE
    stddev_multiplier: float = 2.0
    offset: int = 0
    ma_type: MAType = MAType.SMA

    basis: LineStyle = field(default_factory=lambda: LineStyle(color="#f7c52d"))
    upper: LineStyle = field(default_factory=lambda: LineStyle(color="#2962ff"))
    lower: LineStyle = field(default_factory=lambda: LineStyle(color="#c84bc7"))
    fill: FillStyle = field(default_factory=FillStyle)


DEFAULT_SETTINGS = BollingerSettings()

# Editor affordances only; the engine accepts any value.
SETTINGS_RANGES: dict[str, tuple[float, float]] = {
    "length": (5, 50),
    "stddev_multiplier": (0.5, 5.0),
    "offset": (-20, 20),
    "fill_opacity": (0, 100),
}


def coerce_source(value: Source | str | None) -> Source:
    """Resolve a source selector, falling back to close for unknown values."""
    if isinstance(value, Source):
        return value
    if isinstance(value, str):
        try:
            return Source(value.strip().lower())
        except ValueError:
            return Source.CLOSE
    return Source.CLOSE


def _clamp(value: float, name: str) -> float:
    lo, hi = SETTINGS_RANGES[name]
    return max(lo, min(hi, value))


def clamp_settings(settings: BollingerSettings) -> BollingerSettings:
    """Return a copy of ``settings`` clamped into ``SETTINGS_RANGES``.

    Used by settings editors; style attributes other than fill opacity are
    left untouched and the source selector is normalized to a ``Source``.
    """
    return replace(
        settings,
        length=int(_clamp(settings.length, "length")),
        source=coerce_source(settings.source),
        stddev_multiplier=float(_clamp(settings.stddev_multiplier, "stddev_multiplier")),
        offset=int(_clamp(settings.offset, "offset")),
        fill=replace(
            settings.fill,
            opacity=int(_clamp(settings.fill.opacity, "fill_opacity")),
        ),
    )
