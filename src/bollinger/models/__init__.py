"""Bollinger data models."""

from bollinger.models.bar import Bar
from bollinger.models.band_point import BandPoint

__all__ = [
    "Bar",
    "BandPoint",
]
