"""Memoization backends for computed band series."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Sequence

from bollinger.config import BollingerSettings
from bollinger.models.band_point import BandPoint
from bollinger.models.bar import Bar

CacheKey = tuple[tuple[Bar, ...], BollingerSettings]


class CacheBackend(ABC):
    """Abstract cache interface."""

    @abstractmethod
    def get(
        self, bars: Sequence[Bar], settings: BollingerSettings,
    ) -> list[BandPoint] | None:
        """Return cached bands, or None on miss."""
        ...

    @abstractmethod
    def store(
        self, bars: Sequence[Bar], settings: BollingerSettings, bands: list[BandPoint],
    ) -> None:
        """Store bands computed for ``(bars, settings)``."""
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class NoCache(CacheBackend):
    """No-op cache: always misses."""

    def get(self, bars, settings):  # type: ignore[override]
        return None

    def store(self, bars, settings, bands):  # type: ignore[override]
        pass

    def clear(self):
        pass


class BandCache(CacheBackend):
    """In-memory LRU cache keyed on bar values and settings.

    Bars and settings are frozen dataclasses, so the key is their value, not
    the identity of the caller's list. Hits return a new list so callers
    cannot mutate the stored series.
    """

    def __init__(self, max_entries: int = 128) -> None:
        self.max_entries = max_entries
        self._store: OrderedDict[CacheKey, list[BandPoint]] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(bars: Sequence[Bar], settings: BollingerSettings) -> CacheKey:
        return (tuple(bars), settings)

    def _evict_lru(self) -> None:
        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)

    def get(
        self, bars: Sequence[Bar], settings: BollingerSettings,
    ) -> list[BandPoint] | None:
        key = self._key(bars, settings)
        with self._lock:
            bands = self._store.get(key)
            if bands is None:
                return None
            self._store.move_to_end(key)  # refresh LRU position
            return list(bands)

    def store(
        self, bars: Sequence[Bar], settings: BollingerSettings, bands: list[BandPoint],
    ) -> None:
        key = self._key(bars, settings)
        with self._lock:
            self._store[key] = list(bands)
            self._store.move_to_end(key)
            self._evict_lru()

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
