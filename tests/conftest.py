"""Shared fixtures for bollinger tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from bollinger.models.bar import Bar


def _make_bar(i: int, close: float, **kwargs) -> Bar:
    defaults = dict(
        timestamp=f"2024-01-{i + 1:02d}T00:00:00Z",
        open=close, high=close + 0.5, low=close - 0.5,
        close=close, volume=1000.0,
    )
    defaults.update(kwargs)
    return Bar(**defaults)


@pytest.fixture
def sample_bars() -> list[Bar]:
    """10 daily bars with closes 1..10."""
    return [_make_bar(i, float(i + 1)) for i in range(10)]


@pytest.fixture
def constant_bars() -> list[Bar]:
    """25 daily bars with a constant close of 100."""
    return [_make_bar(i, 100.0) for i in range(25)]
