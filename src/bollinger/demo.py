"""Synthetic demo bars for charts opened without an uploaded file."""

from __future__ import annotations

import random
from datetime import date, timedelta

from bollinger.models.bar import Bar


def generate_demo_bars(
    count: int = 100,
    start: date = date(2024, 1, 1),
    base_price: float = 150.0,
    seed: int = 42,
) -> list[Bar]:
    """Generate ``count`` daily bars on weekdays starting at ``start``.

    Prices follow a seeded random walk, so the same arguments always give
    the same bars. Every bar satisfies low <= open/close <= high and all
    prices stay positive.
    """
    rng = random.Random(seed)
    bars: list[Bar] = []
    current = start
    price = base_price

    while len(bars) < count:
        if current.weekday() >= 5:
            current += timedelta(days=1)
            continue

        o = price
        c = max(o * (1 + rng.gauss(0, 0.015)), 0.01)
        h = max(o, c) * (1 + rng.uniform(0, 0.01))
        l = min(o, c) * (1 - rng.uniform(0, 0.01))
        bars.append(Bar(
            timestamp=f"{current.isoformat()}T00:00:00Z",
            open=round(o, 2),
            high=round(h, 2),
            low=round(l, 2),
            close=round(c, 2),
            volume=float(rng.randint(500_000, 5_000_000)),
        ))
        price = c
        current += timedelta(days=1)

    return bars
