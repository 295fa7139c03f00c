"""Quality checks run over freshly ingested bars.

``parse_csv`` logs any failed check; nothing here rejects data. The band
engine itself never looks at these results.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from bollinger.models.bar import Bar


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def _non_finite(b: Bar) -> bool:
    return not all(math.isfinite(v) for v in (b.open, b.high, b.low, b.close, b.volume))


def _non_positive_price(b: Bar) -> bool:
    return min(b.open, b.high, b.low, b.close) <= 0


def _negative_volume(b: Bar) -> bool:
    return b.volume < 0


def _inconsistent_ohlc(b: Bar) -> bool:
    return b.high < max(b.open, b.close, b.low) or b.low > min(b.open, b.close)


# name -> (bar predicate flagging a problem, message suffix)
BAR_CHECKS: dict[str, tuple[Callable[[Bar], bool], str]] = {
    "finite_values": (_non_finite, "bars with NaN/Inf values"),
    "positive_prices": (_non_positive_price, "bars with price <= 0"),
    "volume_sanity": (_negative_volume, "bars with negative volume"),
    "ohlc_consistency": (_inconsistent_ohlc, "bars with high/low outside open/close"),
}


def validate_bars(bars: Sequence[Bar]) -> ValidationResult:
    """Count bars failing each entry of ``BAR_CHECKS``.

    An empty sequence fails ``not_empty`` and skips the per-bar checks.
    Timestamps are opaque and are not checked.
    """
    result = ValidationResult()
    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    for name, (flags, suffix) in BAR_CHECKS.items():
        bad = sum(1 for b in bars if flags(b))
        if bad:
            result.checks.append(ValidationCheck(name, False, f"{bad} {suffix}"))
        else:
            result.checks.append(ValidationCheck(name, True))
    return result
