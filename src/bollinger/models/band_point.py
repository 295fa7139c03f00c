"""Band point (one Bollinger Bands output sample) data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BandPoint:
    """Basis/upper/lower values aligned with one input bar.

    ``None`` marks a value as undefined at this index (warm-up window not
    yet filled, or shifted out of range by the offset).

    Attributes:
        timestamp: Copied verbatim from the corresponding bar.
        basis: Middle band (simple moving average).
        upper: Basis plus multiplier times standard deviation.
        lower: Basis minus multiplier times standard deviation.
    """

    timestamp: str
    basis: float | None = None
    upper: float | None = None
    lower: float | None = None

    @property
    def defined(self) -> bool:
        """True when all three band values are present."""
        return (
            self.basis is not None
            and self.upper is not None
            and self.lower is not None
        )

    @property
    def width(self) -> float | None:
        """Distance between upper and lower bands."""
        if self.upper is None or self.lower is None:
            return None
        return self.upper - self.lower
