"""Bollinger error types."""

from __future__ import annotations

from enum import Enum


class BollingerErrorCode(Enum):
    """Error classification codes."""

    INVALID_CSV = "invalid_csv"
    UNSUPPORTED_FORMAT = "unsupported_format"
    MISSING_COLUMNS = "missing_columns"
    NO_DATA = "no_data"
    INVALID_SETTINGS = "invalid_settings"
    MISALIGNED_SERIES = "misaligned_series"


class BollingerError(Exception):
    """Ingestion/settings/export exception with an error code.

    The band engine itself never raises; this type covers the layers
    around it (CSV parsing, env settings, export).

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        code: BollingerErrorCode = BollingerErrorCode.INVALID_CSV,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
