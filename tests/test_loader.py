"""Tests for CSV ingestion."""

import logging
import warnings

import pandas as pd
import pytest

from bollinger.errors import BollingerError, BollingerErrorCode
from bollinger.loader import DEFAULT_VOLUME, MAX_ROWS, load_csv, parse_csv

VALID_CSV = """Date,Open,High,Low,Close,Volume
2024-01-02,10,12,8,11,1500
2024-01-03,11,13,10,12.5,2500
2024-01-04,12.5,14,12,13,3500
"""


def _error_code(text: str) -> BollingerErrorCode:
    with pytest.raises(BollingerError) as exc_info:
        parse_csv(text)
    return exc_info.value.code


class TestParseCsv:
    def test_valid(self):
        bars = parse_csv(VALID_CSV)
        assert len(bars) == 3
        first = bars[0]
        assert first.timestamp == "2024-01-02"
        assert (first.open, first.high, first.low, first.close) == (10.0, 12.0, 8.0, 11.0)
        assert first.volume == 1500.0
        assert bars[1].close == 12.5

    def test_blank_lines_ignored(self):
        text = "\n" + VALID_CSV.replace("\n", "\n\n")
        assert len(parse_csv(text)) == 3

    def test_header_matching_is_forgiving(self):
        text = "Timestamp, Open Price,High Price,Low Price,Close Price,Vol\n2024-01-02,10,12,8,11,99\n"
        bar = parse_csv(text)[0]
        assert bar.timestamp == "2024-01-02"
        assert bar.open == 10.0
        assert bar.close == 11.0
        assert bar.volume == 99.0

    def test_missing_timestamp_column_synthesized(self):
        text = "open,high,low,close\n10,12,8,11\n11,13,10,12\n"
        bars = parse_csv(text)
        assert bars[0].timestamp == "2024-01-01T00:00:00Z"
        assert bars[1].timestamp == "2024-01-02T00:00:00Z"

    def test_missing_volume_column_defaults(self):
        text = "date,open,high,low,close\n2024-01-02,10,12,8,11\n"
        assert parse_csv(text)[0].volume == DEFAULT_VOLUME

    def test_blank_volume_defaults(self):
        text = "date,open,high,low,close,volume\n2024-01-02,10,12,8,11,\n"
        assert parse_csv(text)[0].volume == DEFAULT_VOLUME

    def test_invalid_rows_skipped(self, caplog):
        text = (
            "date,open,high,low,close,volume\n"
            "2024-01-02,10,12,8,11,100\n"
            "2024-01-03,abc,12,8,11,100\n"
            "2024-01-04,-1,12,8,11,100\n"
            "2024-01-05,10,12,0,11,100\n"
            "2024-01-06,10,12\n"
            "2024-01-07,10,12,8,11,100\n"
        )
        with caplog.at_level(logging.WARNING, logger="bollinger.loader"):
            bars = parse_csv(text)
        assert [b.timestamp for b in bars] == ["2024-01-02", "2024-01-07"]
        assert "Skipping 4 CSV rows" in caplog.text

    def test_row_limit(self):
        rows = "\n".join(f"t{i},10,12,8,11,100" for i in range(MAX_ROWS + 25))
        bars = parse_csv("date,open,high,low,close,volume\n" + rows)
        assert len(bars) == MAX_ROWS
        assert bars[-1].timestamp == f"t{MAX_ROWS - 1}"

    def test_header_only(self):
        assert _error_code("date,open,high,low,close\n") is BollingerErrorCode.INVALID_CSV

    def test_empty(self):
        assert _error_code("") is BollingerErrorCode.INVALID_CSV

    def test_unsupported_format(self):
        with pytest.raises(BollingerError) as exc_info:
            parse_csv("name,age\nbob,3\n")
        assert exc_info.value.code is BollingerErrorCode.UNSUPPORTED_FORMAT
        assert "name, age" in str(exc_info.value)

    def test_missing_price_columns(self):
        with pytest.raises(BollingerError) as exc_info:
            parse_csv("date,open,high,low,volume\n2024-01-02,1,2,0.5,10\n")
        assert exc_info.value.code is BollingerErrorCode.MISSING_COLUMNS
        assert "close" in str(exc_info.value)

    def test_extra_fields_do_not_warn_caller(self, caplog):
        text = (
            "date,open,high,low,close,volume\n"
            "2024-01-02,10,12,8,11,100\n"
            "2024-01-03,10,12,8,11,100,extra,fields\n"
            "2024-01-04,11,13,10,12,200\n"
        )
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            with caplog.at_level(logging.WARNING, logger="bollinger.loader"):
                bars = parse_csv(text)
        assert bars[0].timestamp == "2024-01-02"
        assert bars[-1].timestamp == "2024-01-04"

    def test_quality_failures_logged(self, caplog):
        text = "date,open,high,low,close\n2024-01-02,10,8,12,11\n2024-01-03,10,12,8,11\n"
        with caplog.at_level(logging.WARNING, logger="bollinger.loader"):
            bars = parse_csv(text)
        assert len(bars) == 2
        assert "ohlc_consistency" in caplog.text

    def test_clean_file_logs_no_quality_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bollinger.loader"):
            parse_csv(VALID_CSV)
        assert "quality check" not in caplog.text

    def test_no_valid_rows(self):
        text = "date,open,high,low,close\n2024-01-02,x,y,z,w\n2024-01-03,0,0,0,0\n"
        assert _error_code(text) is BollingerErrorCode.NO_DATA


class TestLoadCsv:
    def test_reads_file(self, tmp_path):
        fp = tmp_path / "prices.csv"
        fp.write_text(VALID_CSV, encoding="utf-8")
        assert len(load_csv(fp)) == 3

    def test_accepts_str_path(self, tmp_path):
        fp = tmp_path / "PRICES.CSV"
        fp.write_text(VALID_CSV, encoding="utf-8")
        assert len(load_csv(str(fp))) == 3

    def test_rejects_non_csv_extension(self, tmp_path):
        fp = tmp_path / "prices.txt"
        fp.write_text(VALID_CSV, encoding="utf-8")
        with pytest.raises(BollingerError) as exc_info:
            load_csv(fp)
        assert exc_info.value.code is BollingerErrorCode.UNSUPPORTED_FORMAT
