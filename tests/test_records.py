"""
tests/test_records.py

Unit tests for the delimited-text parser and its inverse.

Coverage
--------
- Per-column numeric coercion (missing, empty, non-numeric -> NaN)
- Header and cell whitespace trimming
- Column mapping by name (reordered columns)
- Short and long rows degrade instead of raising
- Blank lines and CRLF line endings
- Serializing and re-parsing yields equal records
"""

from __future__ import annotations

import logging
import math

import pytest

from records import HEADERS, Record, format_cell, parse, to_csv_text, to_number, to_text

HEADER_LINE = ",".join(HEADERS)


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------


class TestToNumber:
    @pytest.mark.parametrize("raw,expected", [
        ("12", 12.0),
        (" 7.5 ", 7.5),
        ("-3", -3.0),
        ("0", 0.0),
    ])
    def test_numeric_cells(self, raw, expected) -> None:
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12abc", "n.a.", "1_000", "7_5.0"])
    def test_unusable_cells_become_nan(self, raw) -> None:
        assert math.isnan(to_number(raw))

    def test_empty_cell_is_not_zero(self) -> None:
        assert to_number("") != 0


class TestToText:
    def test_trims(self) -> None:
        assert to_text("  Energy ") == "Energy"

    def test_missing_is_empty_string(self) -> None:
        assert to_text(None) == ""


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


class TestParse:
    def test_typed_fields(self, sample_records) -> None:
        first = sample_records[0]
        assert first == Record(
            name="Solaria Renewables",
            ticker="SLR",
            sector="Energy",
            region="Europe",
            esg_score=84.0,
            controversy_count=1.0,
            market_cap_usd_billions=21.7,
        )

    def test_order_follows_lines(self, sample_records) -> None:
        assert [r.ticker for r in sample_records] == ["SLR", "PLX", "HLX", "LMS", "ADM"]

    def test_whitespace_trimmed(self) -> None:
        text = (
            " Company , Ticker ,Sector, Region ,ESG_Score , Controversies,MarketCap_USD_B \n"
            "  Acme Corp , ACM , Industrials , Europe , 55 , 2 , 3.5 \n"
        )
        (record,) = parse(text)
        assert record.name == "Acme Corp"
        assert record.sector == "Industrials"
        assert record.region == "Europe"
        assert record.esg_score == 55.0
        assert record.market_cap_usd_billions == 3.5

    def test_reordered_columns_mapped_by_name(self) -> None:
        text = (
            "Ticker,Company,Controversies,ESG_Score,Region,Sector,MarketCap_USD_B\n"
            "ACM,Acme Corp,2,55,Europe,Industrials,3.5\n"
        )
        (record,) = parse(text)
        assert record.name == "Acme Corp"
        assert record.ticker == "ACM"
        assert record.esg_score == 55.0
        assert record.controversy_count == 2.0

    def test_non_numeric_cell_becomes_nan_and_keeps_row(self) -> None:
        text = HEADER_LINE + "\nAcme Corp,ACM,Industrials,Europe,n/a,2,3.5\n"
        (record,) = parse(text)
        assert math.isnan(record.esg_score)
        assert record.controversy_count == 2.0
        assert record.sector == "Industrials"

    def test_short_row_fills_missing(self) -> None:
        text = HEADER_LINE + "\nAcme Corp,ACM,Industrials,Europe,55\n"
        (record,) = parse(text)
        assert record.esg_score == 55.0
        assert math.isnan(record.controversy_count)
        assert math.isnan(record.market_cap_usd_billions)

    def test_long_row_ignores_extra_fields(self) -> None:
        text = HEADER_LINE + "\nAcme Corp,ACM,Industrials,Europe,55,2,3.5,extra\n"
        (record,) = parse(text)
        assert record.market_cap_usd_billions == 3.5

    def test_malformed_rows_are_logged(self, caplog) -> None:
        text = HEADER_LINE + "\nAcme Corp,ACM,Industrials,Europe,55\nBeta,BTA,Energy,Asia,x,1,2\n"
        with caplog.at_level(logging.WARNING, logger="records"):
            records = parse(text)
        assert len(records) == 2
        assert "Line 2 has 5 fields" in caplog.text
        assert "Line 3" in caplog.text

    def test_crlf_and_blank_lines(self) -> None:
        text = HEADER_LINE + "\r\nAcme Corp,ACM,Industrials,Europe,55,2,3.5\r\n\r\n"
        records = parse(text)
        assert len(records) == 1
        assert records[0].market_cap_usd_billions == 3.5

    def test_interior_blank_line_is_a_degraded_record(self) -> None:
        text = (
            HEADER_LINE
            + "\nAcme Corp,ACM,Industrials,Europe,55,2,3.5\n\nBeta,BTA,Energy,Asia,60,1,2\n"
        )
        records = parse(text)
        assert [r.ticker for r in records] == ["ACM", "", "BTA"]
        blank = records[1]
        assert blank.sector == ""
        assert math.isnan(blank.esg_score)
        assert math.isnan(blank.controversy_count)

    def test_leading_blank_lines_skipped(self) -> None:
        text = "\n\n" + HEADER_LINE + "\nAcme Corp,ACM,Industrials,Europe,55,2,3.5\n"
        (record,) = parse(text)
        assert record.ticker == "ACM"

    @pytest.mark.parametrize("text", ["", "\n\n", HEADER_LINE, HEADER_LINE + "\n"])
    def test_no_data_rows(self, text) -> None:
        assert parse(text) == []

    def test_custom_delimiter(self) -> None:
        text = HEADER_LINE.replace(",", ";") + "\nAcme Corp;ACM;Industrials;Europe;55;2;3.5\n"
        (record,) = parse(text, delimiter=";")
        assert record.esg_score == 55.0

    def test_no_deduplication(self) -> None:
        line = "Acme Corp,ACM,Industrials,Europe,55,2,3.5"
        records = parse("\n".join([HEADER_LINE, line, line]))
        assert len(records) == 2


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    @pytest.mark.parametrize("value,expected", [
        (3.0, "3"),
        (2.5, "2.5"),
        (21.7, "21.7"),
        (math.nan, ""),
        ("Energy", "Energy"),
    ])
    def test_format_cell(self, value, expected) -> None:
        assert format_cell(value) == expected

    def test_round_trip(self, sample_records) -> None:
        assert parse(to_csv_text(sample_records)) == sample_records

    def test_header_first(self, sample_records) -> None:
        assert to_csv_text(sample_records).splitlines()[0] == HEADER_LINE

    def test_missing_values_stay_missing(self, make_record) -> None:
        (reparsed,) = parse(to_csv_text([make_record(esg=None, ctrl=3)]))
        assert math.isnan(reparsed.esg_score)
        assert reparsed.controversy_count == 3.0
