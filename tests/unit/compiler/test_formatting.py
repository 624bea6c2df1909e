from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from app.compiler.formatting import (
    format_long_date,
    format_short_date,
    format_usd,
    parse_amount,
    stringify,
)


def test_parse_amount_is_lenient():
    assert parse_amount("12.5 USD") == Decimal("12.5")
    assert parse_amount(" -3") == Decimal("-3")
    assert parse_amount("abc") == Decimal("0")
    assert parse_amount(None) == Decimal("0")
    assert parse_amount(True) == Decimal("0")
    assert parse_amount(float("nan")) == Decimal("0")
    assert parse_amount(7) == Decimal("7")


def test_format_usd_groups_thousands_and_keeps_cents():
    assert format_usd(1234.5) == "$1,234.50"
    assert format_usd("1000000") == "$1,000,000.00"
    assert format_usd(-5) == "-$5.00"
    assert format_usd("not a number") == "$0.00"
    assert format_usd(Decimal("0.005")) == "$0.01"


def test_short_date_uses_calendar_date():
    assert format_short_date("2024-01-01") == "1/1/2024"
    assert format_short_date("2024-01-01T23:30:00Z") == "1/1/2024"
    assert format_short_date(date(2024, 12, 31)) == "12/31/2024"
    assert format_short_date(datetime(2024, 3, 5, 8, 0)) == "3/5/2024"


def test_short_date_passes_unparseable_text_through():
    assert format_short_date("next week") == "next week"
    assert format_short_date(None) == ""


def test_long_date():
    assert format_long_date(date(2024, 1, 31)) == "January 31, 2024"
    assert format_long_date("2024-07-04") == "July 4, 2024"
    assert format_long_date("soon") == ""


def test_stringify_matches_display_rules():
    assert stringify("x") == "x"
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(3.0) == "3"
    assert stringify(2.5) == "2.5"
    assert stringify(Decimal("10.00")) == "10.00"
    assert stringify(date(2024, 1, 15)) == "2024-01-15"
    assert stringify(None) is None
    assert stringify({"a": 1}) is None
    assert stringify([1, 2]) is None


def test_format_usd_handles_amounts_past_default_decimal_precision():
    assert format_usd(Decimal("1e27")) == "$1,000,000,000,000,000,000,000,000,000.00"
    assert format_usd("123456789012345678901234567890.125") == "$123,456,789,012,345,678,901,234,567,890.13"
    assert format_usd(-1e30) == "-$1,000,000,000,000,000,000,000,000,000,000.00"


def test_absurd_magnitudes_count_as_zero():
    assert parse_amount("1e5000") == Decimal("0")
    assert parse_amount(Decimal("1e999999")) == Decimal("0")
    assert format_usd("9e999999999") == "$0.00"
