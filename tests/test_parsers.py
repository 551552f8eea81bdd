"""Tests for amount and date parsing utilities."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from agencyledger.utils.amount_parser import parse_amount, parse_amount_or_none, to_decimal
from agencyledger.utils.date_parser import (
    last_day_of_month,
    month_index,
    parse_date,
    parse_date_or_none,
)


def test_parse_plain_amount():
    assert parse_amount("123.45") == Decimal("123.45")


def test_parse_amount_with_currency_and_commas():
    assert parse_amount("£1,234.56") == Decimal("1234.56")
    assert parse_amount("-$50") == Decimal("-50")


def test_parse_amount_parentheses_negative():
    """Accounting notation (123.45) is a negative amount."""
    assert parse_amount("(123.45)") == Decimal("-123.45")


def test_parse_amount_rejects_garbage():
    with pytest.raises(ValueError):
        parse_amount("twelve")
    with pytest.raises(ValueError):
        parse_amount("   ")
    with pytest.raises(ValueError):
        parse_amount("NaN")


def test_parse_amount_or_none():
    assert parse_amount_or_none("1,000") == Decimal("1000")
    assert parse_amount_or_none("n/a") is None
    assert parse_amount_or_none(None) is None


def test_to_decimal_accepts_stored_numbers():
    assert to_decimal(1500) == Decimal("1500")
    assert to_decimal("19.5") == Decimal("19.5")
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("bad", default=Decimal("1")) == Decimal("1")


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_relative_dates():
    assert parse_date("today") == date.today()
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_date_or_none_is_absolute_only():
    assert parse_date_or_none("2024-05-01") == date(2024, 5, 1)
    assert parse_date_or_none("today") is None
    assert parse_date_or_none("") is None


def test_month_index():
    assert month_index("April") == 4
    assert month_index("december") == 12
    assert month_index("Apr") is None


def test_last_day_of_month():
    assert last_day_of_month(2024, 2) == date(2024, 2, 29)
    assert last_day_of_month(2024, 12) == date(2024, 12, 31)


def test_partial_dates_do_not_depend_on_today():
    assert parse_date("2023") == date(2023, 1, 1)
    assert parse_date_or_none("February 2025") == date(2025, 2, 1)
    assert parse_date_or_none("March") == date(2000, 3, 1)
