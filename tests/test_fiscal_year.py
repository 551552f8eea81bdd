"""Tests for fiscal year windows and membership."""

from datetime import date
from decimal import Decimal

from agencyledger.domain.entities import Client, FinanceState
from agencyledger.domain.fiscal_year import (
    available_fiscal_years,
    fiscal_month_order,
    fiscal_year_label,
    fiscal_year_range,
    is_date_in_fiscal_year,
    is_in_fiscal_year,
    is_valid_for_all_time,
)


def _client(start_date):
    return Client(id=1, name="Acme", amount=Decimal("100"), start_date=start_date)


def test_april_window():
    assert fiscal_year_range(2024, "April") == (date(2024, 4, 1), date(2025, 3, 31))


def test_january_window_is_calendar_year():
    assert fiscal_year_range(2024, "January") == (date(2024, 1, 1), date(2024, 12, 31))


def test_unknown_month_has_no_window():
    assert fiscal_year_range(2024, "Smarch") is None
    assert is_date_in_fiscal_year("2024-05-01", 2024, "Smarch") is False


def test_window_bounds_inclusive():
    assert is_date_in_fiscal_year("2024-04-01", 2024, "April")
    assert is_date_in_fiscal_year("2025-03-31", 2024, "April")
    assert not is_date_in_fiscal_year("2025-04-01", 2024, "April")
    assert not is_date_in_fiscal_year("2024-03-31", 2024, "April")


def test_old_client_excluded_from_current_but_valid_all_time():
    client = _client("2023-01-01")
    assert is_in_fiscal_year(client, 2024, "April") is False
    assert is_valid_for_all_time(client) is True


def test_partial_dates_start_at_first_of_period():
    assert is_in_fiscal_year(_client("2025"), 2024, "April") is True
    assert is_in_fiscal_year(_client("February 2025"), 2024, "April") is True
    assert is_in_fiscal_year(_client("2024"), 2024, "April") is False


def test_missing_or_invalid_dates_fail_closed():
    for start_date in (None, "", "not a date"):
        client = _client(start_date)
        assert is_in_fiscal_year(client, 2024, "April") is False
        assert is_valid_for_all_time(client) is False


def test_fiscal_month_order():
    assert fiscal_month_order("April")[:3] == ("Apr", "May", "Jun")
    assert fiscal_month_order("April")[-1] == "Mar"
    assert fiscal_month_order("January")[0] == "Jan"
    assert len(fiscal_month_order("Smarch")) == 12


def test_fiscal_year_label():
    assert fiscal_year_label(2024, "April") == "April 2024 - April 2025"


def test_available_fiscal_years_includes_history():
    state = FinanceState(historical_data={2015: {}, 2023: {}})
    years = available_fiscal_years(state, today=date(2024, 6, 15))
    assert years[:6] == [2024, 2023, 2022, 2021, 2020, 2019]
    assert years[-1] == 2015
    assert years.count(2023) == 1
