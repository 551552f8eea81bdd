"""Fiscal year windows and membership checks.

A fiscal year is named by the calendar year it starts in and covers exactly
twelve months from the configured start month. Entities with a missing or
unparsable start date never count towards any aggregate.
"""

import logging
from datetime import date
from typing import Optional, Protocol

from agencyledger.domain.entities import FinanceState
from agencyledger.utils.date_parser import (
    MONTH_ABBREVIATIONS,
    first_day_of_month,
    last_day_of_month,
    month_index,
    parse_date_or_none,
)

logger = logging.getLogger(__name__)

RECENT_YEARS_LISTED = 6


class Dated(Protocol):
    """Anything carrying a name and a raw start date."""

    name: str
    start_date: Optional[str]


def fiscal_year_range(fiscal_year: int, fiscal_year_start: str) -> Optional[tuple[date, date]]:
    """Return the first and last day of a fiscal year.

    Args:
        fiscal_year: Calendar year the fiscal year starts in
        fiscal_year_start: Full month name the fiscal year starts at

    Returns:
        (start, end) inclusive, or None if the month name is unknown
    """
    start_month = month_index(fiscal_year_start)
    if start_month is None:
        return None

    start = first_day_of_month(fiscal_year, start_month)
    if start_month == 1:
        end = last_day_of_month(fiscal_year, 12)
    else:
        end = last_day_of_month(fiscal_year + 1, start_month - 1)
    return start, end


def is_date_in_fiscal_year(
    date_string: Optional[str], fiscal_year: int, fiscal_year_start: str
) -> bool:
    """Check whether a raw date string falls inside a fiscal year window."""
    parsed = parse_date_or_none(date_string)
    if parsed is None:
        return False

    window = fiscal_year_range(fiscal_year, fiscal_year_start)
    if window is None:
        return False

    start, end = window
    return start <= parsed <= end


def is_in_fiscal_year(entity: Dated, fiscal_year: int, fiscal_year_start: str) -> bool:
    """Check whether an entity's start date falls in a specific fiscal year.

    Entities without a usable start date are excluded rather than assumed
    current.
    """
    if not entity.start_date:
        logger.debug("'%s' has no start date, excluded from FY %s", entity.name, fiscal_year)
        return False

    if parse_date_or_none(entity.start_date) is None:
        logger.debug(
            "'%s' has invalid start date '%s', excluded", entity.name, entity.start_date
        )
        return False

    included = is_date_in_fiscal_year(entity.start_date, fiscal_year, fiscal_year_start)
    logger.debug(
        "'%s' (%s) for FY %s: %s",
        entity.name,
        entity.start_date,
        fiscal_year,
        "included" if included else "excluded",
    )
    return included


def is_valid_for_all_time(entity: Dated) -> bool:
    """Check whether an entity may count towards the all-time view."""
    if parse_date_or_none(entity.start_date) is None:
        logger.debug("'%s' has no usable start date, excluded from all-time view", entity.name)
        return False
    return True


def fiscal_month_order(fiscal_year_start: str) -> tuple[str, ...]:
    """Return month abbreviations in fiscal order.

    Falls back to calendar order when the start month is unknown.
    """
    start_month = month_index(fiscal_year_start)
    if start_month is None:
        return MONTH_ABBREVIATIONS
    offset = start_month - 1
    return MONTH_ABBREVIATIONS[offset:] + MONTH_ABBREVIATIONS[:offset]


def fiscal_year_label(fiscal_year: int, fiscal_year_start: str) -> str:
    """Return a human label such as 'April 2024 - April 2025'."""
    return f"{fiscal_year_start} {fiscal_year} - {fiscal_year_start} {fiscal_year + 1}"


def available_fiscal_years(state: FinanceState, today: Optional[date] = None) -> list[int]:
    """List selectable fiscal years, newest first.

    The most recent calendar years are always offered, plus any year that has
    archived reports.
    """
    today = today or date.today()
    years = {today.year - offset for offset in range(RECENT_YEARS_LISTED)}
    years.update(int(year) for year in state.historical_data)
    return sorted(years, reverse=True)
