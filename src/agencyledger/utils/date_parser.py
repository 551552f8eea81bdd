"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

# Missing parts of a partial date ("2025", "February 2025") come from here
PARSE_DEFAULT = datetime(2000, 1, 1)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str, default=PARSE_DEFAULT)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_date_or_none(date_str: Optional[str]) -> Optional[date]:
    """Parse an absolute date, returning None for missing or bad input.

    Relative words are not accepted here: stored entity dates must name a
    calendar day on their own.
    """
    if not date_str or not str(date_str).strip():
        return None
    try:
        return date_parser.parse(str(date_str).strip(), default=PARSE_DEFAULT).date()
    except (ValueError, TypeError, OverflowError):
        return None


def month_index(month_name: str) -> Optional[int]:
    """Return the 1-based month number for a full English month name.

    Returns None when the name is not recognized.
    """
    normalized = month_name.strip().capitalize() if month_name else ""
    if normalized not in MONTH_NAMES:
        return None
    return MONTH_NAMES.index(normalized) + 1


def first_day_of_month(year: int, month: int) -> date:
    """Return the first day of a calendar month."""
    return date(year, month, 1)


def last_day_of_month(year: int, month: int) -> date:
    """Return the last day of a calendar month."""
    return date(year, month, 1) + relativedelta(months=1) - timedelta(days=1)
