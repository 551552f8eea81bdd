"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "£123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    if is_negative:
        amount = -amount
    return amount


def parse_amount_or_none(amount_str: Optional[str]) -> Optional[Decimal]:
    """Parse an amount string, returning None instead of raising.

    Used on best-effort paths (CSV rows, form cells) where a bad value means
    "skip this entry" rather than "abort".
    """
    if amount_str is None:
        return None
    try:
        return parse_amount(str(amount_str))
    except ValueError:
        return None


def to_decimal(value, default: Decimal = Decimal("0")) -> Decimal:
    """Coerce a stored number (int, float, str, Decimal) into a Decimal."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value
    parsed = parse_amount_or_none(str(value))
    return default if parsed is None else parsed


def format_money(amount, currency: str = "") -> str:
    """Format a Decimal amount with thousands separators and two places."""
    text = f"{amount:,.2f}"
    return f"{text} {currency}" if currency else text
