"""Utility functions for agencyledger."""

from agencyledger.utils.date_parser import parse_date
from agencyledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
