"""Database layer for agencyledger application."""

from agencyledger.database.base import StateRepository
from agencyledger.database.factories import create_sqlite_database

__all__ = ["StateRepository", "create_sqlite_database"]
