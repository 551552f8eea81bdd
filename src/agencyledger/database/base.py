"""Abstract storage interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from agencyledger.domain.entities import FinanceState

STATE_KEY = "agency_finance_data"


class StateRepository(ABC):
    """Abstract persistence interface for the finance state."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Raw blob operations
    @abstractmethod
    def load_blob(self, key: str) -> Optional[str]:
        """Get the stored payload for a key, or None if absent."""
        pass

    @abstractmethod
    def save_blob(self, key: str, payload: str) -> None:
        """Create or replace the payload stored under a key."""
        pass

    # State operations
    @abstractmethod
    def load_state(self) -> Optional[FinanceState]:
        """Load the persisted finance state, or None if nothing usable is stored."""
        pass

    @abstractmethod
    def save_state(self, state: FinanceState) -> None:
        """Persist the whole finance state."""
        pass
