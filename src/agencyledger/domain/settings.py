"""Settings domain service."""

import logging
from decimal import Decimal
from typing import Optional, Union

from agencyledger.domain.entities import Settings, ViewMode
from agencyledger.domain.errors import ValidationError, invalid_choice
from agencyledger.domain.fiscal_year import available_fiscal_years
from agencyledger.domain.store import Action, ActionType, FinanceStore
from agencyledger.domain.validation import choice
from agencyledger.utils.amount_parser import parse_amount_or_none
from agencyledger.utils.date_parser import MONTH_ABBREVIATIONS, MONTH_NAMES, month_index

logger = logging.getLogger(__name__)

# The window of the last year must end before date.max
MAX_FISCAL_YEAR = 9998


def _canonical_month(name: str) -> str:
    index = month_index(name)
    abbreviation = name.strip().capitalize()
    if index is None and abbreviation in MONTH_ABBREVIATIONS:
        index = MONTH_ABBREVIATIONS.index(abbreviation) + 1
    if index is None:
        raise ValidationError(invalid_choice("fiscal year start", name, MONTH_NAMES))
    return MONTH_NAMES[index - 1]


def _tax_rate(value: Union[str, Decimal]) -> Decimal:
    rate = value if isinstance(value, Decimal) else parse_amount_or_none(str(value))
    if rate is None or not (0 <= rate <= 1):
        raise ValidationError(f"Corporation tax rate must be between 0 and 1 (got {value})")
    return rate


class SettingsService:
    """Service for reading and changing business settings."""

    def __init__(self, store: FinanceStore):
        """Initialize settings service.

        Args:
            store: FinanceStore holding the application state
        """
        self.store = store

    def get_settings(self) -> Settings:
        return self.store.state.settings

    def update_settings(
        self,
        fiscal_year_start: Optional[str] = None,
        corporation_tax_rate: Optional[Union[str, Decimal]] = None,
        currency: Optional[str] = None,
    ) -> Settings:
        """Change business settings. Arguments left as None are unchanged.

        Args:
            fiscal_year_start: Month name (full or abbreviated)
            corporation_tax_rate: Rate as a fraction, e.g. 0.19
            currency: Currency code

        Returns:
            Updated settings

        Raises:
            ValidationError: If the month, rate or currency is invalid
        """
        changes = {}
        if fiscal_year_start is not None:
            changes["fiscal_year_start"] = _canonical_month(fiscal_year_start)
        if corporation_tax_rate is not None:
            changes["corporation_tax_rate"] = _tax_rate(corporation_tax_rate)
        if currency is not None:
            if not currency.strip():
                raise ValidationError("Currency must not be empty")
            changes["currency"] = currency.strip().upper()

        if changes:
            self.store.dispatch(Action(ActionType.UPDATE_SETTINGS, changes))
            logger.info("Updated settings: %s", ", ".join(sorted(changes)))
        return self.get_settings()

    def change_fiscal_year(self, fiscal_year: int) -> Settings:
        """Switch the current fiscal year, loading any reports archived for it.

        Raises:
            ValidationError: If the year is not an integer between 1 and 9998
        """
        valid_type = isinstance(fiscal_year, int) and not isinstance(fiscal_year, bool)
        if not valid_type or not 0 < fiscal_year <= MAX_FISCAL_YEAR:
            raise ValidationError(f"Invalid fiscal year '{fiscal_year}'")
        self.store.dispatch(Action(ActionType.CHANGE_FISCAL_YEAR, fiscal_year))
        return self.get_settings()

    def set_view_mode(self, view_mode: Union[str, ViewMode]) -> Settings:
        mode = choice(ViewMode, view_mode, "view mode")
        self.store.dispatch(Action(ActionType.SET_VIEW_MODE, mode))
        return self.get_settings()

    def available_fiscal_years(self) -> list[int]:
        """Fiscal years that can be selected, newest first."""
        return available_fiscal_years(self.store.state, today=self.store.today)
