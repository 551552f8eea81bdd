"""Financial report domain service."""

import logging
from datetime import date, datetime, UTC
from pathlib import Path
from typing import Optional, Sequence, Union

from agencyledger.domain.csv_templates import write_csv_template
from agencyledger.domain.documents import import_document
from agencyledger.domain.entities import (
    BalanceSheetReport,
    FinancialReport,
    ProfitLossReport,
    ReportType,
)
from agencyledger.domain.errors import NotFoundError, report_not_found
from agencyledger.domain.fiscal_year import fiscal_month_order
from agencyledger.domain.manual_reports import (
    AmountEntry,
    MonthlyEntry,
    build_balance_sheet,
    build_profit_loss,
)
from agencyledger.domain.store import Action, ActionType, FinanceStore, ReportUpload
from agencyledger.domain.validation import choice

logger = logging.getLogger(__name__)


class ReportService:
    """Service for importing, entering and managing financial reports."""

    def __init__(self, store: FinanceStore):
        """Initialize report service.

        Args:
            store: FinanceStore holding the application state
        """
        self.store = store

    def _now(self) -> str:
        return datetime.now(UTC).isoformat()

    def import_document(
        self,
        document_path: Union[str, Path],
        report_type: Union[str, ReportType],
        today: Optional[date] = None,
    ) -> FinancialReport:
        """Parse a PDF or CSV document and apply it to the current fiscal year.

        Args:
            document_path: Path to the document
            report_type: Declared report type
            today: Date used for undated bank rows

        Returns:
            The stored report, stamped with fiscal year and upload date

        Raises:
            ValidationError: If the type or file extension is not supported
            DocumentReadError: If the document cannot be read
        """
        report = import_document(document_path, report_type, today=today or self.store.today)
        return self.apply_report(report, file_name=Path(document_path).name)

    def apply_report(
        self, report: FinancialReport, file_name: Optional[str] = None
    ) -> FinancialReport:
        """Store a report as the current fiscal year's report of its type.

        The report replaces any existing one of the same type for the year.

        Returns:
            The stored report
        """
        state = self.store.dispatch(
            Action(
                ActionType.UPLOAD_FINANCIAL_REPORT,
                ReportUpload(report=report, file_name=file_name, uploaded_at=self._now()),
            )
        )
        return state.financial_reports[report.report_type]

    def get_report(
        self, report_type: Union[str, ReportType], fiscal_year: Optional[int] = None
    ) -> Optional[FinancialReport]:
        """Get a report for the current fiscal year or an archived year.

        Args:
            report_type: Report type
            fiscal_year: Archived fiscal year; None means the current report

        Returns:
            The report or None if none is stored
        """
        wanted = choice(ReportType, report_type, "report type")
        state = self.store.state
        if fiscal_year is None:
            return state.financial_reports.get(wanted)
        return state.historical_data.get(fiscal_year, {}).get(wanted)

    def list_reports(self) -> dict[int, dict[ReportType, FinancialReport]]:
        """Return archived reports by fiscal year, newest year first."""
        historical = self.store.state.historical_data
        return {year: dict(historical[year]) for year in sorted(historical, reverse=True)}

    def delete_report(self, report_type: Union[str, ReportType]) -> None:
        """Delete the current fiscal year's report of a type.

        Raises:
            NotFoundError: If no such report is stored
        """
        wanted = choice(ReportType, report_type, "report type")
        state = self.store.state
        if state.financial_reports.get(wanted) is None:
            raise NotFoundError(report_not_found(wanted.value, state.settings.current_fiscal_year))
        self.store.dispatch(Action(ActionType.DELETE_FINANCIAL_REPORT, wanted))
        logger.info(
            "Deleted %s report for FY %s", wanted.value, state.settings.current_fiscal_year
        )

    def _manual_file_name(self, report_type: ReportType) -> str:
        today = self.store.today or date.today()
        return f"{report_type.value}-manual-entry-{today.isoformat()}.json"

    def fiscal_months(self) -> tuple[str, ...]:
        """Month abbreviations in the configured fiscal order."""
        return fiscal_month_order(self.store.state.settings.fiscal_year_start)

    def enter_profit_loss(
        self, revenue: Sequence[MonthlyEntry], expenses: Sequence[MonthlyEntry]
    ) -> ProfitLossReport:
        """Build a P&L from monthly figures and apply it to the current fiscal year."""
        settings = self.store.state.settings
        report = build_profit_loss(
            revenue,
            expenses,
            self.fiscal_months(),
            fiscal_year=settings.current_fiscal_year,
            fiscal_year_start=settings.fiscal_year_start,
            extracted_at=self._now(),
        )
        return self.apply_report(report, file_name=self._manual_file_name(report.report_type))

    def enter_balance_sheet(
        self,
        assets: Sequence[AmountEntry],
        liabilities: Sequence[AmountEntry],
        equity: Sequence[AmountEntry],
    ) -> BalanceSheetReport:
        """Build a balance sheet from entered amounts and apply it."""
        settings = self.store.state.settings
        report = build_balance_sheet(
            assets,
            liabilities,
            equity,
            fiscal_year=settings.current_fiscal_year,
            fiscal_year_start=settings.fiscal_year_start,
            extracted_at=self._now(),
        )
        return self.apply_report(report, file_name=self._manual_file_name(report.report_type))

    def write_template(
        self, report_type: Union[str, ReportType], directory: Optional[str] = None
    ) -> str:
        """Write an example CSV for the current fiscal year and return its path."""
        settings = self.store.state.settings
        return write_csv_template(
            report_type, settings.current_fiscal_year, settings.fiscal_year_start, directory
        )
