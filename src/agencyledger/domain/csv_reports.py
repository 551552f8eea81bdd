"""Profit & Loss and Balance Sheet reports from template-shaped CSV rows."""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional, Sequence

from agencyledger.domain.entities import (
    BalanceSheetReport,
    LineItem,
    ProfitLossReport,
    ReportMetadata,
    ReportSource,
)
from agencyledger.utils.amount_parser import parse_amount_or_none

logger = logging.getLogger(__name__)

NAME_ALIASES = ("account", "name", "item", "description")
PROFIT_LOSS_KIND_COLUMN = "type"
BALANCE_SHEET_KIND_COLUMN = "category"

REVENUE_KINDS = {"revenue", "income", "sales"}
EXPENSE_KINDS = {"expense", "expenses", "cost", "costs"}
ASSET_KINDS = {"asset", "assets"}
LIABILITY_KINDS = {"liability", "liabilities"}
EQUITY_KINDS = {"equity"}


def _row_name(row: dict[str, str]) -> str:
    for alias in NAME_ALIASES:
        if row.get(alias):
            return row[alias]
    return ""


def _row_item(row: dict[str, str]) -> Optional[tuple[str, Decimal, str]]:
    name = _row_name(row)
    amount = parse_amount_or_none(row.get("amount"))
    if not name or amount is None:
        return None
    return name, amount, row.get("notes", "")


def _add_item(
    section: dict[str, LineItem], prefix: str, name: str, amount: Decimal, notes: str
) -> None:
    key = f"{prefix}_{len(section) + 1}"
    section[key] = LineItem(
        name=name, value=amount, notes=notes, source=ReportSource.CSV_UPLOAD.value
    )


def _total(section: dict[str, LineItem]) -> Decimal:
    return sum((item.value for item in section.values()), Decimal("0"))


def profit_loss_from_rows(
    rows: Sequence[dict[str, str]], extracted_at: Optional[str] = None
) -> ProfitLossReport:
    """Build a P&L report from rows with account, amount and type columns.

    Rows with an unknown type, no name or an unparsable amount are skipped.
    """
    revenue: dict[str, LineItem] = {}
    expenses: dict[str, LineItem] = {}

    for row_num, row in enumerate(rows, start=2):
        parsed = _row_item(row)
        kind = (row.get(PROFIT_LOSS_KIND_COLUMN) or "").strip().lower()
        if parsed is None or kind not in REVENUE_KINDS | EXPENSE_KINDS:
            logger.debug("Skipping P&L row %d: %s", row_num, row)
            continue
        name, amount, notes = parsed
        if kind in REVENUE_KINDS:
            _add_item(revenue, "revenue", name, amount, notes)
        else:
            _add_item(expenses, "expense", name, amount, notes)

    total_revenue = _total(revenue)
    total_expenses = _total(expenses)
    return ProfitLossReport(
        metadata=ReportMetadata(
            source=ReportSource.CSV_UPLOAD,
            extracted_at=extracted_at or datetime.now(UTC).isoformat(),
        ),
        revenue=revenue,
        expenses=expenses,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_income=total_revenue - total_expenses,
    )


def balance_sheet_from_rows(
    rows: Sequence[dict[str, str]], extracted_at: Optional[str] = None
) -> BalanceSheetReport:
    """Build a balance sheet from rows with account, amount and category columns."""
    assets: dict[str, LineItem] = {}
    liabilities: dict[str, LineItem] = {}
    equity: dict[str, LineItem] = {}

    for row_num, row in enumerate(rows, start=2):
        parsed = _row_item(row)
        kind = (row.get(BALANCE_SHEET_KIND_COLUMN) or row.get("type") or "").strip().lower()
        if parsed is None:
            logger.debug("Skipping balance sheet row %d: %s", row_num, row)
            continue
        name, amount, notes = parsed
        if kind in ASSET_KINDS:
            _add_item(assets, "asset", name, amount, notes)
        elif kind in LIABILITY_KINDS:
            _add_item(liabilities, "liability", name, amount, notes)
        elif kind in EQUITY_KINDS:
            _add_item(equity, "equity", name, amount, notes)
        else:
            logger.debug("Skipping balance sheet row %d: unknown category '%s'", row_num, kind)

    return BalanceSheetReport(
        metadata=ReportMetadata(
            source=ReportSource.CSV_UPLOAD,
            extracted_at=extracted_at or datetime.now(UTC).isoformat(),
        ),
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=_total(assets),
        total_liabilities=_total(liabilities),
        total_equity=_total(equity),
    )
