"""Reports typed in by hand, month by month for P&L and as totals for balance sheets."""

from dataclasses import dataclass, field
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

MANUAL_ITEM_SOURCE = "manual"


@dataclass(frozen=True)
class MonthlyEntry:
    """A P&L row as entered: a name plus an amount per fiscal month."""

    name: str
    monthly: dict[str, Decimal] = field(default_factory=dict)
    notes: str = ""

    def total(self, months: Sequence[str]) -> Decimal:
        return sum((self.monthly.get(month, Decimal("0")) for month in months), Decimal("0"))


@dataclass(frozen=True)
class AmountEntry:
    """A balance sheet row as entered."""

    name: str
    amount: Decimal
    notes: str = ""


def _monthly_section(
    entries: Sequence[MonthlyEntry], prefix: str, months: Sequence[str]
) -> tuple[dict[str, LineItem], Decimal]:
    section: dict[str, LineItem] = {}
    total = Decimal("0")
    for index, entry in enumerate(entries, start=1):
        if not entry.name:
            continue
        breakdown = {month: entry.monthly.get(month, Decimal("0")) for month in months}
        item_total = entry.total(months)
        if item_total > 0:
            section[f"{prefix}_{index}"] = LineItem(
                name=entry.name,
                value=item_total,
                monthly_breakdown=breakdown,
                notes=entry.notes,
                source=MANUAL_ITEM_SOURCE,
            )
            total += item_total
    return section, total


def _month_totals(entries: Sequence[MonthlyEntry], months: Sequence[str]) -> dict[str, Decimal]:
    return {
        month: sum((entry.monthly.get(month, Decimal("0")) for entry in entries), Decimal("0"))
        for month in months
    }


def build_profit_loss(
    revenue: Sequence[MonthlyEntry],
    expenses: Sequence[MonthlyEntry],
    months: Sequence[str],
    fiscal_year: Optional[int] = None,
    fiscal_year_start: Optional[str] = None,
    extracted_at: Optional[str] = None,
) -> ProfitLossReport:
    """Build a P&L from monthly entries.

    Rows without a name or with a non-positive yearly total are left out.
    Month totals cover every entered row.

    Args:
        revenue: Revenue rows
        expenses: Expense rows
        months: Month abbreviations in fiscal order
        fiscal_year: Fiscal year the figures belong to
        fiscal_year_start: Start month name recorded on the report
        extracted_at: Timestamp to record (defaults to now)
    """
    revenue_items, total_revenue = _monthly_section(revenue, "revenue", months)
    expense_items, total_expenses = _monthly_section(expenses, "expense", months)

    revenue_by_month = _month_totals(revenue, months)
    expenses_by_month = _month_totals(expenses, months)
    profit_by_month = {
        month: revenue_by_month[month] - expenses_by_month[month] for month in months
    }

    return ProfitLossReport(
        metadata=ReportMetadata(
            source=ReportSource.MANUAL_FORM,
            extracted_at=extracted_at or datetime.now(UTC).isoformat(),
            fiscal_year=fiscal_year,
            fiscal_year_start=fiscal_year_start,
            fiscal_month_order=tuple(months),
        ),
        revenue=revenue_items,
        expenses=expense_items,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_income=total_revenue - total_expenses,
        monthly_totals={
            "revenue": revenue_by_month,
            "expenses": expenses_by_month,
            "profit": profit_by_month,
        },
    )


def _amount_section(
    entries: Sequence[AmountEntry], prefix: str, allow_negative: bool
) -> tuple[dict[str, LineItem], Decimal]:
    section: dict[str, LineItem] = {}
    total = Decimal("0")
    for index, entry in enumerate(entries, start=1):
        keep = entry.amount != 0 if allow_negative else entry.amount > 0
        if entry.name and keep:
            section[f"{prefix}_{index}"] = LineItem(
                name=entry.name,
                value=entry.amount,
                notes=entry.notes,
                source=MANUAL_ITEM_SOURCE,
            )
            total += entry.amount
    return section, total


def build_balance_sheet(
    assets: Sequence[AmountEntry],
    liabilities: Sequence[AmountEntry],
    equity: Sequence[AmountEntry],
    fiscal_year: Optional[int] = None,
    fiscal_year_start: Optional[str] = None,
    extracted_at: Optional[str] = None,
) -> BalanceSheetReport:
    """Build a balance sheet from entered amounts.

    Assets and liabilities must be positive; equity rows may be negative but
    not zero.
    """
    asset_items, total_assets = _amount_section(assets, "asset", allow_negative=False)
    liability_items, total_liabilities = _amount_section(
        liabilities, "liability", allow_negative=False
    )
    equity_items, total_equity = _amount_section(equity, "equity", allow_negative=True)

    return BalanceSheetReport(
        metadata=ReportMetadata(
            source=ReportSource.MANUAL_FORM,
            extracted_at=extracted_at or datetime.now(UTC).isoformat(),
            fiscal_year=fiscal_year,
            fiscal_year_start=fiscal_year_start,
        ),
        assets=asset_items,
        liabilities=liability_items,
        equity=equity_items,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
    )
