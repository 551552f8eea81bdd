"""Fiscal-year-aware metrics over manual entries and uploaded reports.

Metrics are recomputed from the state on every call and never stored.
Revenue comes from retainer clients, projects, P&L revenue and bank credits;
costs come from every manual cost (costs are not fiscal-year filtered), P&L
expenses and bank debits.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from agencyledger.domain.entities import (
    BalanceSheetReport,
    BankTransactionsReport,
    ClientType,
    FinanceState,
    FinancialReport,
    LineItem,
    MetricsSnapshot,
    ProfitLossReport,
    ReportType,
    TransactionType,
    ViewMode,
)
from agencyledger.domain.fiscal_year import is_in_fiscal_year, is_valid_for_all_time

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Share of total assets treated as current when a balance sheet has no
# current/non-current split.
CURRENT_ASSETS_RATIO = Decimal("0.6")


def sum_line_items(items: Optional[dict[str, LineItem]]) -> Decimal:
    """Sum the values of a line-item map."""
    if not items:
        return ZERO
    return sum((item.value for item in items.values()), ZERO)


def _total_or_items(total: Decimal, items: dict[str, LineItem]) -> Decimal:
    """Prefer an explicit non-zero total, else add up the line items."""
    if total:
        return total
    return sum_line_items(items)


def profit_loss_contribution(report: ProfitLossReport) -> tuple[Decimal, Decimal]:
    """Revenue and expenses a P&L adds to the totals."""
    return (
        _total_or_items(report.total_revenue, report.revenue),
        _total_or_items(report.total_expenses, report.expenses),
    )


def bank_contribution(report: BankTransactionsReport) -> tuple[Decimal, Decimal]:
    """Credits and debits a bank statement adds to revenue and costs."""
    credits = ZERO
    debits = ZERO
    for txn in report.transactions:
        if txn.amount <= 0:
            continue
        if txn.type is TransactionType.CREDIT:
            credits += txn.amount
        elif txn.type is TransactionType.DEBIT:
            debits += txn.amount
    return credits, debits


def _report_contribution(report: Optional[FinancialReport]) -> tuple[Decimal, Decimal]:
    if isinstance(report, ProfitLossReport):
        return profit_loss_contribution(report)
    if isinstance(report, BankTransactionsReport):
        return bank_contribution(report)
    return ZERO, ZERO


def _sum_amounts(entities: Iterable) -> Decimal:
    return sum((entity.amount for entity in entities), ZERO)


def _is_current(report: Optional[FinancialReport], fiscal_year: int) -> bool:
    return report is not None and report.metadata.fiscal_year == fiscal_year


def current_reports(state: FinanceState) -> dict[ReportType, FinancialReport]:
    """Current reports that belong to the active fiscal year."""
    fiscal_year = state.settings.current_fiscal_year
    return {
        report_type: report
        for report_type, report in state.financial_reports.items()
        if _is_current(report, fiscal_year)
    }


def _current_totals(state: FinanceState) -> tuple[Decimal, Decimal]:
    settings = state.settings
    fiscal_year = settings.current_fiscal_year

    clients = [
        c
        for c in state.clients
        if c.type is ClientType.RETAINER
        and is_in_fiscal_year(c, fiscal_year, settings.fiscal_year_start)
    ]
    projects = [
        p for p in state.projects if is_in_fiscal_year(p, fiscal_year, settings.fiscal_year_start)
    ]
    logger.debug(
        "FY %s: %d of %d clients, %d of %d projects",
        fiscal_year,
        len(clients),
        len(state.clients),
        len(projects),
        len(state.projects),
    )

    revenue = _sum_amounts(clients) + _sum_amounts(projects)
    costs = _sum_amounts(state.all_costs())

    reports = current_reports(state)
    for report_type in (ReportType.PROFIT_LOSS, ReportType.BANK_TRANSACTIONS):
        added_revenue, added_costs = _report_contribution(reports.get(report_type))
        revenue += added_revenue
        costs += added_costs

    return revenue, costs


def _all_time_totals(state: FinanceState) -> tuple[Decimal, Decimal]:
    clients = [
        c for c in state.clients if c.type is ClientType.RETAINER and is_valid_for_all_time(c)
    ]
    projects = [p for p in state.projects if is_valid_for_all_time(p)]

    revenue = _sum_amounts(clients) + _sum_amounts(projects)
    costs = _sum_amounts(state.all_costs())

    for year_reports in state.historical_data.values():
        for report_type in (ReportType.PROFIT_LOSS, ReportType.BANK_TRANSACTIONS):
            added_revenue, added_costs = _report_contribution(year_reports.get(report_type))
            revenue += added_revenue
            costs += added_costs

    return revenue, costs


def _balance_sheet_figures(report: BalanceSheetReport) -> tuple[Decimal, Decimal, Decimal]:
    total_assets = _total_or_items(report.total_assets, report.assets)
    liabilities = _total_or_items(report.total_liabilities, report.liabilities)
    equity = _total_or_items(report.total_equity, report.equity)
    return total_assets, liabilities, equity


def has_uploaded_data(state: FinanceState) -> bool:
    """Whether any report feeds the active view."""
    if state.settings.view_mode is ViewMode.ALL_TIME:
        return any(
            report is not None
            for year_reports in state.historical_data.values()
            for report in year_reports.values()
        )
    return bool(current_reports(state))


def calculate_metrics(state: FinanceState) -> MetricsSnapshot:
    """Compute the metrics snapshot for the state's active view.

    Args:
        state: Full finance state

    Returns:
        MetricsSnapshot with profit figures and, in the current view,
        balance sheet ratios
    """
    settings = state.settings
    if settings.view_mode is ViewMode.ALL_TIME:
        total_revenue, total_costs = _all_time_totals(state)
    else:
        total_revenue, total_costs = _current_totals(state)

    gross_profit = total_revenue - total_costs
    corporation_tax = gross_profit * settings.corporation_tax_rate if gross_profit > 0 else ZERO
    net_profit = gross_profit - corporation_tax
    profit_margin = gross_profit / total_revenue * HUNDRED if total_revenue > 0 else ZERO

    current_assets = ZERO
    current_liabilities = ZERO
    total_assets = ZERO
    total_equity = ZERO

    if settings.view_mode is ViewMode.CURRENT:
        balance_sheet = current_reports(state).get(ReportType.BALANCE_SHEET)
        if isinstance(balance_sheet, BalanceSheetReport):
            total_assets, current_liabilities, total_equity = _balance_sheet_figures(
                balance_sheet
            )
            current_assets = total_assets * CURRENT_ASSETS_RATIO

    current_ratio = current_assets / current_liabilities if current_liabilities > 0 else ZERO
    debt_to_equity = current_liabilities / total_equity if total_equity > 0 else ZERO
    roe_percent = net_profit / total_equity * HUNDRED if total_equity > 0 else ZERO

    logger.info(
        "Metrics (%s, FY %s): revenue %s, costs %s, profit %s",
        settings.view_mode.value,
        settings.current_fiscal_year,
        total_revenue,
        total_costs,
        gross_profit,
    )
    return MetricsSnapshot(
        total_revenue=total_revenue,
        total_costs=total_costs,
        gross_profit=gross_profit,
        corporation_tax=corporation_tax,
        net_profit=net_profit,
        profit_margin=profit_margin,
        current_assets=current_assets,
        current_liabilities=current_liabilities,
        total_assets=total_assets,
        total_equity=total_equity,
        current_ratio=current_ratio,
        debt_to_equity=debt_to_equity,
        roe_percent=roe_percent,
        has_uploaded_data=has_uploaded_data(state),
    )


class MetricsService:
    """Read-only access to metrics for the store's current state."""

    def __init__(self, store):
        self.store = store

    def get_metrics(self) -> MetricsSnapshot:
        return calculate_metrics(self.store.state)
