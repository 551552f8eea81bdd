"""Rule-based business advice derived from the metrics snapshot.

Each rule looks at the snapshot (and, for revenue mix, the state) and returns
an AdviceItem or None. Rules run in table order and every match is reported.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional

from agencyledger.domain.entities import ClientType, FinanceState, MetricsSnapshot
from agencyledger.domain.metrics import calculate_metrics
from agencyledger.utils.amount_parser import format_money

logger = logging.getLogger(__name__)

LOW_MARGIN_PERCENT = Decimal("10")
HIGH_MARGIN_PERCENT = Decimal("30")
LOW_CURRENT_RATIO = Decimal("1")
HIGH_CURRENT_RATIO = Decimal("3")
HIGH_DEBT_TO_EQUITY = Decimal("2")
# Tax reserve includes a 10% buffer over the computed liability
TAX_RESERVE_FACTOR = Decimal("1.1")
MONTHS_PER_YEAR = 12


class AdviceKind(str, Enum):
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


class AdvicePriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class AdviceItem:
    """One piece of advice with a suggested action."""

    kind: AdviceKind
    title: str
    description: str
    action: str
    priority: AdvicePriority


Rule = Callable[[MetricsSnapshot, FinanceState], Optional[AdviceItem]]


def _uploaded_data(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    if not metrics.has_uploaded_data:
        return None
    return AdviceItem(
        AdviceKind.SUCCESS,
        "Financial Data Integration Complete",
        f"Your uploaded financial reports for FY {state.settings.current_fiscal_year} "
        "are now included in the metrics.",
        "Review updated calculations and consider year-over-year comparisons",
        AdvicePriority.LOW,
    )


def _profit_margin(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    if metrics.profit_margin < LOW_MARGIN_PERCENT:
        return AdviceItem(
            AdviceKind.WARNING,
            "Low Profit Margin",
            "Your profit margin is below 10%. Consider reviewing your pricing "
            "strategy or reducing costs.",
            "Review pricing and cost structure",
            AdvicePriority.HIGH,
        )
    if metrics.profit_margin > HIGH_MARGIN_PERCENT:
        return AdviceItem(
            AdviceKind.SUCCESS,
            "Excellent Profit Margin",
            "Your profit margin is above 30%. Consider reinvesting in growth or "
            "building reserves.",
            "Consider growth investments",
            AdvicePriority.LOW,
        )
    return None


def _tax_planning(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    if metrics.corporation_tax <= 0:
        return None
    settings = state.settings
    due_by = f"{settings.fiscal_year_start} {settings.current_fiscal_year + 1}"
    reserve = metrics.corporation_tax * TAX_RESERVE_FACTOR
    return AdviceItem(
        AdviceKind.INFO,
        "Corporation Tax Planning",
        f"You have {format_money(metrics.corporation_tax, settings.currency)} in "
        f"corporation tax due for FY {settings.current_fiscal_year}. "
        f"Tax payments are typically due by {due_by}.",
        f"Save {format_money(reserve, settings.currency)} for tax payments",
        AdvicePriority.HIGH,
    )


def _liquidity(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    ratio = metrics.current_ratio
    # Zero means no balance sheet for the view
    if ratio <= 0:
        return None
    if ratio < LOW_CURRENT_RATIO:
        return AdviceItem(
            AdviceKind.WARNING,
            "Low Liquidity Ratio",
            f"Your current ratio of {ratio:.1f} indicates potential cash flow issues.",
            "Improve cash management and reduce short-term liabilities",
            AdvicePriority.HIGH,
        )
    if ratio > HIGH_CURRENT_RATIO:
        return AdviceItem(
            AdviceKind.INFO,
            "Excess Liquidity",
            f"Your current ratio of {ratio:.1f} suggests you may have too much idle cash.",
            "Consider investing excess cash or expanding operations",
            AdvicePriority.MEDIUM,
        )
    return None


def _leverage(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    if metrics.debt_to_equity <= HIGH_DEBT_TO_EQUITY:
        return None
    return AdviceItem(
        AdviceKind.WARNING,
        "High Debt Levels",
        f"Your debt-to-equity ratio of {metrics.debt_to_equity:.1f} indicates high leverage.",
        "Focus on debt reduction and improving equity position",
        AdvicePriority.HIGH,
    )


def _cash_flow(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    monthly_profit = (metrics.total_revenue - metrics.total_costs) / MONTHS_PER_YEAR
    if monthly_profit >= 0:
        return None
    return AdviceItem(
        AdviceKind.WARNING,
        "Negative Monthly Cash Flow",
        "Your monthly costs exceed revenue. Immediate action required.",
        "Reduce costs or increase revenue urgently",
        AdvicePriority.CRITICAL,
    )


def _revenue_mix(metrics: MetricsSnapshot, state: FinanceState) -> Optional[AdviceItem]:
    retainers = sum(1 for c in state.clients if c.type is ClientType.RETAINER)
    if retainers or not state.projects:
        return None
    return AdviceItem(
        AdviceKind.INFO,
        "Consider Recurring Revenue",
        "All your revenue comes from one-off projects. Consider offering retainer "
        "services for stable income.",
        "Develop retainer service offerings",
        AdvicePriority.MEDIUM,
    )


ADVICE_RULES: tuple[Rule, ...] = (
    _uploaded_data,
    _profit_margin,
    _tax_planning,
    _liquidity,
    _leverage,
    _cash_flow,
    _revenue_mix,
)


def get_advice(
    state: FinanceState, metrics: Optional[MetricsSnapshot] = None
) -> list[AdviceItem]:
    """Run every advice rule against the state.

    Args:
        state: Application state
        metrics: Precomputed snapshot; calculated from the state when omitted

    Returns:
        Matching advice in rule order (empty when nothing needs attention)
    """
    if metrics is None:
        metrics = calculate_metrics(state)
    advice = [item for rule in ADVICE_RULES if (item := rule(metrics, state)) is not None]
    logger.debug("%d of %d advice rules matched", len(advice), len(ADVICE_RULES))
    return advice


def general_recommendations(fiscal_year: int) -> list[tuple[str, tuple[str, ...]]]:
    """Standing recommendations by topic, independent of the figures."""
    return [
        (
            "Tax Optimization",
            (
                f"Set up a separate savings account for corporation tax (FY {fiscal_year})",
                "Consider pension contributions to reduce taxable profits",
                "Review eligible business expenses and deductions",
                "Plan major purchases before fiscal year-end for tax benefits",
            ),
        ),
        (
            "Cash Flow Management",
            (
                "Maintain 3-6 months of expenses as emergency fund",
                "Implement strict payment terms with clients",
                "Consider invoice factoring for improved cash flow",
                "Monitor and forecast cash flow monthly",
            ),
        ),
        (
            "Growth Strategies",
            (
                "Diversify service offerings to reduce risk",
                "Develop recurring revenue streams",
                "Invest in marketing to attract higher-value clients",
                "Consider strategic partnerships or acquisitions",
            ),
        ),
        (
            "Risk Management",
            (
                "Ensure adequate professional indemnity insurance",
                "Diversify client base to reduce dependency",
                "Create detailed contracts with clear scope",
                "Build strong relationships with key clients",
            ),
        ),
    ]


class AdviceService:
    """Advice for the store's current state."""

    def __init__(self, store):
        self.store = store

    def get_advice(self) -> list[AdviceItem]:
        return get_advice(self.store.state)

    def recommendations(self) -> list[tuple[str, tuple[str, ...]]]:
        return general_recommendations(self.store.state.settings.current_fiscal_year)
