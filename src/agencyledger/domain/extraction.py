"""Best-effort extraction of report figures from statement text.

Each report category is described by a PatternCategory: an ordered list of
regular expressions plus the policy used to turn the matched values into a
category total. Only magnitudes are captured; every match becomes a
positionally named line item. Extraction never raises: text that matches
nothing yields empty item maps and zero totals.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from agencyledger.domain.entities import (
    BalanceSheetReport,
    LineItem,
    ProfitLossReport,
    ReportMetadata,
    ReportSource,
)

logger = logging.getLogger(__name__)

# Label, optional colon/spaces, optional currency sign, then the amount.
_AMOUNT = r"[:\s]*[£$]?\s*([,\d]+(?:\.\d{2})?)"


class AggregationPolicy(str, Enum):
    """How matched values combine into a category total."""

    MAX = "max"
    SUM = "sum"
    LAST = "last"
    TOTAL_OR_SUM = "total_or_sum"


@dataclass(frozen=True)
class PatternCategory:
    """Regex table for one report category."""

    key: str
    label: str
    patterns: tuple[re.Pattern, ...]
    policy: AggregationPolicy
    total_markers: tuple[str, ...] = ()
    allow_non_positive: bool = False


def _compile(*labels: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(label + _AMOUNT, re.IGNORECASE) for label in labels)


REVENUE = PatternCategory(
    key="revenue",
    label="Revenue",
    patterns=_compile(
        r"(?:total\s+)?(?:gross\s+)?revenue",
        r"(?:total\s+)?(?:net\s+)?sales",
        r"turnover",
        r"(?:gross\s+)?income",
        r"revenue\s+from\s+operations",
        r"turnover\s+and\s+other\s+income",
        r"sales\s+revenue",
        r"revenue\s+£?",
        r"sales\s+£?",
    ),
    policy=AggregationPolicy.MAX,
)

EXPENSES = PatternCategory(
    key="expense",
    label="Expense",
    patterns=_compile(
        r"(?:total\s+)?(?:operating\s+)?expenses",
        r"(?:total\s+)?costs?",
        r"cost\s+of\s+(?:goods\s+)?sold",
        r"cost\s+of\s+sales",
        r"administrative\s+expenses",
        r"selling\s+expenses",
        r"staff\s+costs",
        r"employee\s+costs",
        r"wages\s+and\s+salaries",
        r"depreciation",
        r"rent",
        r"utilities",
        r"professional\s+fees",
        r"marketing",
        r"travel",
        r"insurance",
        r"other\s+expenses",
    ),
    policy=AggregationPolicy.SUM,
)

NET_INCOME = PatternCategory(
    key="net_income",
    label="Net Income",
    patterns=_compile(
        r"net\s+(?:income|profit|earnings)",
        r"profit\s+(?:before|after)\s+tax",
        r"(?:total\s+)?comprehensive\s+income",
        r"profit\s+for\s+the\s+(?:year|period)",
        r"operating\s+profit",
    ),
    policy=AggregationPolicy.LAST,
    allow_non_positive=True,
)

ASSETS = PatternCategory(
    key="asset",
    label="Asset",
    patterns=_compile(
        r"(?:total\s+)?current\s+assets",
        r"(?:total\s+)?non[.\s-]?current\s+assets",
        r"(?:total\s+)?fixed\s+assets",
        r"(?:cash\s+and\s+)?cash\s+equivalents",
        r"(?:trade\s+)?(?:accounts\s+)?receivables?",
        r"debtors",
        r"inventory",
        r"stock",
        r"property,?\s*plant\s+and\s+equipment",
        r"tangible\s+(?:fixed\s+)?assets",
        r"intangible\s+assets",
        r"total\s+assets",
    ),
    policy=AggregationPolicy.TOTAL_OR_SUM,
    total_markers=("total assets",),
)

LIABILITIES = PatternCategory(
    key="liability",
    label="Liability",
    patterns=_compile(
        r"(?:total\s+)?current\s+liabilities",
        r"(?:total\s+)?non[.\s-]?current\s+liabilities",
        r"(?:total\s+)?long[.\s-]?term\s+(?:debt|liabilities)",
        r"(?:trade\s+)?(?:accounts\s+)?payables?",
        r"creditors",
        r"(?:short[.\s-]?term\s+)?debt",
        r"accrued\s+liabilities",
        r"provisions",
        r"total\s+liabilities",
    ),
    policy=AggregationPolicy.TOTAL_OR_SUM,
    total_markers=("total liabilities",),
)

EQUITY = PatternCategory(
    key="equity",
    label="Equity",
    patterns=_compile(
        r"(?:shareholders?|stockholders?)\s+(?:equity|funds)",
        r"(?:total\s+)?equity",
        r"retained\s+(?:earnings|profits)",
        r"(?:share\s+|called[.\s-]?up\s+)?capital",
        r"reserves",
        r"profit\s+and\s+loss\s+account",
    ),
    policy=AggregationPolicy.TOTAL_OR_SUM,
    total_markers=("total equity", "shareholders"),
    allow_non_positive=True,
)


@dataclass(frozen=True)
class Match:
    """One regex hit: which pattern fired, the matched text and its value."""

    pattern_index: int
    text: str
    value: Decimal


@dataclass(frozen=True)
class CategoryResult:
    """Line items and total extracted for one category."""

    items: dict[str, LineItem]
    total: Decimal


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return re.sub(r"\s+", " ", text or "").strip()


def _parse_value(raw: str) -> Optional[Decimal]:
    try:
        return Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None


def find_matches(category: PatternCategory, text: str) -> list[Match]:
    """Apply a category's patterns in order and return accepted matches.

    Values that do not parse, or non-positive values for categories that
    require positive amounts, are skipped.
    """
    matches: list[Match] = []
    for index, pattern in enumerate(category.patterns):
        for hit in pattern.finditer(text):
            value = _parse_value(hit.group(1))
            if value is None:
                continue
            if value <= 0 and not category.allow_non_positive:
                continue
            matches.append(Match(pattern_index=index, text=hit.group(0), value=value))
    return matches


def _is_total_match(category: PatternCategory, match: Match) -> bool:
    lowered = match.text.lower()
    return any(marker in lowered for marker in category.total_markers)


def aggregate(category: PatternCategory, matches: list[Match]) -> Decimal:
    """Combine match values according to the category's policy."""
    if not matches:
        return Decimal("0")

    if category.policy is AggregationPolicy.MAX:
        return max(match.value for match in matches)
    if category.policy is AggregationPolicy.SUM:
        return sum((match.value for match in matches), Decimal("0"))
    if category.policy is AggregationPolicy.LAST:
        return matches[-1].value

    explicit_totals = [abs(m.value) for m in matches if _is_total_match(category, m)]
    if explicit_totals:
        return max(explicit_totals)
    return sum((match.value for match in matches), Decimal("0"))


def extract_category(category: PatternCategory, text: str) -> CategoryResult:
    """Run one category's patterns over text and build its line items."""
    matches = find_matches(category, text)
    items: dict[str, LineItem] = {}
    for match in matches:
        position = len(items)
        key = f"{category.key}_{match.pattern_index}_{position}"
        items[key] = LineItem(
            name=f"{category.label} Item {position + 1}",
            value=match.value,
            source=ReportSource.PDF_EXTRACTION.value,
        )
    total = aggregate(category, matches)
    logger.debug("Found %d %s matches, total %s", len(matches), category.key, total)
    return CategoryResult(items=items, total=total)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def parse_profit_loss_from_text(
    text: str, extracted_at: Optional[str] = None
) -> ProfitLossReport:
    """Extract a Profit & Loss report from statement text.

    Revenue total is the largest revenue match, expense total is the sum of
    expense matches and net income is the last net-income match.
    """
    clean_text = normalize_text(text)
    revenue = extract_category(REVENUE, clean_text)
    expenses = extract_category(EXPENSES, clean_text)
    net_income = extract_category(NET_INCOME, clean_text)

    logger.info(
        "P&L extraction: %d revenue items, %d expense items",
        len(revenue.items),
        len(expenses.items),
    )
    return ProfitLossReport(
        metadata=ReportMetadata(
            source=ReportSource.PDF_EXTRACTION,
            extracted_at=extracted_at or _now_iso(),
        ),
        revenue=revenue.items,
        expenses=expenses.items,
        total_revenue=revenue.total,
        total_expenses=expenses.total,
        net_income=net_income.total,
    )


def parse_balance_sheet_from_text(
    text: str, extracted_at: Optional[str] = None
) -> BalanceSheetReport:
    """Extract a Balance Sheet report from statement text.

    Each total is the largest explicitly labelled total ("total assets",
    "total liabilities", "total equity" or shareholders' funds) when one is
    present, otherwise the sum of the matched items.
    """
    clean_text = normalize_text(text)
    assets = extract_category(ASSETS, clean_text)
    liabilities = extract_category(LIABILITIES, clean_text)
    equity = extract_category(EQUITY, clean_text)

    logger.info(
        "Balance sheet extraction: %d asset, %d liability, %d equity items",
        len(assets.items),
        len(liabilities.items),
        len(equity.items),
    )
    return BalanceSheetReport(
        metadata=ReportMetadata(
            source=ReportSource.PDF_EXTRACTION,
            extracted_at=extracted_at or _now_iso(),
        ),
        assets=assets.items,
        liabilities=liabilities.items,
        equity=equity.items,
        total_assets=assets.total,
        total_liabilities=liabilities.total,
        total_equity=equity.total,
    )
