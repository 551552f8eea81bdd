"""Domain model entities for agencyledger.

These are pure data classes representing business concepts, independent of
how the state is persisted. Reports are modelled as one frozen class per
report type so optional fields are explicit instead of checked by presence.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class ClientType(str, Enum):
    """Client billing relationship."""

    RETAINER = "retainer"
    ONE_TIME = "one-time"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CostCategory(str, Enum):
    """Cost bucket."""

    TEAM = "team"
    MARKETING = "marketing"
    OPERATIONS = "operations"


class CostFrequency(str, Enum):
    """How often a cost recurs."""

    MONTHLY = "monthly"
    YEARLY = "yearly"
    QUARTERLY = "quarterly"
    ONE_TIME = "one-time"


class ReportType(str, Enum):
    """Kinds of financial report that can be uploaded or entered."""

    PROFIT_LOSS = "profitLoss"
    BALANCE_SHEET = "balanceSheet"
    BANK_TRANSACTIONS = "bankTransactions"


class ReportSource(str, Enum):
    """Where a report's figures came from."""

    PDF_EXTRACTION = "pdf_extraction"
    CSV_UPLOAD = "csv_upload"
    MANUAL_FORM = "manual_form"


class TransactionType(str, Enum):
    """Direction of money for a bank transaction."""

    CREDIT = "credit"
    DEBIT = "debit"
    UNKNOWN = "unknown"


class TransactionCategory(str, Enum):
    """Heuristic category assigned from the transaction description."""

    STAFF_COSTS = "staff_costs"
    OFFICE_EXPENSES = "office_expenses"
    MARKETING = "marketing"
    CLIENT_PAYMENT = "client_payment"
    TAX = "tax"
    OTHER = "other"


class ViewMode(str, Enum):
    """Aggregation scope for metrics."""

    CURRENT = "current"
    ALL_TIME = "allTime"


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: int
    name: str
    amount: Decimal
    type: ClientType = ClientType.RETAINER
    start_date: Optional[str] = None
    notes: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""


@dataclass(frozen=True)
class Project:
    """Project domain entity."""

    id: int
    name: str
    amount: Decimal
    status: ProjectStatus = ProjectStatus.PENDING
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    client: str = ""
    description: str = ""
    notes: str = ""


@dataclass(frozen=True)
class Cost:
    """Cost domain entity."""

    id: int
    name: str
    category: CostCategory
    amount: Decimal
    frequency: CostFrequency = CostFrequency.MONTHLY
    start_date: Optional[str] = None
    description: str = ""
    notes: str = ""


@dataclass(frozen=True)
class LineItem:
    """A single named monetary entry within a report category."""

    name: str
    value: Decimal
    monthly_breakdown: Optional[dict[str, Decimal]] = None
    notes: str = ""
    source: str = ""


@dataclass(frozen=True)
class ReportMetadata:
    """Provenance shared by every report variant."""

    source: ReportSource
    extracted_at: Optional[str] = None
    fiscal_year: Optional[int] = None
    upload_date: Optional[str] = None
    original_file_name: Optional[str] = None
    fiscal_year_start: Optional[str] = None
    fiscal_month_order: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProfitLossReport:
    """Profit & Loss statement."""

    metadata: ReportMetadata
    revenue: dict[str, LineItem] = field(default_factory=dict)
    expenses: dict[str, LineItem] = field(default_factory=dict)
    total_revenue: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")
    monthly_totals: Optional[dict[str, dict[str, Decimal]]] = None

    report_type = ReportType.PROFIT_LOSS


@dataclass(frozen=True)
class BalanceSheetReport:
    """Balance sheet."""

    metadata: ReportMetadata
    assets: dict[str, LineItem] = field(default_factory=dict)
    liabilities: dict[str, LineItem] = field(default_factory=dict)
    equity: dict[str, LineItem] = field(default_factory=dict)
    total_assets: Decimal = Decimal("0")
    total_liabilities: Decimal = Decimal("0")
    total_equity: Decimal = Decimal("0")

    report_type = ReportType.BALANCE_SHEET


@dataclass(frozen=True)
class BankTransaction:
    """A classified bank statement line."""

    id: str
    date: str
    description: str
    amount: Decimal
    type: TransactionType
    category: TransactionCategory


@dataclass(frozen=True)
class TransactionSummary:
    """Counts and totals over a set of bank transactions."""

    total_transactions: int = 0
    total_credits: Decimal = Decimal("0")
    total_debits: Decimal = Decimal("0")


@dataclass(frozen=True)
class BankTransactionsReport:
    """Bank statement converted to typed transactions."""

    metadata: ReportMetadata
    transactions: tuple[BankTransaction, ...] = ()
    summary: TransactionSummary = field(default_factory=TransactionSummary)

    report_type = ReportType.BANK_TRANSACTIONS


FinancialReport = Union[ProfitLossReport, BalanceSheetReport, BankTransactionsReport]


@dataclass(frozen=True)
class Settings:
    """Process-wide user settings."""

    fiscal_year_start: str = "April"
    current_fiscal_year: int = field(default_factory=lambda: date.today().year)
    corporation_tax_rate: Decimal = Decimal("0.19")
    currency: str = "GBP"
    view_mode: ViewMode = ViewMode.CURRENT


def empty_costs() -> dict[CostCategory, tuple[Cost, ...]]:
    """Return a cost map with every category present and empty."""
    return {category: () for category in CostCategory}


def empty_reports() -> dict[ReportType, Optional[FinancialReport]]:
    """Return a report map with every report type present and unset."""
    return {report_type: None for report_type in ReportType}


@dataclass(frozen=True)
class FinanceState:
    """The whole aggregate state tree."""

    clients: tuple[Client, ...] = ()
    projects: tuple[Project, ...] = ()
    costs: dict[CostCategory, tuple[Cost, ...]] = field(default_factory=empty_costs)
    financial_reports: dict[ReportType, Optional[FinancialReport]] = field(
        default_factory=empty_reports
    )
    settings: Settings = field(default_factory=Settings)
    historical_data: dict[int, dict[ReportType, FinancialReport]] = field(
        default_factory=dict
    )
    next_id: int = 1

    def all_costs(self) -> list[Cost]:
        """Flatten costs across categories in category order."""
        return [cost for category in CostCategory for cost in self.costs.get(category, ())]


@dataclass(frozen=True)
class MetricsSnapshot:
    """Derived metrics for the active view; never persisted."""

    total_revenue: Decimal
    total_costs: Decimal
    gross_profit: Decimal
    corporation_tax: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    current_assets: Decimal
    current_liabilities: Decimal
    total_assets: Decimal
    total_equity: Decimal
    current_ratio: Decimal
    debt_to_equity: Decimal
    roe_percent: Decimal
    has_uploaded_data: bool
