"""Example CSV content for each uploadable report type."""

from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from agencyledger.domain.entities import ReportType
from agencyledger.domain.errors import ValidationError, invalid_choice
from agencyledger.domain.fiscal_year import fiscal_year_range
from agencyledger.utils.date_parser import last_day_of_month

TEMPLATE_FILE_PREFIXES = {
    ReportType.PROFIT_LOSS: "profit-loss",
    ReportType.BALANCE_SHEET: "balance-sheet",
    ReportType.BANK_TRANSACTIONS: "bank-transactions",
}

PROFIT_LOSS_REVENUE_ROWS = [
    ("Client Services Revenue", "50000", "Main service revenue"),
    ("Consulting Revenue", "25000", "Consulting fees"),
    ("Recurring Revenue", "30000", "Monthly retainers"),
    ("Other Revenue", "5000", "Miscellaneous income"),
]

PROFIT_LOSS_EXPENSE_ROWS = [
    ("Salaries and Wages", "30000", "Employee salaries"),
    ("Office Rent", "12000", "Monthly office rent"),
    ("Marketing and Advertising", "8000", "Marketing campaigns"),
    ("Professional Fees", "5000", "Legal and accounting"),
    ("Utilities", "2400", "Office utilities"),
    ("Insurance", "3000", "Business insurance"),
    ("Travel and Meals", "4000", "Business travel"),
    ("Office Supplies", "1500", "Stationery and supplies"),
    ("Software Subscriptions", "6000", "Business software"),
    ("Equipment Depreciation", "3000", "Equipment depreciation"),
    ("Other Operating Expenses", "2000", "Miscellaneous costs"),
]

# (section heading, [(account, amount, category, notes), ...])
BALANCE_SHEET_SECTIONS = [
    (
        "CURRENT ASSETS",
        [
            ("Cash and Cash Equivalents", "25000", "asset", "Bank accounts and cash"),
            ("Accounts Receivable", "15000", "asset", "Outstanding client invoices"),
            ("Prepaid Expenses", "3000", "asset", "Prepaid insurance and rent"),
        ],
    ),
    (
        "NON-CURRENT ASSETS",
        [
            ("Office Equipment", "20000", "asset", "Computers and office equipment"),
            ("Furniture and Fixtures", "8000", "asset", "Office furniture"),
            ("Software Licenses", "5000", "asset", "Intangible assets"),
        ],
    ),
    (
        "CURRENT LIABILITIES",
        [
            ("Accounts Payable", "8000", "liability", "Outstanding supplier bills"),
            ("Accrued Expenses", "4000", "liability", "Accrued salaries and utilities"),
            ("Short-term Loans", "5000", "liability", "Credit lines and short-term debt"),
        ],
    ),
    (
        "NON-CURRENT LIABILITIES",
        [
            ("Long-term Debt", "15000", "liability", "Business loans and mortgages"),
        ],
    ),
    (
        "EQUITY",
        [
            ("Share Capital", "10000", "equity", "Issued share capital"),
            ("Retained Earnings", "34000", "equity", "Accumulated profits"),
        ],
    ),
]

# (day of first fiscal month, description, amount, type, category)
BANK_TRANSACTION_ROWS = [
    (1, "Client Payment - ABC Corp", "5000", "credit", "client_payment"),
    (2, "Office Rent Payment", "-1000", "debit", "office_expenses"),
    (3, "Salary Payment - Team", "-3000", "debit", "staff_costs"),
    (5, "Google Ads Payment", "-500", "debit", "marketing"),
    (10, "Client Payment - XYZ Ltd", "3000", "credit", "client_payment"),
    (15, "Software Subscription - Adobe", "-200", "debit", "other"),
    (20, "Consulting Fee Received", "2000", "credit", "client_payment"),
    (25, "Utilities Payment", "-150", "debit", "office_expenses"),
    (30, "Bank Interest", "25", "credit", "other"),
]


def _join(rows: list[list[str]]) -> str:
    return "\n".join(",".join(row) for row in rows)


def _window_note(start: date, end: date) -> str:
    return f"({start.isoformat()} to {end.isoformat()})"


def _profit_loss_template(fiscal_year: int, start: date, end: date) -> str:
    rows = [["Account", "Amount", "Type", "Notes"]]
    rows.append([f"# REVENUE ITEMS - FY{fiscal_year} {_window_note(start, end)}", "", "", ""])
    rows.extend([name, amount, "revenue", notes] for name, amount, notes in PROFIT_LOSS_REVENUE_ROWS)
    rows.append(["", "", "", ""])
    rows.append([f"# EXPENSE ITEMS - FY{fiscal_year}", "", "", ""])
    rows.extend([name, amount, "expense", notes] for name, amount, notes in PROFIT_LOSS_EXPENSE_ROWS)
    return _join(rows)


def _balance_sheet_template(fiscal_year: int, start: date, end: date) -> str:
    rows = [["Account", "Amount", "Category", "Notes"]]
    for index, (heading, entries) in enumerate(BALANCE_SHEET_SECTIONS):
        if index == 0:
            heading = f"{heading} - FY{fiscal_year} {_window_note(start, end)}"
        else:
            rows.append(["", "", "", ""])
        rows.append([f"# {heading}", "", "", ""])
        rows.extend(list(entry) for entry in entries)
    return _join(rows)


def _bank_transactions_template(fiscal_year: int, start: date, end: date) -> str:
    rows = [["Date", "Description", "Amount", "Type", "Category"]]
    rows.append([f"# TRANSACTIONS - FY{fiscal_year} {_window_note(start, end)}", "", "", "", ""])
    month_end = last_day_of_month(start.year, start.month)
    for day, description, amount, txn_type, category in BANK_TRANSACTION_ROWS:
        txn_date = min(start + timedelta(days=day - 1), month_end)
        rows.append([txn_date.isoformat(), description, amount, txn_type, category])
    return _join(rows)


_BUILDERS = {
    ReportType.PROFIT_LOSS: _profit_loss_template,
    ReportType.BALANCE_SHEET: _balance_sheet_template,
    ReportType.BANK_TRANSACTIONS: _bank_transactions_template,
}


def _resolve_report_type(report_type: ReportType | str) -> ReportType:
    try:
        return ReportType(report_type)
    except ValueError:
        raise ValidationError(
            invalid_choice("report type", str(report_type), [t.value for t in ReportType])
        )


def generate_csv_template(
    report_type: ReportType | str, fiscal_year: int, fiscal_year_start: str
) -> str:
    """Produce example CSV content for a report type.

    Args:
        report_type: Which report the template is for
        fiscal_year: Fiscal year the example covers
        fiscal_year_start: Full month name the fiscal year starts at

    Returns:
        CSV text with a header row and commented section headings

    Raises:
        ValidationError: If the report type or month name is unknown
    """
    resolved = _resolve_report_type(report_type)
    window = fiscal_year_range(fiscal_year, fiscal_year_start)
    if window is None:
        raise ValidationError(f"Unknown fiscal year start month '{fiscal_year_start}'")
    start, end = window
    return _BUILDERS[resolved](fiscal_year, start, end)


def template_filename(report_type: ReportType | str, fiscal_year: int) -> str:
    """Return the canonical download name for a template."""
    resolved = _resolve_report_type(report_type)
    return f"{TEMPLATE_FILE_PREFIXES[resolved]}-template-fy{fiscal_year}-{fiscal_year + 1}.csv"


def write_csv_template(
    report_type: ReportType | str,
    fiscal_year: int,
    fiscal_year_start: str,
    directory: Optional[str] = None,
) -> str:
    """Write a template into a directory and return the file path."""
    target_dir = Path(directory) if directory else Path.cwd()
    target = target_dir / template_filename(report_type, fiscal_year)
    target.write_text(
        generate_csv_template(report_type, fiscal_year, fiscal_year_start), encoding="utf-8"
    )
    return str(target)
