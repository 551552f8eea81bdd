"""Tests for CSV template generation."""

from decimal import Decimal
import pytest

from agencyledger.domain.bank_transactions import parse_bank_transactions
from agencyledger.domain.csv_parser import parse_csv_text
from agencyledger.domain.csv_reports import balance_sheet_from_rows, profit_loss_from_rows
from agencyledger.domain.csv_templates import (
    generate_csv_template,
    template_filename,
    write_csv_template,
)
from agencyledger.domain.entities import TransactionCategory, TransactionType
from agencyledger.domain.errors import ValidationError


def test_profit_loss_template_round_trip():
    rows = parse_csv_text(generate_csv_template("profitLoss", 2024, "April"))
    assert len(rows) == 15

    report = profit_loss_from_rows(rows)
    assert len(report.revenue) == 4
    assert len(report.expenses) == 11
    assert report.total_revenue == Decimal("110000")
    assert report.total_expenses == Decimal("76900")
    assert report.net_income == Decimal("33100")


def test_profit_loss_template_headings_name_the_window():
    text = generate_csv_template("profitLoss", 2024, "April")
    lines = text.split("\n")
    assert lines[0] == "Account,Amount,Type,Notes"
    assert lines[1].startswith("# REVENUE ITEMS - FY2024 (2024-04-01 to 2025-03-31)")
    assert "# EXPENSE ITEMS - FY2024" in text


def test_balance_sheet_template_round_trip():
    rows = parse_csv_text(generate_csv_template("balanceSheet", 2024, "April"))
    assert len(rows) == 12

    report = balance_sheet_from_rows(rows)
    assert report.total_assets == Decimal("76000")
    assert report.total_liabilities == Decimal("32000")
    assert report.total_equity == Decimal("44000")


def test_bank_template_round_trip():
    rows = parse_csv_text(generate_csv_template("bankTransactions", 2024, "April"))
    assert len(rows) == 9

    report = parse_bank_transactions(rows)
    assert report.summary.total_transactions == 9
    assert report.summary.total_credits == Decimal("10025")
    assert report.summary.total_debits == Decimal("4850")


def test_bank_template_dates_follow_fiscal_start():
    rows = parse_csv_text(generate_csv_template("bankTransactions", 2024, "April"))
    assert rows[0]["date"] == "2024-04-01"
    assert rows[1]["date"] == "2024-04-02"
    assert rows[-1]["date"] == "2024-04-30"


def test_bank_template_dates_clamped_to_month_end():
    rows = parse_csv_text(generate_csv_template("bankTransactions", 2025, "February"))
    assert rows[-1]["date"] == "2025-02-28"


def test_bank_template_rent_row():
    """The rent row parses to a 1000 office expense debit."""
    rows = parse_csv_text(generate_csv_template("bankTransactions", 2024, "April"))
    report = parse_bank_transactions(rows)
    rent = report.transactions[1]
    assert rent.date == "2024-04-02"
    assert rent.description == "Office Rent Payment"
    assert rent.amount == Decimal("1000")
    assert rent.type is TransactionType.DEBIT
    assert rent.category is TransactionCategory.OFFICE_EXPENSES


def test_january_start_window():
    text = generate_csv_template("profitLoss", 2024, "January")
    assert "(2024-01-01 to 2024-12-31)" in text


def test_unknown_report_type():
    with pytest.raises(ValidationError, match="report type"):
        generate_csv_template("cashFlow", 2024, "April")


def test_unknown_start_month():
    with pytest.raises(ValidationError):
        generate_csv_template("profitLoss", 2024, "Smarch")


def test_template_filename():
    assert template_filename("profitLoss", 2024) == "profit-loss-template-fy2024-2025.csv"
    assert template_filename("bankTransactions", 2023) == "bank-transactions-template-fy2023-2024.csv"


def test_write_csv_template(tmp_path):
    path = write_csv_template("balanceSheet", 2024, "April", str(tmp_path))
    assert path.endswith("balance-sheet-template-fy2024-2025.csv")
    assert (tmp_path / "balance-sheet-template-fy2024-2025.csv").read_text().startswith(
        "Account,Amount,Category,Notes"
    )
