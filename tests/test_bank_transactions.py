"""Tests for bank statement conversion."""

from datetime import date
from decimal import Decimal

from agencyledger.domain.bank_transactions import (
    categorize_transaction,
    parse_bank_transactions,
    resolve_amount,
)
from agencyledger.domain.csv_parser import parse_csv_text
from agencyledger.domain.entities import ReportSource, TransactionCategory, TransactionType


def test_categorize_by_keyword():
    assert categorize_transaction("Monthly PAYROLL run") is TransactionCategory.STAFF_COSTS
    assert categorize_transaction("Office rent") is TransactionCategory.OFFICE_EXPENSES
    assert categorize_transaction("Facebook ads") is TransactionCategory.MARKETING
    assert categorize_transaction("Invoice 1042") is TransactionCategory.CLIENT_PAYMENT
    assert categorize_transaction("HMRC VAT return") is TransactionCategory.TAX
    assert categorize_transaction("Coffee") is TransactionCategory.OTHER
    assert categorize_transaction("") is TransactionCategory.OTHER


def test_categorize_first_match_wins():
    # Staff keywords are checked before client keywords
    assert categorize_transaction("Client salary recharge") is TransactionCategory.STAFF_COSTS


def test_resolve_signed_amount():
    assert resolve_amount({"amount": "-1,000"}) == (Decimal("1000"), TransactionType.DEBIT)
    assert resolve_amount({"amount": "£250"}) == (Decimal("250"), TransactionType.CREDIT)


def test_resolve_credit_debit_columns():
    assert resolve_amount({"credit": "", "debit": "40"}) == (Decimal("40"), TransactionType.DEBIT)
    assert resolve_amount({"credit": "75", "debit": ""}) == (Decimal("75"), TransactionType.CREDIT)


def test_type_column_overrides_sign():
    amount, txn_type = resolve_amount({"amount": "100", "type": "Debit"})
    assert amount == Decimal("100")
    assert txn_type is TransactionType.DEBIT


def test_resolve_unparsable():
    assert resolve_amount({"amount": "n/a"}) == (None, TransactionType.UNKNOWN)


def test_rent_row():
    rows = parse_csv_text(
        "Date,Description,Amount,Type,Category\n"
        "2024-04-02,Office Rent Payment,-1000,debit,office_expenses\n"
    )
    report = parse_bank_transactions(rows)
    assert len(report.transactions) == 1
    txn = report.transactions[0]
    assert txn.id == "transaction_0"
    assert txn.amount == Decimal("1000")
    assert txn.type is TransactionType.DEBIT
    assert txn.category is TransactionCategory.OFFICE_EXPENSES
    assert report.summary.total_debits == Decimal("1000")
    assert report.metadata.source is ReportSource.CSV_UPLOAD


def test_skips_zero_and_comment_rows():
    rows = [
        {"date": "# heading", "description": "x", "amount": "10"},
        {"date": "2024-04-03", "description": "Zero", "amount": "0"},
        {"date": "2024-04-04", "description": "Fee", "amount": "-5"},
    ]
    report = parse_bank_transactions(rows)
    assert [t.description for t in report.transactions] == ["Fee"]
    assert report.transactions[0].id == "transaction_2"


def test_undated_row_gets_today_and_default_description():
    rows = [{"date": "", "description": "", "amount": "20"}]
    report = parse_bank_transactions(rows, today=date(2024, 6, 15))
    txn = report.transactions[0]
    assert txn.date == "2024-06-15"
    assert txn.description == "Transaction"


def test_alias_columns():
    rows = parse_csv_text(
        "Transaction Date,Memo,Deposits,Withdrawals\n"
        "2024-05-01,Payment received from client,1200,\n"
        "2024-05-02,Google Workspace,,12.50\n"
    )
    report = parse_bank_transactions(rows)
    credit, debit = report.transactions
    assert credit.type is TransactionType.CREDIT
    assert credit.category is TransactionCategory.CLIENT_PAYMENT
    assert debit.amount == Decimal("12.50")
    assert debit.category is TransactionCategory.MARKETING
    assert report.summary.total_transactions == 2
    assert report.summary.total_credits == Decimal("1200")
