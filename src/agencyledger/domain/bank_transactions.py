"""Bank statement rows to typed, categorized transactions."""

import logging
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional, Sequence

from agencyledger.domain.entities import (
    BankTransaction,
    BankTransactionsReport,
    ReportMetadata,
    ReportSource,
    TransactionCategory,
    TransactionSummary,
    TransactionType,
)
from agencyledger.domain.csv_parser import COMMENT_PREFIX
from agencyledger.utils.amount_parser import parse_amount_or_none

logger = logging.getLogger(__name__)

DATE_ALIASES = ("date", "transaction_date", "transaction date", "posting_date")
DESCRIPTION_ALIASES = ("description", "memo", "reference", "details")
AMOUNT_ALIASES = ("amount", "value", "transaction_amount")
CREDIT_ALIASES = ("credit", "credit amount", "deposits")
DEBIT_ALIASES = ("debit", "debit amount", "withdrawals")

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[TransactionCategory, tuple[str, ...]], ...] = (
    (TransactionCategory.STAFF_COSTS, ("salary", "wages", "payroll")),
    (TransactionCategory.OFFICE_EXPENSES, ("rent", "office", "utilities")),
    (TransactionCategory.MARKETING, ("marketing", "advertising", "google", "facebook")),
    (TransactionCategory.CLIENT_PAYMENT, ("invoice", "payment received", "client")),
    (TransactionCategory.TAX, ("tax", "hmrc", "vat")),
)


def categorize_transaction(description: str) -> TransactionCategory:
    """Assign a category from keywords in a transaction description."""
    lowered = (description or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return TransactionCategory.OTHER


def _first_present(row: dict[str, str], aliases: Sequence[str]) -> str:
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return ""


def resolve_amount(row: dict[str, str]) -> tuple[Optional[Decimal], TransactionType]:
    """Work out magnitude and direction for a statement row.

    A signed amount column wins; otherwise a positive credit or debit column
    decides. An explicit type column mentioning credit or debit overrides the
    inferred direction.

    Returns:
        (magnitude or None when nothing parses, transaction type)
    """
    amount_field = _first_present(row, AMOUNT_ALIASES)
    credit_field = _first_present(row, CREDIT_ALIASES)
    debit_field = _first_present(row, DEBIT_ALIASES)
    type_field = (row.get("type") or "").lower()

    amount: Optional[Decimal] = None
    txn_type = TransactionType.UNKNOWN

    if amount_field:
        signed = parse_amount_or_none(amount_field)
        if signed is not None:
            amount = abs(signed)
            txn_type = TransactionType.CREDIT if signed >= 0 else TransactionType.DEBIT
    else:
        credit = parse_amount_or_none(credit_field)
        debit = parse_amount_or_none(debit_field)
        if credit is not None and credit > 0:
            amount = credit
            txn_type = TransactionType.CREDIT
        elif debit is not None and debit > 0:
            amount = debit
            txn_type = TransactionType.DEBIT

    if "credit" in type_field:
        txn_type = TransactionType.CREDIT
    elif "debit" in type_field:
        txn_type = TransactionType.DEBIT

    return amount, txn_type


def summarize_transactions(transactions: Sequence[BankTransaction]) -> TransactionSummary:
    """Count transactions and total credits and debits."""
    credits = sum(
        (t.amount for t in transactions if t.type is TransactionType.CREDIT), Decimal("0")
    )
    debits = sum(
        (t.amount for t in transactions if t.type is TransactionType.DEBIT), Decimal("0")
    )
    return TransactionSummary(
        total_transactions=len(transactions),
        total_credits=credits,
        total_debits=debits,
    )


def parse_bank_transactions(
    rows: Sequence[dict[str, str]],
    today: Optional[date] = None,
    extracted_at: Optional[str] = None,
) -> BankTransactionsReport:
    """Convert parsed CSV rows into a bank transactions report.

    Comment rows, rows without any financial column and rows whose amount is
    not positive are dropped. Rows with no date get ``today``.

    Args:
        rows: Records from the CSV parser, keyed by lower-cased headers
        today: Date used for undated rows (defaults to the current date)
        extracted_at: Timestamp to record (defaults to now)

    Returns:
        BankTransactionsReport with transactions and summary
    """
    fallback_date = (today or date.today()).isoformat()
    transactions: list[BankTransaction] = []

    for index, row in enumerate(rows):
        date_field = _first_present(row, DATE_ALIASES)
        if date_field.startswith(COMMENT_PREFIX):
            continue

        has_money_column = any(
            _first_present(row, aliases)
            for aliases in (AMOUNT_ALIASES, CREDIT_ALIASES, DEBIT_ALIASES)
        )
        if not date_field and not has_money_column:
            continue

        amount, txn_type = resolve_amount(row)
        if amount is None or amount <= 0:
            logger.debug("Skipping row %d: no positive amount", index)
            continue

        description = _first_present(row, DESCRIPTION_ALIASES)
        transactions.append(
            BankTransaction(
                id=f"transaction_{index}",
                date=date_field or fallback_date,
                description=description or "Transaction",
                amount=amount,
                type=txn_type,
                category=categorize_transaction(description),
            )
        )

    logger.info("Parsed %d bank transactions from %d rows", len(transactions), len(rows))
    return BankTransactionsReport(
        metadata=ReportMetadata(
            source=ReportSource.CSV_UPLOAD,
            extracted_at=extracted_at or datetime.now(UTC).isoformat(),
        ),
        transactions=tuple(transactions),
        summary=summarize_transactions(transactions),
    )
