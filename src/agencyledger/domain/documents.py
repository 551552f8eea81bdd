"""Turn an uploaded PDF or CSV document into a structured report."""

import logging
import re
from datetime import date
from pathlib import Path
from typing import Optional, Union

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from agencyledger.domain.bank_transactions import parse_bank_transactions
from agencyledger.domain.csv_parser import parse_csv_file
from agencyledger.domain.csv_reports import balance_sheet_from_rows, profit_loss_from_rows
from agencyledger.domain.entities import FinancialReport, ReportType
from agencyledger.domain.errors import DocumentReadError, ValidationError, unsupported_document
from agencyledger.domain.extraction import (
    parse_balance_sheet_from_text,
    parse_profit_loss_from_text,
)
from agencyledger.domain.validation import choice

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def extract_text_from_pdf(pdf_path: Union[str, Path]) -> str:
    """Extract text from every page of a PDF.

    Whitespace within a page is collapsed to single spaces and pages are
    joined with newlines.

    Raises:
        DocumentReadError: If the file is missing or not a readable PDF
    """
    pdf_path = Path(pdf_path)
    pages: list[str] = []
    try:
        with pdfplumber.open(pdf_path) as pdf:
            for page in pdf.pages:
                text = page.extract_text() or ""
                pages.append(_WHITESPACE.sub(" ", text).strip())
    except (OSError, PSException, PdfminerException) as e:
        raise DocumentReadError(f"Failed to read PDF '{pdf_path.name}': {e}") from e

    logger.debug("Read %d pages from %s", len(pages), pdf_path.name)
    return "\n".join(pages)


def _report_from_pdf(path: Path, report_type: ReportType) -> FinancialReport:
    if report_type is ReportType.BANK_TRANSACTIONS:
        raise ValidationError("Bank transactions can only be imported from a CSV file")
    text = extract_text_from_pdf(path)
    if report_type is ReportType.PROFIT_LOSS:
        return parse_profit_loss_from_text(text)
    return parse_balance_sheet_from_text(text)


def _report_from_csv(path: Path, report_type: ReportType, today: Optional[date]) -> FinancialReport:
    rows = parse_csv_file(path)
    if report_type is ReportType.BANK_TRANSACTIONS:
        return parse_bank_transactions(rows, today=today)
    if report_type is ReportType.PROFIT_LOSS:
        return profit_loss_from_rows(rows)
    return balance_sheet_from_rows(rows)


def import_document(
    document_path: Union[str, Path],
    report_type: Union[str, ReportType],
    today: Optional[date] = None,
) -> FinancialReport:
    """Parse a document into a report of the declared type.

    Args:
        document_path: Path to a .pdf or .csv file
        report_type: "profitLoss", "balanceSheet" or "bankTransactions"
        today: Date used for undated bank rows

    Returns:
        Report tagged with its extraction source and timestamp

    Raises:
        ValidationError: If the type or file extension is not supported
        DocumentReadError: If the file cannot be read
    """
    path = Path(document_path)
    wanted = choice(ReportType, report_type, "report type")
    suffix = path.suffix.lower()

    logger.info("Importing %s as %s", path.name, wanted.value)
    if suffix == ".pdf":
        return _report_from_pdf(path, wanted)
    if suffix == ".csv":
        return _report_from_csv(path, wanted, today)
    raise ValidationError(unsupported_document(path.name))
