"""Tests for report import, manual entry and the report service."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from agencyledger.domain import documents
from agencyledger.domain.csv_reports import balance_sheet_from_rows, profit_loss_from_rows
from agencyledger.domain.documents import import_document
from agencyledger.domain.entities import (
    BalanceSheetReport,
    BankTransactionsReport,
    ProfitLossReport,
    ReportSource,
    ReportType,
)
from agencyledger.domain.errors import DocumentReadError, NotFoundError, ValidationError
from agencyledger.domain.manual_reports import (
    AmountEntry,
    MonthlyEntry,
    build_balance_sheet,
    build_profit_loss,
)
from agencyledger.domain.metrics import MetricsService

PL_CSV = "Account,Amount,Type,Notes\nFees,5000,revenue,\nRent,1200,expense,office\n"


class _FakePdf:
    def __init__(self, texts):
        self.pages = [SimpleNamespace(extract_text=lambda text=text: text) for text in texts]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_pdf(monkeypatch):
    """Make pdfplumber.open return pages with the given texts."""

    def install(*texts):
        monkeypatch.setattr(documents.pdfplumber, "open", lambda path: _FakePdf(texts))

    return install


class TestCsvReports:
    def test_profit_loss_rows(self):
        rows = [
            {"account": "Fees", "amount": "5,000", "type": "Revenue", "notes": ""},
            {"name": "Rent", "amount": "1200", "type": "costs", "notes": "office"},
            {"account": "Mystery", "amount": "10", "type": "other"},
            {"account": "", "amount": "10", "type": "revenue"},
        ]
        report = profit_loss_from_rows(rows)
        assert list(report.revenue) == ["revenue_1"]
        assert report.expenses["expense_1"].notes == "office"
        assert report.net_income == Decimal("3800")
        assert report.metadata.source is ReportSource.CSV_UPLOAD

    def test_balance_sheet_rows(self):
        rows = [
            {"account": "Cash", "amount": "100", "category": "asset"},
            {"account": "Loan", "amount": "40", "category": "liability"},
            {"account": "Capital", "amount": "60", "category": "equity"},
            {"account": "Odd", "amount": "5", "category": "unknown"},
        ]
        report = balance_sheet_from_rows(rows)
        assert (report.total_assets, report.total_liabilities, report.total_equity) == (
            Decimal("100"),
            Decimal("40"),
            Decimal("60"),
        )


class TestManualReports:
    def test_profit_loss_monthly(self):
        months = ("Apr", "May", "Jun")
        report = build_profit_loss(
            revenue=[
                MonthlyEntry("Retainers", {"Apr": Decimal("1000"), "May": Decimal("1000")}),
                MonthlyEntry("", {"Apr": Decimal("50")}),
                MonthlyEntry("Nothing", {}),
            ],
            expenses=[MonthlyEntry("Salaries", {"Apr": Decimal("600"), "Jun": Decimal("600")})],
            months=months,
            fiscal_year=2024,
            fiscal_year_start="April",
        )
        assert list(report.revenue) == ["revenue_1"]
        assert report.revenue["revenue_1"].monthly_breakdown == {
            "Apr": Decimal("1000"),
            "May": Decimal("1000"),
            "Jun": Decimal("0"),
        }
        assert report.total_revenue == Decimal("2000")
        assert report.total_expenses == Decimal("1200")
        assert report.monthly_totals["profit"]["Apr"] == Decimal("450")
        assert report.metadata.source is ReportSource.MANUAL_FORM
        assert report.metadata.fiscal_month_order == months

    def test_balance_sheet_equity_may_be_negative(self):
        report = build_balance_sheet(
            assets=[AmountEntry("Cash", Decimal("100")), AmountEntry("Zero", Decimal("0"))],
            liabilities=[AmountEntry("Loan", Decimal("-5"))],
            equity=[AmountEntry("Deficit", Decimal("-20")), AmountEntry("Nil", Decimal("0"))],
        )
        assert list(report.assets) == ["asset_1"]
        assert report.liabilities == {}
        assert report.total_equity == Decimal("-20")


class TestImportDocument:
    def test_csv_profit_loss(self, tmp_path):
        path = tmp_path / "pl.csv"
        path.write_text(PL_CSV)
        report = import_document(path, "profitLoss")
        assert isinstance(report, ProfitLossReport)
        assert report.total_revenue == Decimal("5000")

    def test_csv_bank(self, tmp_path):
        path = tmp_path / "bank.CSV"
        path.write_text("Date,Description,Amount\n2024-04-01,Invoice 7,300\n")
        report = import_document(path, ReportType.BANK_TRANSACTIONS)
        assert isinstance(report, BankTransactionsReport)
        assert report.summary.total_credits == Decimal("300")

    def test_csv_balance_sheet(self, tmp_path):
        path = tmp_path / "bs.csv"
        path.write_text("Account,Amount,Category\nCash,10,asset\n")
        assert isinstance(import_document(path, "balanceSheet"), BalanceSheetReport)

    def test_pdf_profit_loss(self, tmp_path, fake_pdf):
        fake_pdf("Turnover\n250,000.00", "Rent   1,200")
        report = import_document(tmp_path / "accounts.pdf", "profitLoss")
        assert report.total_revenue == Decimal("250000.00")
        assert report.total_expenses == Decimal("1200")
        assert report.metadata.source is ReportSource.PDF_EXTRACTION

    def test_pdf_text_pages_joined(self, fake_pdf):
        fake_pdf("Page  one\ttext", None, "Page two")
        assert documents.extract_text_from_pdf("x.pdf") == "Page one text\n\nPage two"

    def test_pdf_bank_statement_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="CSV"):
            import_document(tmp_path / "statement.pdf", "bankTransactions")

    def test_unreadable_pdf(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")
        with pytest.raises(DocumentReadError):
            import_document(path, "balanceSheet")

    def test_missing_csv(self, tmp_path):
        with pytest.raises(DocumentReadError):
            import_document(tmp_path / "missing.csv", "profitLoss")

    def test_unsupported_extension(self, tmp_path):
        with pytest.raises(ValidationError, match="Unsupported document"):
            import_document(tmp_path / "report.xlsx", "profitLoss")

    def test_unknown_report_type(self, tmp_path):
        with pytest.raises(ValidationError, match="report type"):
            import_document(tmp_path / "report.csv", "cashFlow")


class TestReportService:
    def test_import_applies_to_current_year(self, report_service, tmp_path):
        path = tmp_path / "pl.csv"
        path.write_text(PL_CSV)
        report = report_service.import_document(path, "profitLoss")
        assert report.metadata.fiscal_year == 2024
        assert report.metadata.original_file_name == "pl.csv"
        assert report.metadata.upload_date is not None
        assert report_service.get_report("profitLoss") == report
        assert report_service.get_report("profitLoss", fiscal_year=2024) == report
        assert report_service.get_report("profitLoss", fiscal_year=2023) is None

    def test_metrics_include_imported_report(self, store, report_service, sample_entities, tmp_path):
        path = tmp_path / "pl.csv"
        path.write_text(PL_CSV)
        report_service.import_document(path, "profitLoss")
        metrics = MetricsService(store).get_metrics()
        assert metrics.total_revenue == Decimal("8000")
        assert metrics.total_costs == Decimal("1700")
        assert metrics.has_uploaded_data is True

    def test_delete_report(self, report_service, tmp_path):
        path = tmp_path / "pl.csv"
        path.write_text(PL_CSV)
        report_service.import_document(path, "profitLoss")
        report_service.delete_report("profitLoss")
        assert report_service.get_report("profitLoss") is None
        with pytest.raises(NotFoundError, match="No profitLoss report for FY 2024"):
            report_service.delete_report("profitLoss")

    def test_manual_profit_loss_uses_fiscal_months(self, report_service):
        report = report_service.enter_profit_loss(
            [MonthlyEntry("Fees", {"Apr": Decimal("100")})], []
        )
        assert report.metadata.fiscal_month_order[0] == "Apr"
        assert report.metadata.fiscal_year == 2024
        assert report.metadata.original_file_name == "profitLoss-manual-entry-2024-06-15.json"
        assert report.total_revenue == Decimal("100")

    def test_manual_balance_sheet(self, report_service):
        report = report_service.enter_balance_sheet(
            [AmountEntry("Cash", Decimal("500"))], [], [AmountEntry("Capital", Decimal("500"))]
        )
        assert report_service.get_report("balanceSheet") == report

    def test_list_reports_by_year(self, report_service, settings_service):
        report_service.enter_balance_sheet([AmountEntry("Cash", Decimal("1"))], [], [])
        settings_service.change_fiscal_year(2023)
        report_service.enter_balance_sheet([AmountEntry("Cash", Decimal("2"))], [], [])
        archive = report_service.list_reports()
        assert list(archive) == [2024, 2023]
        assert report_service.get_report("balanceSheet").total_assets == Decimal("2")

    def test_write_template(self, report_service, tmp_path):
        path = report_service.write_template("profitLoss", str(tmp_path))
        assert path.endswith("profit-loss-template-fy2024-2025.csv")
