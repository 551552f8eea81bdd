"""Tests for CLI commands."""

import json
from decimal import Decimal

from agencyledger.cli.main import cli
from agencyledger.database.factories import create_sqlite_database
from agencyledger.domain.store import FinanceStore


def _invoke(cli_runner, db_path, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", db_path, *args], **kwargs)


def _state(db_path):
    db = create_sqlite_database(database_path=db_path)
    try:
        return FinanceStore(db).state
    finally:
        db.disconnect()


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "client" in result.output
    assert "metrics" in result.output


def test_client_add_and_list(cli_runner, db_path):
    result = _invoke(
        cli_runner, db_path, "client", "add", "Acme Ltd", "2500", "--start-date", "2024-05-01"
    )
    assert result.exit_code == 0
    assert "Created client 'Acme Ltd' (ID: 1)" in result.output

    result = _invoke(cli_runner, db_path, "client", "list")
    assert result.exit_code == 0
    assert "Acme Ltd" in result.output
    assert "2,500.00" in result.output


def test_client_list_empty(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "client", "list")
    assert result.exit_code == 0
    assert "No clients found" in result.output


def test_client_negative_amount(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "client", "add", "Acme", "--", "-5")
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "must not be negative" in result.output


def test_client_update_and_delete(cli_runner, db_path):
    _invoke(cli_runner, db_path, "client", "add", "Acme", "100")
    result = _invoke(cli_runner, db_path, "client", "update", "1", "--amount", "150")
    assert result.exit_code == 0

    result = _invoke(cli_runner, db_path, "client", "delete", "1", input="n\n")
    assert "Deletion cancelled" in result.output

    result = _invoke(cli_runner, db_path, "client", "delete", "1", "--yes")
    assert result.exit_code == 0
    assert _state(db_path).clients == ()


def test_delete_missing_client(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "client", "delete", "9", "--yes")
    assert result.exit_code == 1
    assert "Client 9 not found" in result.output


def test_project_and_cost_commands(cli_runner, db_path):
    result = _invoke(
        cli_runner, db_path, "project", "add", "Website", "12000", "--status", "in-progress"
    )
    assert result.exit_code == 0
    result = _invoke(cli_runner, db_path, "cost", "add", "team", "Designer", "3200")
    assert result.exit_code == 0
    result = _invoke(cli_runner, db_path, "cost", "update", "2", "--category", "operations")
    assert result.exit_code == 0
    assert "operations" in result.output

    result = _invoke(cli_runner, db_path, "cost", "list")
    assert "Operations:" in result.output
    assert "Team:" not in result.output

    result = _invoke(cli_runner, db_path, "project", "list", "--status", "in-progress")
    assert "Website" in result.output


def test_cost_unknown_category(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "cost", "add", "legal", "Lawyer", "100")
    assert result.exit_code == 2


def test_settings_commands(cli_runner, db_path):
    result = _invoke(
        cli_runner, db_path, "settings", "set", "--fiscal-year-start", "January", "--tax-rate", "0.25"
    )
    assert result.exit_code == 0
    result = _invoke(cli_runner, db_path, "settings", "fiscal-year", "2024")
    assert "January 2024 - January 2025" in result.output

    result = _invoke(cli_runner, db_path, "settings", "show")
    assert "0.25" in result.output
    assert "January" in result.output

    result = _invoke(cli_runner, db_path, "settings", "set", "--tax-rate", "2")
    assert result.exit_code == 1


def test_report_template_import_and_metrics(cli_runner, db_path, tmp_path):
    _invoke(cli_runner, db_path, "settings", "fiscal-year", "2024")
    result = _invoke(
        cli_runner, db_path, "report", "template", "profitLoss", "--output-dir", str(tmp_path)
    )
    assert result.exit_code == 0
    template = tmp_path / "profit-loss-template-fy2024-2025.csv"
    assert template.exists()

    result = _invoke(
        cli_runner, db_path, "report", "import", str(template), "--type", "profitLoss"
    )
    assert result.exit_code == 0
    assert "Imported profitLoss report for FY 2024" in result.output
    assert "110,000.00" in result.output

    result = _invoke(cli_runner, db_path, "metrics")
    assert result.exit_code == 0
    assert "Metrics (FY 2024)" in result.output
    assert "110,000.00" in result.output
    assert "33,100.00" in result.output

    result = _invoke(cli_runner, db_path, "report", "list")
    assert "FY 2024:" in result.output


def test_report_import_unsupported(cli_runner, db_path, tmp_path):
    path = tmp_path / "report.txt"
    path.write_text("hello")
    result = _invoke(cli_runner, db_path, "report", "import", str(path), "--type", "profitLoss")
    assert result.exit_code == 1
    assert "Unsupported document" in result.output


def test_manual_profit_loss(cli_runner, db_path):
    result = _invoke(
        cli_runner,
        db_path,
        "report",
        "manual",
        "profit-loss",
        "--revenue",
        "Retainers=Apr:1000,May:1000",
        "--expense",
        "Salaries=Apr:500",
    )
    assert result.exit_code == 0
    report = _state(db_path).financial_reports
    profit_loss = next(r for r in report.values() if r is not None)
    assert profit_loss.total_revenue == Decimal("2000")
    assert profit_loss.net_income == Decimal("1500")


def test_manual_bad_entry(cli_runner, db_path):
    result = _invoke(
        cli_runner, db_path, "report", "manual", "balance-sheet", "--asset", "Cash"
    )
    assert result.exit_code == 2


def test_report_delete_missing(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "report", "delete", "balanceSheet", "--yes")
    assert result.exit_code == 1
    assert "No balanceSheet report" in result.output


def test_backup_round_trip(cli_runner, db_path, tmp_path):
    _invoke(cli_runner, db_path, "client", "add", "Acme", "100")
    target = tmp_path / "backup.json"
    result = _invoke(cli_runner, db_path, "backup", "export", str(target))
    assert result.exit_code == 0
    assert json.loads(target.read_text())["clients"][0]["name"] == "Acme"

    result = _invoke(cli_runner, db_path, "backup", "clear", "--yes")
    assert result.exit_code == 0
    assert _state(db_path).clients == ()

    result = _invoke(cli_runner, db_path, "backup", "import", str(target), "--yes")
    assert result.exit_code == 0
    assert "Imported 1 clients" in result.output
    assert _state(db_path).clients[0].name == "Acme"


def test_backup_export_stdout(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "backup", "export", "--stdout")
    assert result.exit_code == 0
    assert json.loads(result.output)["nextId"] == 1


def test_advice_command(cli_runner, db_path):
    result = _invoke(cli_runner, db_path, "advice")
    assert result.exit_code == 0
    # No revenue yet: margin is zero
    assert "[HIGH] Low Profit Margin" in result.output

    _invoke(cli_runner, db_path, "project", "add", "Website", "5000")
    result = _invoke(cli_runner, db_path, "advice", "--tips")
    assert "Consider Recurring Revenue" in result.output
    assert "Risk Management:" in result.output
