"""Financial report commands: import, templates, manual entry and viewing."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.entities import (
    BalanceSheetReport,
    BankTransactionsReport,
    ProfitLossReport,
    ReportType,
)
from agencyledger.domain.manual_reports import AmountEntry, MonthlyEntry
from agencyledger.domain.report import ReportService
from agencyledger.utils.amount_parser import format_money, parse_amount

REPORT_TYPES = [t.value for t in ReportType]


def _split_entry(value: str) -> tuple[str, str]:
    name, sep, rest = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected NAME=..., got '{value}'")
    return name.strip(), rest


def _parse_amount_entry(value: str) -> AmountEntry:
    name, raw = _split_entry(value)
    try:
        return AmountEntry(name=name, amount=parse_amount(raw))
    except ValueError as e:
        raise click.BadParameter(str(e))


def _parse_monthly_entry(value: str, months: tuple[str, ...]) -> MonthlyEntry:
    """Parse 'Name=Apr:1000,May:1200' into a monthly entry."""
    name, raw = _split_entry(value)
    lookup = {month.lower(): month for month in months}
    monthly = {}
    for part in filter(None, (p.strip() for p in raw.split(","))):
        month, sep, amount = part.partition(":")
        key = lookup.get(month.strip().lower()[:3])
        if not sep or key is None:
            raise click.BadParameter(f"Expected MONTH:AMOUNT, got '{part}'")
        try:
            monthly[key] = parse_amount(amount)
        except ValueError as e:
            raise click.BadParameter(str(e))
    return MonthlyEntry(name=name, monthly=monthly)


def _echo_items(title: str, items, total) -> None:
    click.echo(f"\n{title}:")
    for key, item in items.items():
        click.echo(f"  {item.name:32s} {format_money(item.value):>14s}  ({key})")
    click.echo(f"  {'Total':32s} {format_money(total):>14s}")


def _echo_report(report) -> None:
    meta = report.metadata
    click.echo(f"{report.report_type.value} report for FY {meta.fiscal_year}")
    click.echo(f"Source: {meta.source.value}  File: {meta.original_file_name or '-'}")
    click.echo(f"Uploaded: {meta.upload_date or '-'}")

    if isinstance(report, ProfitLossReport):
        _echo_items("Revenue", report.revenue, report.total_revenue)
        _echo_items("Expenses", report.expenses, report.total_expenses)
        click.echo(f"\nNet income: {format_money(report.net_income)}")
    elif isinstance(report, BalanceSheetReport):
        _echo_items("Assets", report.assets, report.total_assets)
        _echo_items("Liabilities", report.liabilities, report.total_liabilities)
        _echo_items("Equity", report.equity, report.total_equity)
    elif isinstance(report, BankTransactionsReport):
        click.echo("")
        for txn in report.transactions:
            click.echo(
                f"{txn.date:10s} | {txn.description[:30]:30s} | "
                f"{format_money(txn.amount):>12s} | {txn.type.value:7s} | {txn.category.value}"
            )
        summary = report.summary
        click.echo(
            f"\n{summary.total_transactions} transactions, "
            f"credits {format_money(summary.total_credits)}, "
            f"debits {format_money(summary.total_debits)}"
        )


@click.group()
def report_group():
    """Import, enter and view financial reports."""
    pass


@report_group.command("import")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False), metavar="FILE")
@click.option("--type", "report_type", type=click.Choice(REPORT_TYPES), required=True)
@click.pass_context
def import_report(ctx, file_path, report_type):
    """Import a PDF or CSV document into the current fiscal year.

    Examples:
        agencyledger report import accounts-2024.pdf --type profitLoss
        agencyledger report import statement.csv --type bankTransactions
    """
    service = ReportService(ctx.obj["store"])
    try:
        report = service.import_document(file_path, report_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Imported {report_type} report for FY {report.metadata.fiscal_year}")
    _echo_report(report)


@report_group.command("template")
@click.argument("report_type", type=click.Choice(REPORT_TYPES), metavar="TYPE")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, exists=True),
    help="Directory to write to (defaults to the working directory)",
)
@click.pass_context
def template(ctx, report_type, output_dir):
    """Write an example CSV for the current fiscal year."""
    service = ReportService(ctx.obj["store"])
    try:
        path = service.write_template(report_type, output_dir)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Wrote {path}")


@report_group.command("show")
@click.argument("report_type", type=click.Choice(REPORT_TYPES), metavar="TYPE")
@click.option("--year", type=int, help="Show the report archived for this fiscal year")
@click.pass_context
def show_report(ctx, report_type, year):
    """Show the current (or an archived) report."""
    service = ReportService(ctx.obj["store"])
    report = service.get_report(report_type, fiscal_year=year)
    if report is None:
        click.echo("No report found.")
        return
    _echo_report(report)


@report_group.command("list")
@click.pass_context
def list_reports(ctx):
    """List archived reports by fiscal year."""
    service = ReportService(ctx.obj["store"])
    archive = service.list_reports()
    if not any(archive.values()):
        click.echo("No reports found.")
        return
    for year, reports in archive.items():
        if not reports:
            continue
        click.echo(f"FY {year}:")
        for report_type, report in reports.items():
            click.echo(
                f"  {report_type.value:16s} {report.metadata.source.value:14s} "
                f"{report.metadata.original_file_name or '-'}"
            )


@report_group.command("delete")
@click.argument("report_type", type=click.Choice(REPORT_TYPES), metavar="TYPE")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_report(ctx, report_type, yes):
    """Delete the current fiscal year's report of a type."""
    service = ReportService(ctx.obj["store"])
    if not yes and not click.confirm(f"Delete the current {report_type} report?"):
        click.echo("Deletion cancelled.")
        return
    try:
        service.delete_report(report_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted {report_type} report")


@report_group.group("manual")
def manual_group():
    """Enter a report by hand."""
    pass


@manual_group.command("profit-loss")
@click.option("--revenue", multiple=True, help="NAME=MON:AMOUNT,MON:AMOUNT (repeatable)")
@click.option("--expense", multiple=True, help="NAME=MON:AMOUNT,MON:AMOUNT (repeatable)")
@click.pass_context
def manual_profit_loss(ctx, revenue, expense):
    """Enter a Profit & Loss statement month by month.

    Examples:
        agencyledger report manual profit-loss --revenue "Retainers=Apr:5000,May:5000" \\
            --expense "Salaries=Apr:3000,May:3000"
    """
    service = ReportService(ctx.obj["store"])
    months = service.fiscal_months()
    revenue_rows = [_parse_monthly_entry(value, months) for value in revenue]
    expense_rows = [_parse_monthly_entry(value, months) for value in expense]
    report = service.enter_profit_loss(revenue_rows, expense_rows)
    click.echo(f"Saved manual profitLoss report for FY {report.metadata.fiscal_year}")
    _echo_report(report)


@manual_group.command("balance-sheet")
@click.option("--asset", multiple=True, help="NAME=AMOUNT (repeatable)")
@click.option("--liability", multiple=True, help="NAME=AMOUNT (repeatable)")
@click.option("--equity", multiple=True, help="NAME=AMOUNT (repeatable)")
@click.pass_context
def manual_balance_sheet(ctx, asset, liability, equity):
    """Enter a Balance Sheet as totals per line."""
    service = ReportService(ctx.obj["store"])
    report = service.enter_balance_sheet(
        [_parse_amount_entry(value) for value in asset],
        [_parse_amount_entry(value) for value in liability],
        [_parse_amount_entry(value) for value in equity],
    )
    click.echo(f"Saved manual balanceSheet report for FY {report.metadata.fiscal_year}")
    _echo_report(report)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
