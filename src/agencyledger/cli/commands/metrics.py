"""Metrics command."""

import click
from agencyledger.domain.entities import ViewMode
from agencyledger.domain.metrics import MetricsService
from agencyledger.utils.amount_parser import format_money


@click.command("metrics")
@click.pass_context
def metrics(ctx):
    """Show revenue, costs, profit and balance sheet ratios."""
    store = ctx.obj["store"]
    settings = store.state.settings
    snapshot = MetricsService(store).get_metrics()
    currency = settings.currency

    if settings.view_mode is ViewMode.ALL_TIME:
        click.echo("Metrics (all time)")
    else:
        click.echo(f"Metrics (FY {settings.current_fiscal_year})")
    click.echo("=" * 44)
    click.echo(f"{'Total revenue':24s} {format_money(snapshot.total_revenue, currency):>18s}")
    click.echo(f"{'Total costs':24s} {format_money(snapshot.total_costs, currency):>18s}")
    click.echo(f"{'Gross profit':24s} {format_money(snapshot.gross_profit, currency):>18s}")
    click.echo(f"{'Corporation tax':24s} {format_money(snapshot.corporation_tax, currency):>18s}")
    click.echo(f"{'Net profit':24s} {format_money(snapshot.net_profit, currency):>18s}")
    click.echo(f"{'Profit margin':24s} {snapshot.profit_margin:>17.1f}%")

    if snapshot.total_assets or snapshot.current_liabilities or snapshot.total_equity:
        click.echo("-" * 44)
        click.echo(f"{'Total assets':24s} {format_money(snapshot.total_assets, currency):>18s}")
        click.echo(f"{'Current ratio':24s} {snapshot.current_ratio:>18.2f}")
        click.echo(f"{'Debt to equity':24s} {snapshot.debt_to_equity:>18.2f}")
        click.echo(f"{'Return on equity':24s} {snapshot.roe_percent:>17.1f}%")

    if not snapshot.has_uploaded_data:
        click.echo("\nNo uploaded reports; figures are from manual entries only.")


def register_commands(cli):
    """Register metrics command with main CLI."""
    cli.add_command(metrics, name="metrics")
