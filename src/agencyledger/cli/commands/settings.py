"""Settings commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.entities import ViewMode
from agencyledger.domain.fiscal_year import fiscal_year_label
from agencyledger.domain.settings import SettingsService


@click.group()
def settings_group():
    """View and change business settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    settings = SettingsService(ctx.obj["store"]).get_settings()
    click.echo(f"Fiscal year start:   {settings.fiscal_year_start}")
    click.echo(
        f"Current fiscal year: {settings.current_fiscal_year} "
        f"({fiscal_year_label(settings.current_fiscal_year, settings.fiscal_year_start)})"
    )
    click.echo(f"Corporation tax:     {settings.corporation_tax_rate}")
    click.echo(f"Currency:            {settings.currency}")
    click.echo(f"View mode:           {settings.view_mode.value}")


@settings_group.command("set")
@click.option("--fiscal-year-start", help="Month the fiscal year starts in, e.g. April")
@click.option("--tax-rate", help="Corporation tax rate as a fraction, e.g. 0.19")
@click.option("--currency", help="Currency code, e.g. GBP")
@click.pass_context
def set_settings(ctx, fiscal_year_start, tax_rate, currency):
    """Change business settings."""
    service = SettingsService(ctx.obj["store"])
    try:
        service.update_settings(
            fiscal_year_start=fiscal_year_start,
            corporation_tax_rate=tax_rate,
            currency=currency,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo("Settings updated.")


@settings_group.command("fiscal-year")
@click.argument("year", type=int)
@click.pass_context
def change_fiscal_year(ctx, year):
    """Switch the current fiscal year.

    Reports archived for YEAR become the current reports.
    """
    service = SettingsService(ctx.obj["store"])
    try:
        settings = service.change_fiscal_year(year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(
        f"Current fiscal year is now "
        f"{fiscal_year_label(settings.current_fiscal_year, settings.fiscal_year_start)}"
    )


@settings_group.command("view-mode")
@click.argument("mode", type=click.Choice([m.value for m in ViewMode]))
@click.pass_context
def view_mode(ctx, mode):
    """Switch metrics between the current fiscal year and all time."""
    SettingsService(ctx.obj["store"]).set_view_mode(mode)
    click.echo(f"View mode set to {mode}")


@settings_group.command("years")
@click.pass_context
def list_years(ctx):
    """List selectable fiscal years."""
    service = SettingsService(ctx.obj["store"])
    current = service.get_settings().current_fiscal_year
    for year in service.available_fiscal_years():
        marker = "*" if year == current else " "
        click.echo(f"{marker} {year}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
