"""Backup commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.backup import BackupService


@click.group()
def backup_group():
    """Export, restore or clear all data."""
    pass


@backup_group.command("export")
@click.argument("target", required=False, type=click.Path())
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the JSON instead of writing a file")
@click.pass_context
def export_backup(ctx, target, to_stdout):
    """Write all data as JSON.

    TARGET may be a file or a directory; it defaults to a dated file in the
    working directory.
    """
    service = BackupService(ctx.obj["store"])
    if to_stdout:
        click.echo(service.export_json())
        return
    path = service.export_backup(target)
    click.echo(f"Exported backup to {path}")


@backup_group.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def import_backup(ctx, source, yes):
    """Replace all data with a backup file."""
    if not yes and not click.confirm("This replaces all current data. Continue?"):
        click.echo("Import cancelled.")
        return
    service = BackupService(ctx.obj["store"])
    try:
        state = service.import_backup(source)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(
        f"Imported {len(state.clients)} clients, {len(state.projects)} projects "
        f"and {len(state.all_costs())} costs"
    )


@backup_group.command("clear")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def clear(ctx, yes):
    """Delete all data and reset settings."""
    if not yes and not click.confirm("Delete ALL data?"):
        click.echo("Clear cancelled.")
        return
    BackupService(ctx.obj["store"]).clear_all()
    click.echo("All data cleared.")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
