"""Main CLI entry point."""

import logging

import click
from agencyledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from agencyledger.domain.store import FinanceStore

# Import and register all commands at module level
from agencyledger.cli.commands import (
    client,
    project,
    cost,
    report,
    settings,
    metrics,
    advice,
    backup,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send library logging to stderr; DEBUG when verbose, else warnings only."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Agencyledger - Finance tracking for small agencies.

    Record clients, projects and costs, import Profit & Loss, Balance Sheet
    and bank statement documents, and review fiscal-year metrics.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["store"] = FinanceStore(db)
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
project.register_commands(cli)
cost.register_commands(cli)
report.register_commands(cli)
settings.register_commands(cli)
metrics.register_commands(cli)
advice.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
