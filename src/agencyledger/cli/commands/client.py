"""Client management commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.client import ClientService
from agencyledger.domain.entities import ClientType
from agencyledger.utils.amount_parser import format_money

CLIENT_TYPES = [t.value for t in ClientType]


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("add")
@click.argument("name", metavar="NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--type",
    "client_type",
    type=click.Choice(CLIENT_TYPES),
    default=ClientType.RETAINER.value,
    show_default=True,
    help="Billing relationship",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or 'today')")
@click.option("--notes", default="", help="Free-text notes")
@click.option("--email", default="", help="Contact email")
@click.option("--phone", default="", help="Contact phone")
@click.option("--company", default="", help="Company name")
@click.pass_context
def add_client(ctx, name, amount, client_type, start_date, notes, email, phone, company):
    """Add a client.

    AMOUNT is the monthly retainer or one-off fee.

    Examples:
        agencyledger client add "Acme Ltd" 2500 --start-date 2024-05-01
        agencyledger client add "Beta Co" 800 --type one-time
    """
    service = ClientService(ctx.obj["store"])
    try:
        client_id = service.create_client(
            name=name,
            amount=amount,
            client_type=client_type,
            start_date=start_date,
            notes=notes,
            email=email,
            phone=phone,
            company=company,
        )
        click.echo(f"Created client '{name}' (ID: {client_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("list")
@click.option("--type", "client_type", type=click.Choice(CLIENT_TYPES), help="Only this type")
@click.pass_context
def list_clients(ctx, client_type):
    """List clients."""
    service = ClientService(ctx.obj["store"])
    clients = service.list_clients(client_type=client_type)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 72)
    for c in clients:
        click.echo(
            f"ID: {c.id:3d} | {c.name:20s} | {format_money(c.amount):>12s} | "
            f"{c.type.value:9s} | Start: {c.start_date or '-'}"
        )


@client_group.command("update")
@click.argument("client_id", type=int, metavar="CLIENT_ID")
@click.option("--name", help="New name")
@click.option("--amount", help="New amount")
@click.option("--type", "client_type", type=click.Choice(CLIENT_TYPES), help="New type")
@click.option("--start-date", help="New start date")
@click.option("--notes", help="New notes")
@click.option("--email", help="New email")
@click.option("--phone", help="New phone")
@click.option("--company", help="New company")
@click.pass_context
def update_client(
    ctx, client_id, name, amount, client_type, start_date, notes, email, phone, company
):
    """Update a client's details."""
    service = ClientService(ctx.obj["store"])
    try:
        client = service.update_client(
            client_id,
            name=name,
            amount=amount,
            client_type=client_type,
            start_date=start_date,
            notes=notes,
            email=email,
            phone=phone,
            company=company,
        )
        click.echo(f"Updated client '{client.name}' (ID: {client.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("delete")
@click.argument("client_id", type=int, metavar="CLIENT_ID")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_client(ctx, client_id, yes):
    """Delete a client."""
    service = ClientService(ctx.obj["store"])
    client = service.get_client(client_id)
    if client is None:
        click.echo(f"Error: Client {client_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete client '{client.name}' (ID: {client_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id)
        click.echo(f"Deleted client '{client.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
