"""Cost management commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.cost import CostService
from agencyledger.domain.entities import CostCategory, CostFrequency
from agencyledger.utils.amount_parser import format_money

CATEGORIES = [c.value for c in CostCategory]
FREQUENCIES = [f.value for f in CostFrequency]


@click.group()
def cost_group():
    """Manage team, marketing and operations costs."""
    pass


@cost_group.command("add")
@click.argument("category", type=click.Choice(CATEGORIES), metavar="CATEGORY")
@click.argument("name", metavar="NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--frequency",
    type=click.Choice(FREQUENCIES),
    default=CostFrequency.MONTHLY.value,
    show_default=True,
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or 'today')")
@click.option("--description", default="")
@click.option("--notes", default="")
@click.pass_context
def add_cost(ctx, category, name, amount, frequency, start_date, description, notes):
    """Add a cost.

    CATEGORY is one of team, marketing or operations.

    Examples:
        agencyledger cost add team "Designer salary" 3200
        agencyledger cost add operations "Software licences" 1200 --frequency yearly
    """
    service = CostService(ctx.obj["store"])
    try:
        cost_id = service.create_cost(
            name=name,
            category=category,
            amount=amount,
            frequency=frequency,
            start_date=start_date,
            description=description,
            notes=notes,
        )
        click.echo(f"Created {category} cost '{name}' (ID: {cost_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@cost_group.command("list")
@click.option("--category", type=click.Choice(CATEGORIES), help="Only this category")
@click.pass_context
def list_costs(ctx, category):
    """List costs grouped by category."""
    service = CostService(ctx.obj["store"])
    costs = service.list_costs(category=category)
    if not costs:
        click.echo("No costs found.")
        return

    current_category = None
    for c in costs:
        if c.category is not current_category:
            current_category = c.category
            click.echo(f"\n{current_category.value.title()}:")
            click.echo("-" * 64)
        click.echo(
            f"ID: {c.id:3d} | {c.name:20s} | {format_money(c.amount):>12s} | {c.frequency.value}"
        )


@cost_group.command("update")
@click.argument("cost_id", type=int, metavar="COST_ID")
@click.option("--name")
@click.option("--category", type=click.Choice(CATEGORIES), help="Move the cost to this category")
@click.option("--amount")
@click.option("--frequency", type=click.Choice(FREQUENCIES))
@click.option("--start-date")
@click.option("--description")
@click.option("--notes")
@click.pass_context
def update_cost(ctx, cost_id, name, category, amount, frequency, start_date, description, notes):
    """Update a cost's details."""
    service = CostService(ctx.obj["store"])
    try:
        cost = service.update_cost(
            cost_id,
            name=name,
            category=category,
            amount=amount,
            frequency=frequency,
            start_date=start_date,
            description=description,
            notes=notes,
        )
        click.echo(f"Updated {cost.category.value} cost '{cost.name}' (ID: {cost.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@cost_group.command("delete")
@click.argument("cost_id", type=int, metavar="COST_ID")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_cost(ctx, cost_id, yes):
    """Delete a cost."""
    service = CostService(ctx.obj["store"])
    cost = service.get_cost(cost_id)
    if cost is None:
        click.echo(f"Error: Cost {cost_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete cost '{cost.name}' (ID: {cost_id})?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_cost(cost_id)
    click.echo(f"Deleted cost '{cost.name}'")


def register_commands(cli):
    """Register cost commands with main CLI."""
    cli.add_command(cost_group, name="cost")
