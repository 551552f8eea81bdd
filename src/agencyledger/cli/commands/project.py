"""Project management commands."""

import click
from agencyledger.cli.error_handling import handle_domain_error
from agencyledger.domain.entities import ProjectStatus
from agencyledger.domain.project import ProjectService
from agencyledger.utils.amount_parser import format_money

STATUSES = [s.value for s in ProjectStatus]


@click.group()
def project_group():
    """Manage one-off projects."""
    pass


@project_group.command("add")
@click.argument("name", metavar="NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--status",
    type=click.Choice(STATUSES),
    default=ProjectStatus.PENDING.value,
    show_default=True,
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or 'today')")
@click.option("--end-date", help="End date")
@click.option("--client", "client_name", default="", help="Client the project is for")
@click.option("--description", default="", help="Description")
@click.option("--notes", default="", help="Free-text notes")
@click.pass_context
def add_project(ctx, name, amount, status, start_date, end_date, client_name, description, notes):
    """Add a project.

    Examples:
        agencyledger project add "Website rebuild" 12000 --start-date 2024-06-01
        agencyledger project add "Logo" 900 --status completed --client "Acme Ltd"
    """
    service = ProjectService(ctx.obj["store"])
    try:
        project_id = service.create_project(
            name=name,
            amount=amount,
            status=status,
            start_date=start_date,
            end_date=end_date,
            client=client_name,
            description=description,
            notes=notes,
        )
        click.echo(f"Created project '{name}' (ID: {project_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@project_group.command("list")
@click.option("--status", type=click.Choice(STATUSES), help="Only this status")
@click.pass_context
def list_projects(ctx, status):
    """List projects."""
    service = ProjectService(ctx.obj["store"])
    projects = service.list_projects(status=status)
    if not projects:
        click.echo("No projects found.")
        return

    click.echo("\nProjects:")
    click.echo("-" * 80)
    for p in projects:
        click.echo(
            f"ID: {p.id:3d} | {p.name:20s} | {format_money(p.amount):>12s} | "
            f"{p.status.value:11s} | {p.start_date or '-'} -> {p.end_date or '-'}"
        )


@project_group.command("update")
@click.argument("project_id", type=int, metavar="PROJECT_ID")
@click.option("--name")
@click.option("--amount")
@click.option("--status", type=click.Choice(STATUSES))
@click.option("--start-date")
@click.option("--end-date")
@click.option("--client", "client_name")
@click.option("--description")
@click.option("--notes")
@click.pass_context
def update_project(
    ctx, project_id, name, amount, status, start_date, end_date, client_name, description, notes
):
    """Update a project's details."""
    service = ProjectService(ctx.obj["store"])
    try:
        project = service.update_project(
            project_id,
            name=name,
            amount=amount,
            status=status,
            start_date=start_date,
            end_date=end_date,
            client=client_name,
            description=description,
            notes=notes,
        )
        click.echo(f"Updated project '{project.name}' (ID: {project.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@project_group.command("delete")
@click.argument("project_id", type=int, metavar="PROJECT_ID")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_project(ctx, project_id, yes):
    """Delete a project."""
    service = ProjectService(ctx.obj["store"])
    project = service.get_project(project_id)
    if project is None:
        click.echo(f"Error: Project {project_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete project '{project.name}' (ID: {project_id})?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_project(project_id)
    click.echo(f"Deleted project '{project.name}'")


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(project_group, name="project")
