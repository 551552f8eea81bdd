"""Advice command."""

import click
from agencyledger.domain.advice import AdviceService


@click.command("advice")
@click.option("--tips", is_flag=True, help="Also list general recommendations by topic")
@click.pass_context
def advice(ctx, tips):
    """Show recommendations based on the current metrics."""
    service = AdviceService(ctx.obj["store"])
    items = service.get_advice()

    if not items:
        click.echo("Your financial metrics look good! Keep monitoring regularly.")
    for item in items:
        click.echo(f"[{item.priority.value.upper()}] {item.title} ({item.kind.value})")
        click.echo(f"  {item.description}")
        click.echo(f"  Action: {item.action}")

    if tips:
        for topic, recommendations in service.recommendations():
            click.echo(f"\n{topic}:")
            for recommendation in recommendations:
                click.echo(f"  - {recommendation}")


def register_commands(cli):
    """Register advice command with main CLI."""
    cli.add_command(advice, name="advice")
