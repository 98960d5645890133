"""GST commands."""

from datetime import date

import click

from biztracker.cli.error_handling import handle_domain_error
from biztracker.domain.errors import DomainError
from biztracker.domain.metrics import DashboardService
from biztracker.domain.money import format_money, format_net_gst


@click.command("tax")
@click.option("--quarters", default=4, show_default=True, type=int, help="Quarters of history to show")
@click.pass_context
def tax(ctx, quarters: int):
    """Show the quarterly GST position and filing dates."""
    service = DashboardService(ctx.obj["store"])
    try:
        history = service.gst_history(count=quarters, today=date.today())
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    current = history[-1]
    click.echo(f"\nGST Breakdown - {current.label}")
    click.echo(f"  GST Collected: {format_money(current.gst.gst_collected)}")
    click.echo(f"  GST Paid:      {format_money(current.gst.gst_paid)}")
    click.echo(f"  Net GST:       {format_net_gst(current.gst.net_gst)}")
    click.echo(f"  Next filing:   {current.due_date.isoformat()}")

    click.echo("\nQuarterly GST History")
    click.echo("-" * 80)
    click.echo(f"{'Period':<10} {'Collected':>14} {'Paid':>14} {'Net':>24} {'Due':>14}")
    click.echo("-" * 80)
    for quarter in history:
        click.echo(
            f"{quarter.label:<10} "
            f"{format_money(quarter.gst.gst_collected):>14} "
            f"{format_money(quarter.gst.gst_paid):>14} "
            f"{format_net_gst(quarter.gst.net_gst):>24} "
            f"{quarter.due_date.isoformat():>14}"
        )


def register_commands(cli):
    """Register tax command with main CLI."""
    cli.add_command(tax)
