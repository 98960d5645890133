"""Dashboard command."""

import click

from biztracker.cli.date_filters import (
    collect_period_flags,
    describe_range,
    period_options,
    resolve_cli_date_range,
)
from biztracker.cli.error_handling import handle_domain_error
from biztracker.domain.entities import DateWindow
from biztracker.domain.errors import DomainError
from biztracker.domain.inventory import stock_alerts
from biztracker.domain.metrics import compute_metrics, profit_margin
from biztracker.domain.money import format_money, format_net_gst


@click.command("dashboard")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def dashboard(ctx, start_date: str, end_date: str, **period_kwargs):
    """Show revenue, expenses, profit and GST metrics."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )
    try:
        window = DateWindow(start, end) if start or end else None
        records = ctx.obj["store"].snapshot()
        snapshot = compute_metrics(records.expenses, records.invoices, window)
        alerts = stock_alerts(records.inventory_items)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    shown = snapshot.rounded()
    click.echo(f"\nDashboard ({describe_range(start, end)})")
    click.echo("-" * 50)
    click.echo(f"{'Total Revenue':<30} {format_money(shown.total_revenue):>19}")
    click.echo(f"{'Total Expenses':<30} {format_money(shown.total_expenses):>19}")
    click.echo(f"{'Net Profit':<30} {format_money(shown.net_profit):>19}")
    click.echo(f"{'Profit Margin':<30} {profit_margin(snapshot):>18.1f}%")
    click.echo(f"{'Pending Invoices':<30} {shown.pending_invoices:>19}")
    click.echo("-" * 50)
    click.echo(f"{'GST Collected':<30} {format_money(shown.gst_collected):>19}")
    click.echo(f"{'GST Paid':<30} {format_money(shown.gst_paid):>19}")
    click.echo(f"{'Net GST':<30} {format_net_gst(shown.net_gst):>19}")

    if alerts:
        click.echo("\nLow stock:")
        for item in alerts:
            click.echo(
                f"  {item.item_name} (current: {item.quantity}, min: {item.min_stock_level})"
            )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
