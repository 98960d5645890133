"""Inventory command."""

import click

from biztracker.cli.error_handling import handle_domain_error
from biztracker.domain.entities import StockStatus
from biztracker.domain.errors import DomainError
from biztracker.domain.inventory import inventory_summary, search_items, stock_alerts
from biztracker.domain.money import format_money

STATUS_LABELS = {
    StockStatus.OUT_OF_STOCK: "Out of Stock",
    StockStatus.LOW_STOCK: "Low Stock",
    StockStatus.IN_STOCK: "In Stock",
}


@click.command("inventory")
@click.option("--search", help="Filter by item name or category")
@click.option("--alerts-only", is_flag=True, help="Only list items at or below minimum stock")
@click.pass_context
def inventory(ctx, search: str, alerts_only: bool):
    """Show stock levels, value and alerts."""
    try:
        items = ctx.obj["store"].list_inventory_items()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    summary = inventory_summary(items)
    click.echo(f"\nInventory value: {format_money(summary.total_value)}")
    click.echo(f"Low stock: {summary.low_stock_count}  Out of stock: {summary.out_of_stock_count}")

    listed = stock_alerts(items) if alerts_only else list(items)
    if search:
        listed = search_items(listed, search)
    if not listed:
        click.echo("No inventory items found.")
        return

    click.echo("-" * 80)
    for item in listed:
        click.echo(
            f"{item.item_name:<30} {item.category:<15} {item.quantity:>6} "
            f"{format_money(item.unit_price):>12}  {STATUS_LABELS[item.stock_status]}"
        )


def register_commands(cli):
    """Register inventory command with main CLI."""
    cli.add_command(inventory)
