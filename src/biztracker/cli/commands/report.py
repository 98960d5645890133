"""Trend and category report commands."""

import click

from biztracker.cli.date_filters import (
    collect_period_flags,
    period_options,
    resolve_cli_date_range,
)
from biztracker.cli.error_handling import handle_domain_error
from biztracker.domain.entities import DateWindow
from biztracker.domain.errors import DomainError
from biztracker.domain.money import ZERO, format_money
from biztracker.domain.series import (
    category_breakdown,
    category_share,
    monthly_trend,
    revenue_expense_series,
)


@click.command("trend")
@click.option("--months", default=12, show_default=True, type=int, help="Trailing months to show")
@click.option("--detail", is_flag=True, help="Show revenue and expenses next to profit")
@click.pass_context
def trend(ctx, months: int, detail: bool):
    """Show monthly profit for the trailing months."""
    store = ctx.obj["store"]
    try:
        records = store.snapshot()
        points = monthly_trend(records.expenses, records.invoices, month_count=months)
        series = revenue_expense_series(records.expenses, records.invoices, month_count=months)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nMonthly Profit")
    click.echo("-" * 60)
    for index, point in enumerate(points):
        line = f"{point.label:<10} {format_money(point.profit):>15}"
        if detail:
            line += (
                f"  revenue {format_money(series.revenue[index]):>12}"
                f"  expenses {format_money(series.expenses[index]):>12}"
            )
        click.echo(line)


@click.command("categories")
@click.option("--top", "top_n", default=5, show_default=True, type=int, help="Number of categories (0 for all)")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def categories(ctx, top_n: int, start_date: str, end_date: str, **period_kwargs):
    """Show the largest expense categories."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )
    try:
        window = DateWindow(start, end) if start or end else None
        expenses = ctx.obj["store"].list_expenses()
        ranked = category_breakdown(expenses, top_n=top_n or None, window=window)
        overall = category_breakdown(expenses, window=window)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not ranked:
        click.echo("No expenses found.")
        return

    total = sum((entry.amount for entry in overall), ZERO)
    click.echo("\nTop Expense Categories")
    click.echo("-" * 60)
    for entry in ranked:
        share = category_share(entry.amount, total)
        click.echo(f"{entry.category:<30} {format_money(entry.amount):>15} {share:>8.1f}%")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(trend)
    cli.add_command(categories)
