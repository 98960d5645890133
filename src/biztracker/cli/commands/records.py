"""Expense and invoice listing commands."""

import click

from biztracker.cli.date_filters import (
    collect_period_flags,
    describe_range,
    period_options,
    resolve_cli_date_range,
)
from biztracker.cli.error_handling import handle_domain_error
from biztracker.domain.entities import DateWindow, InvoiceStatus
from biztracker.domain.errors import DomainError
from biztracker.domain.metrics import invoice_status_totals
from biztracker.domain.money import ZERO, format_money
from biztracker.domain.search import search_expenses, search_invoices


@click.command("expenses")
@click.option("--search", help="Filter by description or category")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def expenses(ctx, search: str, start_date: str, end_date: str, **period_kwargs):
    """List expenses, newest first."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )
    try:
        window = DateWindow(start, end) if start or end else None
        records = [
            e
            for e in ctx.obj["store"].list_expenses()
            if window is None or window.contains(e.date)
        ]
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    matches = search_expenses(records, search)
    if not matches:
        click.echo("No expenses found.")
        return

    click.echo(f"\nExpenses ({describe_range(start, end)})")
    click.echo("-" * 90)
    click.echo(f"{'Date':<12} {'Description':<35} {'Category':<20} {'Amount':>12} {'GST':>8}")
    click.echo("-" * 90)
    for expense in sorted(matches, key=lambda e: e.date, reverse=True):
        click.echo(
            f"{expense.date.isoformat():<12} {expense.description[:35]:<35} "
            f"{expense.category[:20]:<20} {format_money(expense.amount):>12} "
            f"{format_money(expense.gst_amount):>8}"
        )
    click.echo("-" * 90)
    total = sum((e.amount for e in matches), ZERO)
    click.echo(f"{len(matches)} expense(s), total {format_money(total)}")


@click.command("invoices")
@click.option("--search", help="Filter by invoice number or client name")
@click.option(
    "--status",
    type=click.Choice([status.value for status in InvoiceStatus]),
    help="Only show invoices with this status",
)
@click.pass_context
def invoices(ctx, search: str, status: str):
    """List invoices with paid and outstanding totals."""
    try:
        records = ctx.obj["store"].list_invoices()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    matches = search_invoices(records, search, status=status)
    if not matches:
        click.echo("No invoices found.")
        return

    totals = invoice_status_totals(matches)
    click.echo("\nInvoices")
    click.echo("-" * 80)
    click.echo(f"{'Number':<12} {'Client':<30} {'Date':<12} {'Status':<9} {'Total':>13}")
    click.echo("-" * 80)
    for invoice in matches:
        click.echo(
            f"{invoice.invoice_number:<12} {invoice.client_name[:30]:<30} "
            f"{invoice.created_on.isoformat():<12} {invoice.status.value:<9} "
            f"{format_money(invoice.total_amount):>13}"
        )
    click.echo("-" * 80)
    click.echo(f"Paid:        {format_money(totals.paid_amount)}")
    click.echo(f"Outstanding: {format_money(totals.outstanding_amount)}")


def register_commands(cli):
    """Register record listing commands with main CLI."""
    cli.add_command(expenses)
    cli.add_command(invoices)
