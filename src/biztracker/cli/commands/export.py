"""Document export commands."""

from datetime import datetime
from pathlib import Path

import click

from biztracker.cli.date_filters import (
    collect_period_flags,
    describe_range,
    period_options,
    resolve_cli_date_range,
)
from biztracker.cli.error_handling import fail, handle_domain_error
from biztracker.domain.entities import DateWindow
from biztracker.domain.errors import DomainError
from biztracker.rendering.expense_report import MAX_REPORT_ROWS, layout_expense_report
from biztracker.rendering.invoice import layout_invoice
from biztracker.rendering.pdf import expense_report_filename, invoice_filename, render_pdf


@click.group("export")
def export_group():
    """Export invoices and expense reports as PDF."""
    pass


@export_group.command("invoice")
@click.argument("invoice_number")
@click.option("--output-dir", "-o", type=click.Path(file_okay=False), default=".", help="Directory for the PDF")
@click.pass_context
def export_invoice(ctx, invoice_number: str, output_dir: str):
    """Export one invoice as PDF."""
    store = ctx.obj["store"]
    try:
        invoice = store.get_invoice_by_number(invoice_number)
        if invoice is None:
            fail(ctx, f"Invoice '{invoice_number}' not found")
        pdf_bytes = render_pdf(layout_invoice(invoice))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    target = Path(output_dir) / invoice_filename(invoice.invoice_number)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(pdf_bytes)
    click.echo(f"Wrote {target}")


@export_group.command("expenses")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--output-dir", "-o", type=click.Path(file_okay=False), default=".", help="Directory for the PDF")
@click.pass_context
def export_expenses(ctx, start_date: str, end_date: str, output_dir: str, **period_kwargs):
    """Export an expense report as PDF.

    At most MAX_REPORT_ROWS expenses are listed; the summary covers them all.
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )
    try:
        window = DateWindow(start, end) if start or end else None
        expenses = [
            e
            for e in ctx.obj["store"].list_expenses()
            if window is None or window.contains(e.date)
        ]
        layout = layout_expense_report(expenses, describe_range(start, end))
        pdf_bytes = render_pdf(layout)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    target = Path(output_dir) / expense_report_filename(datetime.now())
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(pdf_bytes)
    click.echo(f"Wrote {target}")
    if layout.omitted_rows:
        click.echo(
            f"Note: report lists the first {MAX_REPORT_ROWS} expenses; "
            f"{layout.omitted_rows} more are included in the totals only.",
            err=True,
        )


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
