"""GST calculations at record and quarter level.

Quarters are half-open: ``quarter_start`` is the first day of the quarter and
``quarter_end`` is the first day of the next one. Every quarterly figure in
the package uses that convention.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from biztracker.domain.entities import (
    Expense,
    Invoice,
    InvoiceItem,
    QuarterSummary,
    QuarterlyGst,
)
from biztracker.domain.errors import InvalidRecordError
from biztracker.domain.money import GST_RATE, ZERO, apply_gst

__all__ = [
    "GST_RATE",
    "apply_gst",
    "invoice_totals",
    "quarter_bounds",
    "quarter_label",
    "compute_quarterly_gst",
    "filing_due_date",
    "quarterly_history",
]

FILING_DAY = 28


def invoice_totals(items: Sequence[InvoiceItem]) -> tuple[Decimal, Decimal, Decimal]:
    """Return (subtotal, gst_amount, total_amount) for a list of invoice lines."""
    subtotal = sum((item.amount for item in items), ZERO)
    gst_amount = apply_gst(subtotal, True, GST_RATE)
    return subtotal, gst_amount, subtotal + gst_amount


def quarter_bounds(day: date) -> tuple[date, date]:
    """Return the (start, exclusive end) of the quarter containing ``day``."""
    quarter_index = (day.month - 1) // 3
    start = date(day.year, quarter_index * 3 + 1, 1)
    return start, start + relativedelta(months=3)


def quarter_label(quarter_start: date) -> str:
    """Return a label such as 'Q3 2026'."""
    return f"Q{(quarter_start.month - 1) // 3 + 1} {quarter_start.year}"


def compute_quarterly_gst(
    expenses: Sequence[Expense],
    invoices: Sequence[Invoice],
    quarter_start: date,
    quarter_end: date,
) -> QuarterlyGst:
    """Compute GST collected, paid and net over [quarter_start, quarter_end).

    Args:
        expenses: Expense snapshot
        invoices: Invoice snapshot
        quarter_start: First day of the period
        quarter_end: First day after the period

    Returns:
        QuarterlyGst; a negative net_gst is a refund due

    Raises:
        InvalidRecordError: If quarter_end is not after quarter_start
    """
    if quarter_end <= quarter_start:
        raise InvalidRecordError(
            f"Quarter end {quarter_end} must be after quarter start {quarter_start}"
        )

    gst_collected = sum(
        (
            invoice.gst_amount
            for invoice in invoices
            if invoice.is_paid and quarter_start <= invoice.created_on < quarter_end
        ),
        ZERO,
    )
    gst_paid = sum(
        (
            expense.gst_amount
            for expense in expenses
            if quarter_start <= expense.date < quarter_end
        ),
        ZERO,
    )
    return QuarterlyGst(
        gst_collected=gst_collected,
        gst_paid=gst_paid,
        net_gst=gst_collected - gst_paid,
    )


def filing_due_date(quarter_end: date) -> date:
    """Return the filing date for a quarter: the 28th of the month after it ends."""
    return quarter_end.replace(day=FILING_DAY)


def quarterly_history(
    expenses: Sequence[Expense],
    invoices: Sequence[Invoice],
    count: int = 4,
    today: Optional[date] = None,
) -> list[QuarterSummary]:
    """Summarize the last ``count`` quarters, ending with the current one.

    Quarters are returned oldest first.
    """
    if count < 1:
        raise InvalidRecordError(f"Quarter count must be at least 1 (got {count})")
    current_start, _ = quarter_bounds(today or date.today())

    history = []
    for offset in range(count - 1, -1, -1):
        start = current_start - relativedelta(months=3 * offset)
        end = start + relativedelta(months=3)
        history.append(
            QuarterSummary(
                label=quarter_label(start),
                start=start,
                end=end,
                gst=compute_quarterly_gst(expenses, invoices, start, end),
                due_date=filing_due_date(end),
            )
        )
    return history
