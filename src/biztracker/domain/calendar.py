"""Per-day and per-month activity views."""

from datetime import date
from typing import Sequence

from biztracker.domain.entities import CalendarEvent, Expense, Invoice, MonthActivity
from biztracker.domain.money import ZERO


def events_for_date(
    expenses: Sequence[Expense], invoices: Sequence[Invoice], day: date
) -> list[CalendarEvent]:
    """Return expenses dated ``day`` followed by invoices created that day."""
    events = [
        CalendarEvent(
            kind="expense",
            record_id=expense.id,
            title=expense.description,
            amount=expense.amount,
            day=expense.date,
            detail=expense.category,
        )
        for expense in expenses
        if expense.date == day
    ]
    events.extend(
        CalendarEvent(
            kind="invoice",
            record_id=invoice.id,
            title=f"Invoice {invoice.invoice_number}",
            amount=invoice.total_amount,
            day=invoice.created_on,
            detail=invoice.client_name,
        )
        for invoice in invoices
        if invoice.created_on == day
    )
    return events


def month_activity(
    expenses: Sequence[Expense], invoices: Sequence[Invoice], year: int, month: int
) -> MonthActivity:
    """Total expenses and paid revenue for one calendar month."""

    def in_month(day: date) -> bool:
        return day.year == year and day.month == month

    return MonthActivity(
        year=year,
        month=month,
        expenses=sum((e.amount for e in expenses if in_month(e.date)), ZERO),
        revenue=sum(
            (i.total_amount for i in invoices if i.is_paid and in_month(i.created_on)),
            ZERO,
        ),
    )
