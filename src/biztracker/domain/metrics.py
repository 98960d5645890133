"""Metric aggregation domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from biztracker.domain.entities import (
    CategoryAmount,
    DateWindow,
    Expense,
    InventoryItem,
    Invoice,
    InvoiceStatusTotals,
    MetricSnapshot,
    QuarterSummary,
    TrendPoint,
)
from biztracker.domain.errors import InvalidRecordError
from biztracker.domain.inventory import stock_alerts
from biztracker.domain.money import ZERO
from biztracker.domain.series import category_breakdown, monthly_trend
from biztracker.domain.tax import quarterly_history
from biztracker.store.base import RecordStore

logger = logging.getLogger(__name__)


def _check_records(records: Sequence, record_type: type, kind: str) -> None:
    for record in records:
        if not isinstance(record, record_type):
            raise InvalidRecordError(f"Expected {kind} record, got {type(record).__name__}")


def _in_window(day: date, window: Optional[DateWindow]) -> bool:
    return window is None or window.contains(day)


def compute_metrics(
    expenses: Sequence[Expense],
    invoices: Sequence[Invoice],
    window: Optional[DateWindow] = None,
) -> MetricSnapshot:
    """Reduce expense and invoice snapshots to headline metrics.

    Expenses are windowed on their date and invoices on their creation date.
    Revenue and GST collected count paid invoices only.

    Args:
        expenses: Expense snapshot
        invoices: Invoice snapshot
        window: Optional inclusive date window; None means all time

    Returns:
        MetricSnapshot with full-precision money values

    Raises:
        InvalidRecordError: If any input is not a validated record
    """
    _check_records(expenses, Expense, "expense")
    _check_records(invoices, Invoice, "invoice")

    windowed_expenses = [e for e in expenses if _in_window(e.date, window)]
    windowed_invoices = [i for i in invoices if _in_window(i.created_on, window)]
    paid = [i for i in windowed_invoices if i.is_paid]

    total_revenue = sum((i.total_amount for i in paid), ZERO)
    total_expenses = sum((e.amount for e in windowed_expenses), ZERO)
    gst_collected = sum((i.gst_amount for i in paid), ZERO)
    gst_paid = sum((e.gst_amount for e in windowed_expenses), ZERO)

    return MetricSnapshot(
        window=window,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=total_revenue - total_expenses,
        pending_invoices=len(windowed_invoices) - len(paid),
        gst_collected=gst_collected,
        gst_paid=gst_paid,
        net_gst=gst_collected - gst_paid,
    )


def invoice_status_totals(
    invoices: Sequence[Invoice], window: Optional[DateWindow] = None
) -> InvoiceStatusTotals:
    """Split invoice totals into paid and outstanding amounts."""
    _check_records(invoices, Invoice, "invoice")
    selected = [i for i in invoices if _in_window(i.created_on, window)]
    paid_amount = sum((i.total_amount for i in selected if i.is_paid), ZERO)
    outstanding = sum((i.total_amount for i in selected if not i.is_paid), ZERO)
    count = len(selected)
    average = (paid_amount + outstanding) / count if count else ZERO
    return InvoiceStatusTotals(
        paid_amount=paid_amount,
        outstanding_amount=outstanding,
        invoice_count=count,
        average_invoice_value=average,
    )


def profit_margin(snapshot: MetricSnapshot) -> Decimal:
    """Net profit as a percentage of revenue; zero without revenue."""
    if snapshot.total_revenue == 0:
        return ZERO
    return snapshot.net_profit / snapshot.total_revenue * 100


def growth_rate(current: Decimal, previous: Decimal) -> Decimal:
    """Percentage change from ``previous`` to ``current``; zero when previous is zero."""
    if previous == 0:
        return ZERO
    return (current - previous) / previous * 100


def recent_transactions(
    expenses: Sequence[Expense], invoices: Sequence[Invoice], limit: int = 5
) -> list[Expense | Invoice]:
    """Return the newest expenses and invoices, newest first."""

    def activity_date(record: Expense | Invoice) -> date:
        return record.created_on if isinstance(record, Invoice) else record.date

    merged: list[Expense | Invoice] = [*expenses, *invoices]
    merged.sort(key=activity_date, reverse=True)
    return merged[:limit]


class DashboardService:
    """Service that reads a fresh store snapshot per call.

    Figures that combine expenses and invoices come from one
    ``RecordStore.snapshot()`` so both sides see the same store state.
    """

    def __init__(self, store: RecordStore):
        """Initialize dashboard service.

        Args:
            store: RecordStore instance
        """
        self.store = store

    def metrics(self, window: Optional[DateWindow] = None) -> MetricSnapshot:
        """Compute headline metrics for ``window``."""
        records = self.store.snapshot()
        logger.debug(
            "Computing metrics over %d expenses and %d invoices",
            len(records.expenses),
            len(records.invoices),
        )
        return compute_metrics(records.expenses, records.invoices, window)

    def profit_trend(self, month_count: int = 12, today: Optional[date] = None) -> list[TrendPoint]:
        """Monthly profit for the trailing ``month_count`` months."""
        records = self.store.snapshot()
        return monthly_trend(records.expenses, records.invoices, month_count, today)

    def top_categories(
        self, top_n: Optional[int] = 5, window: Optional[DateWindow] = None
    ) -> list[CategoryAmount]:
        """Largest expense categories."""
        return category_breakdown(self.store.list_expenses(), top_n=top_n, window=window)

    def low_stock(self) -> list[InventoryItem]:
        """Inventory items at or below their minimum level."""
        return stock_alerts(self.store.list_inventory_items())

    def gst_history(self, count: int = 4, today: Optional[date] = None) -> list[QuarterSummary]:
        """Quarterly GST history ending with the current quarter."""
        records = self.store.snapshot()
        return quarterly_history(records.expenses, records.invoices, count, today)

    def invoice_totals(self, window: Optional[DateWindow] = None) -> InvoiceStatusTotals:
        """Paid versus outstanding invoice totals."""
        return invoice_status_totals(self.store.list_invoices(), window)
