"""Chart-ready time series built from expense and invoice snapshots."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from biztracker.domain.entities import (
    CategoryAmount,
    DateWindow,
    Expense,
    Invoice,
    MonthBucket,
    RevenueExpenseSeries,
    TrendPoint,
)
from biztracker.domain.errors import InvalidRecordError
from biztracker.domain.money import ZERO


def month_buckets(month_count: int, today: Optional[date] = None) -> list[MonthBucket]:
    """Return the trailing ``month_count`` calendar months, oldest first.

    The last bucket is the month containing ``today``.
    """
    if month_count < 1:
        raise InvalidRecordError(f"Month count must be at least 1 (got {month_count})")
    current = (today or date.today()).replace(day=1)

    buckets = []
    for offset in range(month_count - 1, -1, -1):
        start = current - relativedelta(months=offset)
        end = start + relativedelta(months=1) - timedelta(days=1)
        buckets.append(MonthBucket(label=start.strftime("%b %y"), start=start, end=end))
    return buckets


def _expenses_in(expenses: Sequence[Expense], bucket: MonthBucket) -> Decimal:
    return sum(
        (e.amount for e in expenses if bucket.start <= e.date <= bucket.end), ZERO
    )


def _paid_revenue_in(invoices: Sequence[Invoice], bucket: MonthBucket) -> Decimal:
    return sum(
        (
            inv.total_amount
            for inv in invoices
            if inv.is_paid and bucket.start <= inv.created_on <= bucket.end
        ),
        ZERO,
    )


def monthly_trend(
    expenses: Sequence[Expense],
    invoices: Sequence[Invoice],
    month_count: int = 12,
    today: Optional[date] = None,
) -> list[TrendPoint]:
    """Build the monthly profit trend.

    Args:
        expenses: Expense snapshot
        invoices: Invoice snapshot
        month_count: Number of trailing months, including the current one
        today: Reference date, defaults to date.today()

    Returns:
        Exactly ``month_count`` points, oldest first; months without records
        have zero profit
    """
    return [
        TrendPoint(
            label=bucket.label,
            profit=_paid_revenue_in(invoices, bucket) - _expenses_in(expenses, bucket),
        )
        for bucket in month_buckets(month_count, today)
    ]


def revenue_expense_series(
    expenses: Sequence[Expense],
    invoices: Sequence[Invoice],
    month_count: int = 6,
    today: Optional[date] = None,
) -> RevenueExpenseSeries:
    """Build parallel paid-revenue and expense sequences over the same months."""
    buckets = month_buckets(month_count, today)
    return RevenueExpenseSeries(
        labels=tuple(bucket.label for bucket in buckets),
        revenue=tuple(_paid_revenue_in(invoices, bucket) for bucket in buckets),
        expenses=tuple(_expenses_in(expenses, bucket) for bucket in buckets),
    )


def category_breakdown(
    expenses: Sequence[Expense],
    top_n: Optional[int] = None,
    window: Optional[DateWindow] = None,
) -> list[CategoryAmount]:
    """Total expenses per category, largest first.

    Ties keep the order in which categories were first seen. ``top_n``
    truncates the result; None returns every category.
    """
    if top_n is not None and top_n < 0:
        raise InvalidRecordError(f"top_n must not be negative (got {top_n})")

    # dicts keep insertion order, so first-seen order survives the stable sort
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        if window is not None and not window.contains(expense.date):
            continue
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount

    ranked = sorted(totals.items(), key=lambda entry: entry[1], reverse=True)
    if top_n is not None:
        ranked = ranked[:top_n]
    return [CategoryAmount(category=name, amount=amount) for name, amount in ranked]


def category_share(amount: Decimal, total: Decimal) -> Decimal:
    """Percentage of ``total`` taken by ``amount``; zero when total is zero."""
    if total == 0:
        return ZERO
    return amount / total * 100
