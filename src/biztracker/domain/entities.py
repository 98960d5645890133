"""Domain model entities for biztracker.

These are frozen data classes representing the records handed to the core by
the record store, plus the derived values the core produces. Construction is
the single validation point: every record checks its own fields in
``__post_init__`` and raises InvalidRecordError, so aggregation and rendering
code can trust the types it receives.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from biztracker.domain.errors import (
    InvalidRecordError,
    gst_without_applicability,
    invalid_window,
    paid_date_without_payment,
)
from biztracker.domain.money import GST_RATE, ZERO, apply_gst, round2
from biztracker.utils.amount_parser import to_count, to_decimal


class InvoiceStatus(str, Enum):
    """Lifecycle states of an invoice."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class StockStatus(str, Enum):
    """Derived stock level of an inventory item."""

    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def _set(instance, name: str, value) -> None:
    object.__setattr__(instance, name, value)


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range; a missing bound leaves that side open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidRecordError(invalid_window(self.start, self.end))

    def contains(self, day: date) -> bool:
        """Return True if ``day`` falls within the window."""
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class Expense:
    """Expense record."""

    id: int
    description: str
    amount: Decimal
    category: str
    date: date
    is_gst_applicable: bool = False
    gst_amount: Decimal = ZERO
    receipt_ref: Optional[str] = None

    def __post_init__(self):
        _set(self, "amount", to_decimal(self.amount, "amount"))
        _set(self, "gst_amount", to_decimal(self.gst_amount, "gst_amount"))
        if not isinstance(self.date, date):
            raise InvalidRecordError(f"Expense {self.id} has no valid date")
        if isinstance(self.date, datetime):
            _set(self, "date", self.date.date())
        if not self.is_gst_applicable and self.gst_amount != 0:
            raise InvalidRecordError(gst_without_applicability(self.gst_amount))

    @classmethod
    def create(
        cls,
        id: int,
        description: str,
        amount,
        category: str,
        date: date,
        is_gst_applicable: bool = False,
        gst_amount=None,
        receipt_ref: Optional[str] = None,
    ) -> "Expense":
        """Create an expense, computing GST from the amount when not given."""
        base = to_decimal(amount, "amount")
        if gst_amount is None:
            gst_amount = apply_gst(base, is_gst_applicable, GST_RATE)
        return cls(
            id=id,
            description=description,
            amount=base,
            category=category,
            date=date,
            is_gst_applicable=is_gst_applicable,
            gst_amount=gst_amount,
            receipt_ref=receipt_ref,
        )


@dataclass(frozen=True)
class InvoiceItem:
    """One line of an invoice."""

    description: str
    quantity: int
    rate: Decimal

    def __post_init__(self):
        _set(self, "quantity", to_count(self.quantity, "quantity", minimum=1))
        _set(self, "rate", to_decimal(self.rate, "rate"))

    @property
    def amount(self) -> Decimal:
        """Line amount (quantity x rate)."""
        return self.quantity * self.rate


@dataclass(frozen=True)
class Invoice:
    """Invoice record.

    ``subtotal``, ``gst_amount`` and ``total_amount`` are derived from the
    items when the invoice is built and are never passed in.
    """

    id: int
    invoice_number: str
    client_name: str
    items: tuple[InvoiceItem, ...]
    status: InvoiceStatus
    created_at: datetime
    due_date: Optional[date] = None
    paid_date: Optional[datetime] = None
    client_email: Optional[str] = None
    client_address: Optional[str] = None
    notes: Optional[str] = None
    subtotal: Decimal = field(init=False)
    gst_amount: Decimal = field(init=False)
    total_amount: Decimal = field(init=False)

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, InvoiceItem):
                raise InvalidRecordError(
                    f"Invoice {self.invoice_number} has a line that is not an InvoiceItem: {item!r}"
                )
        _set(self, "items", items)

        try:
            _set(self, "status", InvoiceStatus(self.status))
        except ValueError as e:
            raise InvalidRecordError(
                f"Invoice {self.invoice_number} has unknown status {self.status!r}"
            ) from e

        if isinstance(self.created_at, date) and not isinstance(self.created_at, datetime):
            _set(self, "created_at", datetime.combine(self.created_at, datetime.min.time()))
        if not isinstance(self.created_at, datetime):
            raise InvalidRecordError(f"Invoice {self.invoice_number} has no valid creation time")

        if self.paid_date is not None and self.status is not InvoiceStatus.PAID:
            raise InvalidRecordError(
                paid_date_without_payment(self.invoice_number, self.status.value)
            )

        subtotal = sum((item.amount for item in items), ZERO)
        gst_amount = apply_gst(subtotal, True, GST_RATE)
        _set(self, "subtotal", subtotal)
        _set(self, "gst_amount", gst_amount)
        _set(self, "total_amount", subtotal + gst_amount)

    @property
    def is_paid(self) -> bool:
        return self.status is InvoiceStatus.PAID

    @property
    def created_on(self) -> date:
        """Calendar date the invoice was created."""
        return self.created_at.date()

    def mark_paid(self, paid_at: datetime) -> "Invoice":
        """Return a copy of this invoice transitioned to paid."""
        return replace(self, status=InvoiceStatus.PAID, paid_date=paid_at)


@dataclass(frozen=True)
class InventoryItem:
    """Inventory item record."""

    id: int
    item_name: str
    quantity: int
    min_stock_level: int
    unit_price: Decimal
    category: str

    def __post_init__(self):
        _set(self, "quantity", to_count(self.quantity, "quantity"))
        _set(self, "min_stock_level", to_count(self.min_stock_level, "min_stock_level"))
        _set(self, "unit_price", to_decimal(self.unit_price, "unit_price"))

    @property
    def stock_status(self) -> StockStatus:
        if self.quantity == 0:
            return StockStatus.OUT_OF_STOCK
        if self.quantity <= self.min_stock_level:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    @property
    def value(self) -> Decimal:
        """Stock value at unit price."""
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class MetricSnapshot:
    """Aggregated financial metrics for one window.

    Money fields hold full-precision sums; call ``rounded()`` for the
    presentation copy.
    """

    window: Optional[DateWindow]
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    pending_invoices: int
    gst_collected: Decimal
    gst_paid: Decimal
    net_gst: Decimal

    def rounded(self) -> "MetricSnapshot":
        return replace(
            self,
            total_revenue=round2(self.total_revenue),
            total_expenses=round2(self.total_expenses),
            net_profit=round2(self.net_profit),
            gst_collected=round2(self.gst_collected),
            gst_paid=round2(self.gst_paid),
            net_gst=round2(self.net_gst),
        )


@dataclass(frozen=True)
class QuarterlyGst:
    """GST position over a quarter."""

    gst_collected: Decimal
    gst_paid: Decimal
    net_gst: Decimal

    @property
    def is_refund(self) -> bool:
        return self.net_gst < 0


@dataclass(frozen=True)
class QuarterSummary:
    """One row of the quarterly GST history."""

    label: str
    start: date
    end: date
    gst: QuarterlyGst
    due_date: date


@dataclass(frozen=True)
class TrendPoint:
    """Profit for one month bucket."""

    label: str
    profit: Decimal


@dataclass(frozen=True)
class CategoryAmount:
    """Expense total for one category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class MonthBucket:
    """Calendar month used to index a series, bounds inclusive."""

    label: str
    start: date
    end: date


@dataclass(frozen=True)
class RevenueExpenseSeries:
    """Parallel revenue and expense sequences over the same month buckets."""

    labels: tuple[str, ...]
    revenue: tuple[Decimal, ...]
    expenses: tuple[Decimal, ...]


@dataclass(frozen=True)
class InventorySummary:
    """Stock valuation and alert counts."""

    total_value: Decimal
    item_count: int
    low_stock_count: int
    out_of_stock_count: int


@dataclass(frozen=True)
class InvoiceStatusTotals:
    """Paid versus outstanding invoice amounts."""

    paid_amount: Decimal
    outstanding_amount: Decimal
    invoice_count: int
    average_invoice_value: Decimal


@dataclass(frozen=True)
class CalendarEvent:
    """An expense or invoice shown on a given day."""

    kind: str
    record_id: int
    title: str
    amount: Decimal
    day: date
    detail: Optional[str] = None


@dataclass(frozen=True)
class MonthActivity:
    """Expense and paid-revenue totals for one calendar month."""

    year: int
    month: int
    expenses: Decimal
    revenue: Decimal

    @property
    def net(self) -> Decimal:
        return self.revenue - self.expenses
