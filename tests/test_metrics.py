"""Tests for metric aggregation."""

import random
from datetime import date, datetime
from decimal import Decimal

import pytest

from biztracker.domain.entities import DateWindow, Expense, Invoice
from biztracker.domain.errors import InvalidRecordError
from biztracker.domain.metrics import (
    DashboardService,
    compute_metrics,
    growth_rate,
    invoice_status_totals,
    profit_margin,
    recent_transactions,
)


def test_worked_example(expense_factory, invoice_factory):
    expenses = [expense_factory(amount="100", gst=False)]
    invoice = invoice_factory(items=((2, "50"),), status="paid")

    snapshot = compute_metrics(expenses, [invoice])

    assert invoice.subtotal == Decimal("100")
    assert invoice.gst_amount == Decimal("18.00")
    assert invoice.total_amount == Decimal("118.00")
    assert snapshot.total_expenses == Decimal("100")
    assert snapshot.total_revenue == Decimal("118.00")
    assert snapshot.net_profit == Decimal("18.00")
    assert snapshot.pending_invoices == 0


def test_all_time_metrics(sample_expenses, sample_invoices):
    snapshot = compute_metrics(sample_expenses, sample_invoices)

    assert snapshot.window is None
    assert snapshot.total_revenue == Decimal("118.00")
    assert snapshot.total_expenses == Decimal("465.75")
    assert snapshot.net_profit == Decimal("-347.75")
    assert snapshot.pending_invoices == 2
    assert snapshot.gst_collected == Decimal("18.00")
    assert snapshot.gst_paid == Decimal("31.55")
    assert snapshot.net_gst == Decimal("-13.55")


def test_windowed_metrics(sample_expenses, sample_invoices):
    january = DateWindow(date(2024, 1, 1), date(2024, 1, 31))
    february = DateWindow(date(2024, 2, 1), date(2024, 2, 29))

    jan = compute_metrics(sample_expenses, sample_invoices, january)
    feb = compute_metrics(sample_expenses, sample_invoices, february)

    assert jan.window == january
    assert jan.total_expenses == Decimal("350.50")
    assert jan.total_revenue == Decimal("118.00")
    assert jan.pending_invoices == 0
    assert feb.total_expenses == Decimal("115.25")
    assert feb.total_revenue == 0
    assert feb.pending_invoices == 2
    assert feb.gst_paid == Decimal("13.55")


def test_window_bounds_are_inclusive(expense_factory):
    expenses = [
        expense_factory(id=1, amount="10", day=date(2024, 1, 1)),
        expense_factory(id=2, amount="20", day=date(2024, 1, 31)),
        expense_factory(id=3, amount="40", day=date(2024, 2, 1)),
    ]
    snapshot = compute_metrics(expenses, [], DateWindow(date(2024, 1, 1), date(2024, 1, 31)))
    assert snapshot.total_expenses == Decimal("30")


def test_total_expenses_independent_of_order(expense_factory):
    expenses = [
        expense_factory(id=i, amount=amount)
        for i, amount in enumerate(["0.10", "0.20", "12.345", "99.999", "1000", "0.005"])
    ]
    expected = sum((e.amount for e in expenses), Decimal("0"))

    rng = random.Random(42)
    for _ in range(10):
        shuffled = expenses[:]
        rng.shuffle(shuffled)
        assert compute_metrics(shuffled, []).total_expenses == expected


def test_sums_keep_full_precision(expense_factory):
    expenses = [expense_factory(id=i, amount="0.005") for i in range(3)]
    snapshot = compute_metrics(expenses, [])

    assert snapshot.total_expenses == Decimal("0.015")
    assert snapshot.rounded().total_expenses == Decimal("0.02")


def test_empty_inputs():
    snapshot = compute_metrics([], [])
    assert snapshot.total_revenue == 0
    assert snapshot.total_expenses == 0
    assert snapshot.net_profit == 0
    assert snapshot.pending_invoices == 0


def test_non_record_input_rejected(sample_invoices):
    with pytest.raises(InvalidRecordError):
        compute_metrics([{"amount": "10"}], sample_invoices)


def test_invoice_status_totals(sample_invoices):
    totals = invoice_status_totals(sample_invoices)

    assert totals.paid_amount == Decimal("118.00")
    assert totals.outstanding_amount == Decimal("391.17")
    assert totals.invoice_count == 3
    assert totals.average_invoice_value == Decimal("509.17") / 3


def test_invoice_status_totals_empty():
    totals = invoice_status_totals([])
    assert totals.invoice_count == 0
    assert totals.average_invoice_value == 0


def test_profit_margin(expense_factory, invoice_factory):
    snapshot = compute_metrics(
        [expense_factory(amount="59")], [invoice_factory(items=((1, "100"),))]
    )
    assert profit_margin(snapshot) == Decimal("50")
    assert profit_margin(compute_metrics([expense_factory()], [])) == 0


def test_growth_rate():
    assert growth_rate(Decimal("150"), Decimal("100")) == Decimal("50")
    assert growth_rate(Decimal("50"), Decimal("100")) == Decimal("-50")
    assert growth_rate(Decimal("50"), Decimal("0")) == 0


def test_recent_transactions(sample_expenses, sample_invoices):
    recent = recent_transactions(sample_expenses, sample_invoices, limit=3)

    assert len(recent) == 3
    assert isinstance(recent[0], Expense) and recent[0].id == 4
    assert isinstance(recent[1], Invoice) and recent[1].invoice_number == "INV-003"
    assert isinstance(recent[2], Expense) and recent[2].id == 3


class TestDashboardService:
    """Tests for DashboardService."""

    def test_metrics_reads_store(self, memory_store):
        service = DashboardService(memory_store)
        snapshot = service.metrics()
        assert snapshot.total_expenses == Decimal("465.75")
        assert snapshot.pending_invoices == 2

    def test_top_categories(self, memory_store):
        service = DashboardService(memory_store)
        top = service.top_categories(top_n=2)
        assert [entry.category for entry in top] == ["Travel", "Office"]

    def test_low_stock(self, memory_store):
        service = DashboardService(memory_store)
        assert [item.item_name for item in service.low_stock()] == ["Printer Paper", "Toner"]

    def test_profit_trend(self, memory_store):
        service = DashboardService(memory_store)
        trend = service.profit_trend(month_count=2, today=date(2024, 2, 20))
        assert [point.profit for point in trend] == [Decimal("-232.50"), Decimal("-115.25")]

    def test_gst_history(self, memory_store):
        service = DashboardService(memory_store)
        history = service.gst_history(count=1, today=date(2024, 3, 1))
        assert history[0].label == "Q1 2024"
        assert history[0].gst.net_gst == Decimal("-13.55")

    def test_invoice_totals(self, memory_store):
        service = DashboardService(memory_store)
        assert service.invoice_totals().paid_amount == Decimal("118.00")
