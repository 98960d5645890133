"""Shared pytest fixtures for biztracker tests."""

import json
import os
import tempfile
from datetime import date, datetime
from decimal import Decimal

import pytest

from biztracker.domain.entities import (
    Expense,
    InventoryItem,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
)
from biztracker.store.memory import InMemoryRecordStore


def make_invoice(
    id=1,
    number="INV-001",
    items=((2, "50"),),
    status=InvoiceStatus.PAID,
    created_at=datetime(2024, 1, 10, 9, 30),
    **kwargs,
):
    """Build an invoice from (quantity, rate) pairs."""
    return Invoice(
        id=id,
        invoice_number=number,
        client_name=kwargs.pop("client_name", "Acme Ltd"),
        items=tuple(
            InvoiceItem(description=f"Item {i + 1}", quantity=qty, rate=Decimal(rate))
            for i, (qty, rate) in enumerate(items)
        ),
        status=status,
        created_at=created_at,
        **kwargs,
    )


def make_expense(id=1, amount="100", category="Office", day=date(2024, 1, 15), gst=False, **kwargs):
    """Build an expense, computing GST when applicable."""
    return Expense.create(
        id=id,
        description=kwargs.pop("description", f"Expense {id}"),
        amount=Decimal(amount),
        category=category,
        date=day,
        is_gst_applicable=gst,
        **kwargs,
    )


@pytest.fixture
def sample_expenses():
    """Expenses spread over two months and three categories."""
    return [
        make_expense(id=1, amount="100.00", category="Office", day=date(2024, 1, 15), gst=True),
        make_expense(id=2, amount="250.50", category="Travel", day=date(2024, 1, 20)),
        make_expense(id=3, amount="40.00", category="Office", day=date(2024, 2, 3)),
        make_expense(id=4, amount="75.25", category="Utilities", day=date(2024, 2, 28), gst=True),
    ]


@pytest.fixture
def sample_invoices():
    """One paid, one sent and one overdue invoice."""
    return [
        make_invoice(id=1, number="INV-001", items=((2, "50"),), status="paid"),
        make_invoice(
            id=2,
            number="INV-002",
            items=((1, "200"), (3, "10.50")),
            status="sent",
            created_at=datetime(2024, 2, 1, 12, 0),
        ),
        make_invoice(
            id=3,
            number="INV-003",
            items=((5, "20"),),
            status="overdue",
            created_at=datetime(2024, 2, 14, 8, 0),
        ),
    ]


@pytest.fixture
def sample_inventory():
    """Inventory with one item in each stock status."""
    return [
        InventoryItem(id=1, item_name="Printer Paper", quantity=0, min_stock_level=5, unit_price=Decimal("4.50"), category="Office"),
        InventoryItem(id=2, item_name="Toner", quantity=3, min_stock_level=5, unit_price=Decimal("60.00"), category="Office"),
        InventoryItem(id=3, item_name="Coffee Beans", quantity=12, min_stock_level=5, unit_price=Decimal("15.00"), category="Kitchen"),
    ]


@pytest.fixture
def memory_store(sample_expenses, sample_invoices, sample_inventory):
    """In-memory store over the sample records."""
    return InMemoryRecordStore(sample_expenses, sample_invoices, sample_inventory)


@pytest.fixture
def sample_payload():
    """Record file contents as exported by the REST layer."""
    return {
        "expenses": [
            {
                "id": 1,
                "description": "Office chair",
                "amount": "100.00",
                "category": "Office",
                "date": "2024-01-15",
                "isGstApplicable": True,
                "gstAmount": "18.00",
            },
            {
                "id": 2,
                "description": "Train ticket",
                "amount": "45.50",
                "category": "Travel",
                "date": "2024-01-20T00:00:00.000Z",
                "isGstApplicable": False,
                "gstAmount": "0",
            },
        ],
        "invoices": [
            {
                "id": 1,
                "invoiceNumber": "INV-001",
                "clientName": "Acme Ltd",
                "clientEmail": "billing@acme.test",
                "items": json.dumps([{"description": "Consulting", "quantity": 2, "rate": 50}]),
                "subtotal": "100.00",
                "gstAmount": "18.00",
                "totalAmount": "118.00",
                "status": "paid",
                "createdAt": "2024-01-10T09:30:00.000Z",
                "paidDate": "2024-01-25T10:00:00.000Z",
            },
            {
                "id": 2,
                "invoiceNumber": "INV-002",
                "clientName": "Globex",
                "items": [{"description": "Design", "quantity": 1, "rate": "250.00"}],
                "status": "sent",
                "createdAt": "2024-02-01T12:00:00.000Z",
                "dueDate": "2024-03-01",
            },
        ],
        "inventory": [
            {
                "id": 1,
                "itemName": "Toner",
                "quantity": 2,
                "minStockLevel": 5,
                "unitPrice": "60.00",
                "category": "Office",
            }
        ],
    }


@pytest.fixture
def records_file(sample_payload):
    """Write the sample payload to a temporary JSON file."""
    fd, path = tempfile.mkstemp(suffix=".json")
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        json.dump(sample_payload, handle)

    yield path

    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoice_factory():
    """Expose ``make_invoice`` to tests."""
    return make_invoice


@pytest.fixture
def expense_factory():
    """Expose ``make_expense`` to tests."""
    return make_expense
