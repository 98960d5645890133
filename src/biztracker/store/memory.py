"""In-memory record store."""

from typing import Iterable

from biztracker.domain.entities import Expense, InventoryItem, Invoice
from biztracker.store.base import RecordStore


class InMemoryRecordStore(RecordStore):
    """Record store over records already held in memory."""

    def __init__(
        self,
        expenses: Iterable[Expense] = (),
        invoices: Iterable[Invoice] = (),
        inventory_items: Iterable[InventoryItem] = (),
    ):
        self._expenses = tuple(expenses)
        self._invoices = tuple(invoices)
        self._inventory_items = tuple(inventory_items)

    def list_expenses(self) -> tuple[Expense, ...]:
        return self._expenses

    def list_invoices(self) -> tuple[Invoice, ...]:
        return self._invoices

    def list_inventory_items(self) -> tuple[InventoryItem, ...]:
        return self._inventory_items
