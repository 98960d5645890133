"""Abstract record store interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

# Import entities directly to avoid circular import through domain/__init__.py
from biztracker.domain.entities import Expense, InventoryItem, Invoice


@dataclass(frozen=True)
class RecordSnapshot:
    """Expenses, invoices and inventory read from one store state."""

    expenses: tuple[Expense, ...] = ()
    invoices: tuple[Invoice, ...] = ()
    inventory_items: tuple[InventoryItem, ...] = ()


class RecordStore(ABC):
    """Read-only source of record snapshots for biztracker.

    Each call returns a fresh immutable snapshot; callers never hold
    references across calls. Use ``snapshot()`` when several record kinds
    must come from the same store state.
    """

    @abstractmethod
    def list_expenses(self) -> tuple[Expense, ...]:
        """List all expenses."""
        pass

    @abstractmethod
    def list_invoices(self) -> tuple[Invoice, ...]:
        """List all invoices."""
        pass

    @abstractmethod
    def list_inventory_items(self) -> tuple[InventoryItem, ...]:
        """List all inventory items."""
        pass

    def snapshot(self) -> RecordSnapshot:
        """Read every record kind at once."""
        return RecordSnapshot(
            expenses=self.list_expenses(),
            invoices=self.list_invoices(),
            inventory_items=self.list_inventory_items(),
        )

    def get_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        """Get invoice by its invoice number."""
        for invoice in self.list_invoices():
            if invoice.invoice_number == invoice_number:
                return invoice
        return None
