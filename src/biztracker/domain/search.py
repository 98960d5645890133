"""Free-text search over expense and invoice snapshots."""

from typing import Optional, Sequence

from biztracker.domain.entities import Expense, Invoice, InvoiceStatus


def _needle(term: Optional[str]) -> str:
    return (term or "").strip().lower()


def search_expenses(expenses: Sequence[Expense], term: Optional[str]) -> list[Expense]:
    """Case-insensitive match on description or category, in input order.

    An empty term returns every expense.
    """
    needle = _needle(term)
    if not needle:
        return list(expenses)
    return [
        expense
        for expense in expenses
        if needle in expense.description.lower() or needle in expense.category.lower()
    ]


def search_invoices(
    invoices: Sequence[Invoice],
    term: Optional[str],
    status: Optional[InvoiceStatus | str] = None,
) -> list[Invoice]:
    """Match invoices on number or client name, optionally by status.

    Args:
        invoices: Invoice snapshot
        term: Search text; empty matches every invoice
        status: Only keep invoices with this status; None keeps all

    Returns:
        Matching invoices in input order

    Raises:
        ValueError: If status is not a known invoice status
    """
    needle = _needle(term)
    wanted = InvoiceStatus(status) if status is not None else None
    return [
        invoice
        for invoice in invoices
        if (wanted is None or invoice.status is wanted)
        and (
            not needle
            or needle in invoice.invoice_number.lower()
            or needle in invoice.client_name.lower()
        )
    ]
