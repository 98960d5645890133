"""Mapper functions to convert record-store payloads to domain entities.

Payloads use the camelCase keys served by the REST layer. Dates and amounts
may arrive as strings; they are parsed here and validated by the entity
constructors.
"""

from datetime import date, datetime
from typing import Any, Optional

from biztracker.domain import entities as domain
from biztracker.domain.errors import InvalidRecordError
from biztracker.utils.date_parser import parse_date, parse_timestamp
from biztracker.utils.items_parser import parse_invoice_items


def _require(payload: dict[str, Any], key: str, kind: str) -> Any:
    if payload.get(key) is None:
        raise InvalidRecordError(f"{kind} record is missing '{key}'")
    return payload[key]


def _to_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_timestamp(str(value)).date()
    except ValueError:
        pass
    try:
        return parse_date(str(value))
    except ValueError as e:
        raise InvalidRecordError(f"{field}: {e}") from e


def _to_datetime(value: Any, field: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    try:
        return parse_timestamp(str(value))
    except ValueError as e:
        raise InvalidRecordError(f"{field}: {e}") from e


def _to_flag(value: Any, field: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise InvalidRecordError(f"{field} must be true or false (got {value!r})")


def _optional(value: Any, convert, field: str) -> Optional[Any]:
    if value is None or value == "":
        return None
    return convert(value, field)


def expense_to_domain(payload: dict[str, Any]) -> domain.Expense:
    """Convert an expense payload to a domain Expense entity."""
    is_gst_applicable = _to_flag(payload.get("isGstApplicable", False), "isGstApplicable")
    gst_amount = payload.get("gstAmount")
    if gst_amount in (None, ""):
        # Missing GST on a taxable expense is computed from the amount
        gst_amount = None if is_gst_applicable else 0
    return domain.Expense.create(
        id=_require(payload, "id", "Expense"),
        description=payload.get("description", ""),
        amount=_require(payload, "amount", "Expense"),
        category=payload.get("category", ""),
        date=_to_date(_require(payload, "date", "Expense"), "date"),
        is_gst_applicable=is_gst_applicable,
        gst_amount=gst_amount,
        receipt_ref=payload.get("receiptUrl") or payload.get("receiptRef"),
    )


def invoice_to_domain(payload: dict[str, Any]) -> domain.Invoice:
    """Convert an invoice payload to a domain Invoice entity."""
    return domain.Invoice(
        id=_require(payload, "id", "Invoice"),
        invoice_number=str(_require(payload, "invoiceNumber", "Invoice")),
        client_name=payload.get("clientName", ""),
        items=parse_invoice_items(payload.get("items", [])),
        status=payload.get("status", domain.InvoiceStatus.DRAFT.value),
        created_at=_to_datetime(_require(payload, "createdAt", "Invoice"), "createdAt"),
        due_date=_optional(payload.get("dueDate"), _to_date, "dueDate"),
        paid_date=_optional(payload.get("paidDate"), _to_datetime, "paidDate"),
        client_email=payload.get("clientEmail"),
        client_address=payload.get("clientAddress"),
        notes=payload.get("notes"),
    )


def inventory_item_to_domain(payload: dict[str, Any]) -> domain.InventoryItem:
    """Convert an inventory payload to a domain InventoryItem entity."""
    return domain.InventoryItem(
        id=_require(payload, "id", "Inventory"),
        item_name=payload.get("itemName", ""),
        quantity=_require(payload, "quantity", "Inventory"),
        min_stock_level=payload.get("minStockLevel", 0),
        unit_price=_require(payload, "unitPrice", "Inventory"),
        category=payload.get("category", ""),
    )
