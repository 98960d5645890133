"""Invoice item payload parsing."""

import json
from typing import Any

from biztracker.domain.entities import InvoiceItem
from biztracker.domain.errors import DomainError, MalformedRecordError

ITEM_KEYS = ("description", "quantity", "rate")


def parse_invoice_items(payload: str | list[Any]) -> tuple[InvoiceItem, ...]:
    """Parse serialized invoice lines into InvoiceItem records.

    The record store keeps lines as a JSON array of
    ``{"description", "quantity", "rate"}`` objects, either as text or
    already decoded.

    Args:
        payload: JSON text or decoded list

    Returns:
        Tuple of InvoiceItem in payload order

    Raises:
        MalformedRecordError: If the payload is not a list of item objects or
            an item carries invalid values
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedRecordError(f"Invoice items are not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise MalformedRecordError(
            f"Invoice items must be a list, got {type(payload).__name__}"
        )

    items = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise MalformedRecordError(f"Invoice item {index} is not an object")
        missing = [key for key in ITEM_KEYS if key not in raw]
        if missing:
            raise MalformedRecordError(
                f"Invoice item {index} is missing {', '.join(missing)}"
            )
        try:
            items.append(
                InvoiceItem(
                    description=str(raw["description"]),
                    quantity=raw["quantity"],
                    rate=raw["rate"],
                )
            )
        except DomainError as e:
            raise MalformedRecordError(f"Invoice item {index}: {e}") from e
    return tuple(items)
