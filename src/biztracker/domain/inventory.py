"""Inventory stock alerts and valuation."""

from typing import Sequence

from biztracker.domain.entities import InventoryItem, InventorySummary, StockStatus
from biztracker.domain.money import ZERO


def stock_alerts(items: Sequence[InventoryItem]) -> list[InventoryItem]:
    """Return items at or below their minimum stock level, in input order."""
    return [item for item in items if item.stock_status is not StockStatus.IN_STOCK]


def inventory_summary(items: Sequence[InventoryItem]) -> InventorySummary:
    """Summarize stock value and alert counts."""
    statuses = [item.stock_status for item in items]
    return InventorySummary(
        total_value=sum((item.value for item in items), ZERO),
        item_count=len(items),
        low_stock_count=statuses.count(StockStatus.LOW_STOCK),
        out_of_stock_count=statuses.count(StockStatus.OUT_OF_STOCK),
    )


def search_items(items: Sequence[InventoryItem], term: str) -> list[InventoryItem]:
    """Case-insensitive match on item name or category."""
    needle = term.strip().lower()
    if not needle:
        return list(items)
    return [
        item
        for item in items
        if needle in item.item_name.lower() or needle in item.category.lower()
    ]
