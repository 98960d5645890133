"""JSON file record store."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from biztracker.domain.entities import Expense, InventoryItem, Invoice
from biztracker.domain.errors import InvalidRecordError
from biztracker.store.base import RecordSnapshot, RecordStore
from biztracker.store.mappers import (
    expense_to_domain,
    inventory_item_to_domain,
    invoice_to_domain,
)

logger = logging.getLogger(__name__)

SECTIONS = ("expenses", "invoices", "inventory")


class JSONRecordStore(RecordStore):
    """Record store backed by a JSON export of the REST data store.

    The file holds an object with ``expenses``, ``invoices`` and
    ``inventory`` arrays. Every call checks the file again; the parsed
    content is reused while its modification time and size are unchanged.
    ``snapshot()`` maps all three sections from a single read.
    """

    def __init__(self, path: str | Path):
        """Initialize JSON record store.

        Args:
            path: Path to the JSON file
        """
        self.path = Path(path)
        self._cache_key: Optional[tuple[int, int]] = None
        self._cache: dict[str, list[dict[str, Any]]] = {}

    def _load(self) -> dict[str, list[dict[str, Any]]]:
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            logger.info("Record file %s does not exist; using an empty snapshot", self.path)
            return {key: [] for key in SECTIONS}

        key = (stat.st_mtime_ns, stat.st_size)
        if key == self._cache_key:
            return self._cache

        with self.path.open(encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as e:
                raise InvalidRecordError(f"Record file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise InvalidRecordError(f"Record file {self.path} must contain a JSON object")

        sections = {}
        for section in SECTIONS:
            raw = data.get(section, [])
            if not isinstance(raw, list):
                raise InvalidRecordError(f"'{section}' in {self.path} must be a list")
            sections[section] = raw
        logger.debug(
            "Loaded %s from %s",
            ", ".join(f"{len(sections[s])} {s}" for s in SECTIONS),
            self.path,
        )

        self._cache_key = key
        self._cache = sections
        return sections

    @staticmethod
    def _map_expenses(data) -> tuple[Expense, ...]:
        return tuple(expense_to_domain(raw) for raw in data["expenses"])

    @staticmethod
    def _map_invoices(data) -> tuple[Invoice, ...]:
        return tuple(invoice_to_domain(raw) for raw in data["invoices"])

    @staticmethod
    def _map_inventory(data) -> tuple[InventoryItem, ...]:
        return tuple(inventory_item_to_domain(raw) for raw in data["inventory"])

    def list_expenses(self) -> tuple[Expense, ...]:
        return self._map_expenses(self._load())

    def list_invoices(self) -> tuple[Invoice, ...]:
        return self._map_invoices(self._load())

    def list_inventory_items(self) -> tuple[InventoryItem, ...]:
        return self._map_inventory(self._load())

    def snapshot(self) -> RecordSnapshot:
        data = self._load()
        return RecordSnapshot(
            expenses=self._map_expenses(data),
            invoices=self._map_invoices(data),
            inventory_items=self._map_inventory(data),
        )
