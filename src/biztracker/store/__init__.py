"""Record store adapters for biztracker."""

from biztracker.store.base import RecordSnapshot, RecordStore

__all__ = ["RecordSnapshot", "RecordStore"]
