"""Record store factory functions."""

import os
from pathlib import Path
from typing import Optional

from biztracker.store.json_store import JSONRecordStore


def create_json_store(data_path: Optional[str] = None) -> JSONRecordStore:
    """Create a JSON record store.

    Args:
        data_path: Path to the JSON records file. If None, checks
            BIZTRACKER_DATA_PATH environment variable, then defaults to
            ~/.biztracker/records.json

    Returns:
        JSONRecordStore instance
    """
    if data_path is None:
        data_path = os.environ.get("BIZTRACKER_DATA_PATH")

    if data_path is None:
        data_dir = Path.home() / ".biztracker"
        data_dir.mkdir(exist_ok=True)
        data_path = str(data_dir / "records.json")

    return JSONRecordStore(data_path)
