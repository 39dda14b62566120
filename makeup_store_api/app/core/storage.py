"""
JSON file persistence for the store.

The whole store (products, bills and the bill counter) lives in a
single JSON document.  It is read once when the application starts,
kept in memory, and written back wholesale after every mutation.  There
is no locking: the store assumes a single client session against a
single file.

Use :func:`get_store` as a FastAPI dependency to reach the instance
attached to the running application.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Request

from .catalog import default_store
from .config import settings


logger = logging.getLogger(__name__)


def get_data_file_path(data_file: Optional[str] = None) -> Path:
    """Compute the path to the JSON data file.

    If the configured path is absolute, use it directly.  Otherwise
    resolve it relative to the project root (the directory containing
    the ``makeup_store_api`` package).
    """
    data_file = data_file or settings.data_file
    if os.path.isabs(data_file):
        return Path(data_file)
    base_dir = Path(__file__).resolve().parents[3]
    return (base_dir / data_file).resolve()


class JsonStore:
    """In-memory store document backed by a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.data: Dict[str, Any] = default_store()

    @property
    def products(self) -> List[Dict[str, Any]]:
        return self.data["products"]

    @property
    def bills(self) -> List[Dict[str, Any]]:
        return self.data["bills"]

    def load(self) -> Dict[str, Any]:
        """Load the store from disk, creating the file with defaults if absent.

        A file that exists but cannot be parsed is left untouched and the
        defaults are used in memory; the next mutation overwrites it.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if not self.path.exists():
            self.data = default_store()
            self._write(self.data)
            logger.info("Created data file %s with default inventory", self.path)
            return self.data

        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
            if not isinstance(data, dict):
                raise ValueError("store document must be a JSON object")
        except (OSError, ValueError) as exc:
            logger.error("Failed to read data file %s, using defaults: %s", self.path, exc)
            data = default_store()

        # Missing or mistyped keys are taken from the defaults.
        for key, value in default_store().items():
            current = data.get(key)
            if isinstance(value, list):
                valid = isinstance(current, list)
            else:
                valid = isinstance(current, int) and not isinstance(current, bool)
            if not valid:
                if key in data:
                    logger.warning("Ignoring invalid %r in data file %s", key, self.path)
                data[key] = value
        self.data = data
        return self.data

    def save(self) -> None:
        """Write the whole store document back to disk."""
        self._write(self.data)

    def reset(self) -> None:
        """Replace the store with the default inventory and persist it."""
        self.data = default_store()
        self.save()
        logger.info("Store reset to default inventory")

    def next_bill_id(self) -> int:
        """Return the current bill counter and advance it."""
        bill_id = int(self.data.get("billCounter", 1))
        self.data["billCounter"] = bill_id + 1
        return bill_id

    def find_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        return next((p for p in self.products if p.get("id") == product_id), None)

    def find_bill(self, bill_id: int) -> Optional[Dict[str, Any]]:
        return next((b for b in self.bills if b.get("id") == bill_id), None)

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)


def get_store(request: Request) -> JsonStore:
    """FastAPI dependency returning the store attached to the application."""
    return request.app.state.store
