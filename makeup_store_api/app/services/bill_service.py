"""
Service layer for bills.

Creating a bill is the only server-side operation that touches several
products at once.  The request is checked in full before any stock is
taken, so a bill rejected halfway through its item list leaves the
inventory exactly as it was.  Amounts are rounded to two decimals.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from makeup_store_api.app.core.storage import JsonStore
from makeup_store_api.app.schemas.bill import BillCreate, BillRead


logger = logging.getLogger(__name__)


class BillError(Exception):
    """A bill request that breaks a business rule."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BillService:
    """Service class for creating and reading bills."""

    @classmethod
    async def create_bill(cls, store: JsonStore, data: Optional[BillCreate], tax_rate: float) -> BillRead:
        """Validate a bill, take its items out of stock and record it.

        ``data`` may be ``None`` for a request without a body.  Raises
        :class:`BillError` with status 400 for an empty bill or
        insufficient stock and 404 for an unknown product.
        """
        if data is None or not data.items:
            raise BillError(400, "No items in bill")

        # Quantities are summed per product so that repeated lines are
        # checked against the stock they share.
        requested: Dict[int, int] = {}
        lines: List[tuple[Dict[str, Any], int]] = []
        for item in data.items:
            product = store.find_product(item.id)
            if product is None:
                raise BillError(404, f"Product with ID {item.id} not found")
            requested[item.id] = requested.get(item.id, 0) + item.quantity
            if product["stock"] < requested[item.id]:
                raise BillError(400, f"Not enough stock for {product['name']}")
            lines.append((product, item.quantity))

        subtotal = 0.0
        items = []
        for product, quantity in lines:
            product["stock"] -= quantity
            line_total = product["price"] * quantity
            subtotal += line_total
            items.append(
                {
                    "productId": product["id"],
                    "name": product["name"],
                    "code": product["code"],
                    "price": product["price"],
                    "quantity": quantity,
                    "total": round(line_total, 2),
                }
            )

        tax = subtotal * tax_rate
        bill = {
            "id": store.next_bill_id(),
            "items": items,
            "subtotal": round(subtotal, 2),
            "tax": round(tax, 2),
            "total": round(subtotal + tax, 2),
            "date": _utc_timestamp(),
        }
        store.bills.append(bill)
        store.save()
        logger.info("Created bill %s with %d line(s), total %.2f", bill["id"], len(items), bill["total"])
        return BillRead(**bill)

    @classmethod
    async def list_bills(cls, store: JsonStore) -> List[BillRead]:
        return [BillRead(**b) for b in store.bills]

    @classmethod
    async def get_bill(cls, store: JsonStore, bill_id: int) -> Optional[BillRead]:
        bill = store.find_bill(bill_id)
        if bill is None:
            return None
        return BillRead(**bill)
