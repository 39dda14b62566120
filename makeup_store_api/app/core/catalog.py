"""
Default catalogue and store-wide constants.

The same three products seed a fresh server data file and the clients'
offline cache, so both sides start from an identical inventory.  Images
are inline SVG data URIs; products created without an image receive
``PLACEHOLDER_IMAGE``.
"""

import copy
from typing import Any, Dict, List


def _svg_tile(fill: str, glyph: str) -> str:
    return (
        "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' width='100' height='100'%3E"
        f"%3Crect fill='%23{fill}' width='100' height='100'/%3E"
        "%3Ctext x='50%25' y='50%25' font-size='40' text-anchor='middle' dy='.3em'%3E"
        f"{glyph}%3C/text%3E%3C/svg%3E"
    )


PLACEHOLDER_IMAGE = _svg_tile("dfe6e9", "📦")

TAX_RATE = 0.10

# Admin view thresholds: 0 is out of stock, below this is low stock.
LOW_STOCK_THRESHOLD = 20

DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Radiant Glow Face Powder",
        "code": "FP-001",
        "price": 7000.0,
        "stock": 50,
        "image": _svg_tile("ffeaa7", "✨"),
    },
    {
        "id": 2,
        "name": "Matte Velvet Lipstick",
        "code": "LS-002",
        "price": 5200.0,
        "stock": 120,
        "image": _svg_tile("ff7675", "💄"),
    },
    {
        "id": 3,
        "name": "Precision Point Eyeliner",
        "code": "EL-003",
        "price": 4200.0,
        "stock": 0,
        "image": _svg_tile("a29bfe", "✏️"),
    },
]


def default_products() -> List[Dict[str, Any]]:
    """Return a fresh copy of the default catalogue."""
    return copy.deepcopy(DEFAULT_PRODUCTS)


def default_store() -> Dict[str, Any]:
    """Return a fresh store document: default products, no bills."""
    return {"products": default_products(), "bills": [], "billCounter": 1}


def next_product_id(products: List[Dict[str, Any]]) -> int:
    """Next product id: one past the highest id in use, or 1 when empty."""
    if not products:
        return 1
    return max(p["id"] for p in products) + 1
