"""
Service layer for products.

Products are plain dictionaries inside the store document and are
looked up by linear scan.  Every mutation rewrites the data file.  The
service returns ``None`` for unknown products and leaves the choice of
HTTP status to the API layer.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from makeup_store_api.app.core.catalog import PLACEHOLDER_IMAGE, next_product_id
from makeup_store_api.app.core.storage import JsonStore
from makeup_store_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate


logger = logging.getLogger(__name__)


class ProductService:
    """Service class for managing the product inventory."""

    @classmethod
    async def list_products(cls, store: JsonStore) -> List[ProductRead]:
        return [ProductRead(**p) for p in store.products]

    @classmethod
    async def get_product(cls, store: JsonStore, product_id: int) -> Optional[ProductRead]:
        product = store.find_product(product_id)
        if product is None:
            return None
        return ProductRead(**product)

    @classmethod
    async def create_product(cls, store: JsonStore, data: ProductCreate) -> ProductRead:
        """Append a new product and return it.

        The id is one past the highest id in use.  A product created
        without an image gets the placeholder tile.  Callers must check
        ``data.missing_fields()`` first.
        """
        product = {
            "id": next_product_id(store.products),
            "name": data.name,
            "code": data.code,
            "price": float(data.price),
            "stock": int(data.stock),
            "image": data.image or PLACEHOLDER_IMAGE,
        }
        store.products.append(product)
        store.save()
        logger.info("Created product %s (%s)", product["id"], product["code"])
        return ProductRead(**product)

    @classmethod
    async def update_product(
        cls, store: JsonStore, product_id: int, data: ProductUpdate
    ) -> Optional[ProductRead]:
        """Apply a partial update.

        Only fields present in the request body are changed.  Returns the
        updated product or ``None`` if it does not exist.
        """
        product = store.find_product(product_id)
        if product is None:
            return None
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        product.update(changes)
        store.save()
        logger.info("Updated product %s: %s", product_id, sorted(changes))
        return ProductRead(**product)

    @classmethod
    async def set_stock(cls, store: JsonStore, product_id: int, quantity: int) -> Optional[ProductRead]:
        """Set the absolute stock level of a product."""
        product = store.find_product(product_id)
        if product is None:
            return None
        product["stock"] = quantity
        store.save()
        logger.info("Set stock of product %s to %s", product_id, quantity)
        return ProductRead(**product)

    @classmethod
    async def delete_product(cls, store: JsonStore, product_id: int) -> Optional[ProductRead]:
        """Remove a product and return it, or ``None`` if it does not exist."""
        for index, product in enumerate(store.products):
            if product.get("id") == product_id:
                deleted = store.products.pop(index)
                store.save()
                logger.info("Deleted product %s", product_id)
                return ProductRead(**deleted)
        return None
