"""
Product endpoints for API v1.

CRUD routes used by the admin page plus the stock routes used by the
storefront while a bill is being assembled.  Every response is wrapped
in the ``{"success", "message", "data"}`` envelope.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from makeup_store_api.app.core.storage import JsonStore, get_store
from makeup_store_api.app.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    StockUpdate,
)
from makeup_store_api.app.services.product_service import ProductService


router = APIRouter()


@router.get("", response_model=ProductListResponse, response_model_exclude_none=True)
async def list_products(store: JsonStore = Depends(get_store)) -> dict:
    """Return every product in inventory order."""
    return {"success": True, "data": await ProductService.list_products(store)}


@router.post("/update-stock", response_model=ProductResponse, response_model_exclude_none=True)
async def update_stock(payload: StockUpdate, store: JsonStore = Depends(get_store)) -> dict:
    """Set a product's stock to the given quantity.

    The quantity is an absolute level, not a delta.
    """
    product = await ProductService.set_stock(store, payload.product_id, payload.quantity)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return {"success": True, "message": "Stock updated successfully", "data": product}


@router.get("/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def get_product(product_id: int, store: JsonStore = Depends(get_store)) -> dict:
    product = await ProductService.get_product(store, product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return {"success": True, "data": product}


@router.post("", response_model=ProductResponse, response_model_exclude_none=True)
async def create_product(payload: ProductCreate, store: JsonStore = Depends(get_store)) -> dict:
    """Add a product.

    Name, code, price and stock are required; the image is optional.
    """
    if payload.missing_fields():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")
    product = await ProductService.create_product(store, payload)
    return {"success": True, "message": "Product added successfully", "data": product}


@router.put("/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    store: JsonStore = Depends(get_store),
) -> dict:
    """Update an existing product.

    Partial updates are supported; any unspecified fields remain unchanged.
    """
    product = await ProductService.update_product(store, product_id, payload)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return {"success": True, "message": "Product updated successfully", "data": product}


@router.delete("/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def delete_product(product_id: int, store: JsonStore = Depends(get_store)) -> dict:
    """Delete a product and return the removed record."""
    product = await ProductService.delete_product(store, product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return {"success": True, "message": "Product deleted successfully", "data": product}
