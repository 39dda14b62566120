"""
Bill endpoints for API v1.

Creating a bill takes the listed quantities out of stock.  Bills are
append-only: there is no route to edit or delete one.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from makeup_store_api.app.core.config import settings
from makeup_store_api.app.core.storage import JsonStore, get_store
from makeup_store_api.app.schemas.bill import BillCreate, BillListResponse, BillResponse
from makeup_store_api.app.services.bill_service import BillError, BillService


router = APIRouter()


@router.post("", response_model=BillResponse, response_model_exclude_none=True)
async def create_bill(
    payload: Optional[BillCreate] = Body(None),
    store: JsonStore = Depends(get_store),
) -> dict:
    """Create a bill from ``{"items": [{"id", "quantity"}]}``.

    A request without a body counts as an empty bill.  Returns 400 for
    an empty bill or insufficient stock and 404 when an item names an
    unknown product.  Subtotal, tax and total are computed server side.
    """
    try:
        bill = await BillService.create_bill(store, payload, settings.tax_rate)
    except BillError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return {"success": True, "message": "Bill created successfully", "data": bill}


@router.get("", response_model=BillListResponse, response_model_exclude_none=True)
async def list_bills(store: JsonStore = Depends(get_store)) -> dict:
    return {"success": True, "data": await BillService.list_bills(store)}


@router.get("/{bill_id}", response_model=BillResponse, response_model_exclude_none=True)
async def get_bill(bill_id: int, store: JsonStore = Depends(get_store)) -> dict:
    bill = await BillService.get_bill(store, bill_id)
    if bill is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bill not found")
    return {"success": True, "data": bill}
