"""
Pydantic models for bills.

A bill request lists product ids and quantities only; names, codes and
prices are copied from the inventory when the bill is created so the
stored bill keeps the values that applied at the time of sale.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import MessageResponse


class BillItemCreate(BaseModel):
    id: int = Field(..., description="Product identifier")
    quantity: int = Field(..., gt=0)


class BillCreate(BaseModel):
    items: Optional[List[BillItemCreate]] = None


class BillItemRead(BaseModel):
    product_id: int = Field(..., alias="productId")
    name: str
    code: str
    price: float
    quantity: int
    total: float

    model_config = {
        "populate_by_name": True,
    }


class BillRead(BaseModel):
    id: int
    items: List[BillItemRead]
    subtotal: float
    tax: float
    total: float
    date: str = Field(..., description="ISO-8601 creation timestamp (UTC)")


class BillResponse(MessageResponse):
    data: BillRead


class BillListResponse(MessageResponse):
    data: List[BillRead]
