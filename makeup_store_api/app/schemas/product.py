"""
Pydantic models for product data.

``ProductCreate`` deliberately leaves every field optional so that the
endpoint can answer a missing field with the store's own
"Missing required fields" message instead of a generic validation
error.  Prices are coerced to ``float`` and stock to ``int``, which
also accepts numeric strings posted by HTML forms.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import MessageResponse


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    name: Optional[str] = Field(None, examples=["Silk Finish Foundation"])
    code: Optional[str] = Field(None, examples=["FD-004"])
    price: Optional[float] = Field(None, examples=[6500.0])
    stock: Optional[int] = Field(None, examples=[30])
    image: Optional[str] = Field(None, description="Image as a data URI")

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        missing = [name for name in ("name", "code") if not getattr(self, name)]
        missing += [name for name in ("price", "stock") if getattr(self, name) is None]
        return missing


class ProductUpdate(BaseModel):
    """Schema for updating a product.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = None
    code: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    image: Optional[str] = None


class ProductRead(BaseModel):
    id: int
    name: str
    code: str
    price: float
    stock: int
    image: Optional[str] = None


class StockUpdate(BaseModel):
    """Absolute stock level for one product (not a delta)."""

    product_id: int = Field(..., alias="productId")
    quantity: int

    model_config = {
        "populate_by_name": True,
    }


class ProductResponse(MessageResponse):
    data: ProductRead


class ProductListResponse(MessageResponse):
    data: List[ProductRead]
