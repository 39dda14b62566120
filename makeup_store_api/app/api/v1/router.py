"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.  When
new domains are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import bills, products, store

# Create a router for version 1 and include sub‑routers for each domain.
router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(bills.router, prefix="/bills", tags=["bills"])
# The store router defines its own "/reset" path.
router.include_router(store.router, tags=["store"])
