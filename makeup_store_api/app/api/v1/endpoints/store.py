"""
Store maintenance endpoints.

``POST /reset`` puts the default catalogue back and clears all bills.  It
exists for demos and tests and is not protected.  ``GET /health`` lets
the clients check that the backend is up.
"""

import logging

from fastapi import APIRouter, Depends

from makeup_store_api.app.core.storage import JsonStore, get_store
from makeup_store_api.app.schemas.common import MessageResponse


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/reset", response_model=MessageResponse)
async def reset_store(store: JsonStore = Depends(get_store)) -> dict:
    store.reset()
    logger.warning("Inventory reset requested; all products and bills restored to defaults")
    return {"success": True, "message": "Inventory reset successfully"}


@router.get("/health")
async def health() -> dict:
    """Liveness probe used by the clients to decide whether to work offline."""
    return {"success": True, "status": "ok"}
