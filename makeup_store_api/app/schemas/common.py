"""
Response envelope shared by every route.

All responses carry ``success`` and, for mutations, a human readable
``message``.  Errors use the same shape with ``success`` set to false
(see the exception handlers in ``main``).
"""

from typing import Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
