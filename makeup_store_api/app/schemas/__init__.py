"""
Pydantic schema definitions for API payloads.

Products and bills define their own request and response models.  The
JSON field names follow the store file (``billCounter``, ``productId``),
so snake_case attributes carry camelCase aliases where they differ.
"""
