"""
Top‑level package for the Makeup Store API.

This file makes ``makeup_store_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``makeup_store_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
