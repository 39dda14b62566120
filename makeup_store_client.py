"""Makeup store API client.

This module defines a small client wrapper around the store's REST API
together with the local product cache both front ends fall back to when
the backend cannot be reached.  The client uses the ``requests`` library
internally to make HTTP calls.

The client exposes high‑level methods for the operations used by the
storefront and the product admin:

* :meth:`MakeupStoreAPI.list_products` / :meth:`MakeupStoreAPI.get_product`
* :meth:`MakeupStoreAPI.create_product`, :meth:`MakeupStoreAPI.update_product`,
  :meth:`MakeupStoreAPI.delete_product`
* :meth:`MakeupStoreAPI.set_stock` – absolute stock level via ``update-stock``
* :meth:`MakeupStoreAPI.create_bill`, :meth:`MakeupStoreAPI.list_bills`,
  :meth:`MakeupStoreAPI.get_bill`
* :meth:`MakeupStoreAPI.reset_store` and :meth:`MakeupStoreAPI.healthcheck`

Every method returns a tuple ``(data, error)``.  ``data`` is the
unwrapped ``data`` member of the server's response envelope; ``error``
is ``None`` on success or a dictionary with keys ``status_code`` and
``message``.  Network failures carry ``status_code=None``, which the
front ends treat as "backend not reachable".

Configuration is read from the environment:

``STORE_API_URL``
    Base URL of the API including the ``/api`` prefix.  Defaults to
    ``http://localhost:3000/api``.

``STORE_LOCAL_STORAGE``
    Path of the local product cache.  Defaults to
    ``~/.makeup_store/local_storage.json``.

``STORE_API_TIMEOUT``
    Request timeout in seconds.  Defaults to ``5``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests

from makeup_store_api.app.core.catalog import default_products


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api"
LOCAL_STORAGE_KEY = "storeProducts"

ApiError = Dict[str, Any]


class MakeupStoreAPI:
    """Client for interacting with the makeup store API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API including its prefix, e.g.
                ``http://localhost:3000/api``.  Falls back to
                ``STORE_API_URL``.
            session: Optional session object with a ``requests``‑style
                ``request`` method.  If not supplied a
                :class:`requests.Session` is created.
            timeout: Request timeout in seconds.
        """
        self.base_url = (base_url or os.getenv("STORE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else float(os.getenv("STORE_API_TIMEOUT", "5"))

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/products``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(envelope, error)``.  ``envelope`` is the parsed JSON
            body on success.  On failure it is ``None`` and ``error``
            describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = ""
            if isinstance(body, dict):
                message = body.get("message") or body.get("detail") or ""
            if not message:
                message = response.text or f"HTTP {response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        return body, None

    def _data(self, method: str, path: str, *, json_body: Any | None = None) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Like :meth:`_request` but unwrap the envelope's ``data`` member."""
        body, error = self._request(method, path, json_body=json_body)
        if error:
            return None, error
        if isinstance(body, dict):
            return body.get("data"), None
        return body, None

    # ------------------------------------------------------------------
    # Product operations
    # ------------------------------------------------------------------
    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._data("GET", "/products")
        if error:
            return [], error
        return data or [], None

    def get_product(self, product_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._data("GET", f"/products/{product_id}")

    def create_product(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a product.  The server assigns the id."""
        return self._data("POST", "/products", json_body=payload)

    def update_product(
        self, product_id: int, changes: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Partially update a product; ``changes`` holds only the fields to set."""
        return self._data("PUT", f"/products/{product_id}", json_body=changes)

    def delete_product(self, product_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._data("DELETE", f"/products/{product_id}")

    def set_stock(self, product_id: int, quantity: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Set a product's absolute stock level through ``update-stock``."""
        return self._data(
            "POST",
            "/products/update-stock",
            json_body={"productId": product_id, "quantity": quantity},
        )

    # ------------------------------------------------------------------
    # Bill operations
    # ------------------------------------------------------------------
    def create_bill(self, items: List[Dict[str, int]]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a bill from ``[{"id": product_id, "quantity": n}, ...]``.

        The server takes the quantities out of stock itself.
        """
        return self._data("POST", "/bills", json_body={"items": items})

    def list_bills(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._data("GET", "/bills")
        if error:
            return [], error
        return data or [], None

    def get_bill(self, bill_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._data("GET", f"/bills/{bill_id}")

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def reset_store(self) -> Tuple[bool, Optional[ApiError]]:
        body, error = self._request("POST", "/reset")
        if error:
            return False, error
        return bool(isinstance(body, dict) and body.get("success")), None

    def healthcheck(self) -> bool:
        body, error = self._request("GET", "/health")
        return error is None and isinstance(body, dict) and body.get("status") == "ok"


class LocalProductCache:
    """Product list persisted to a local JSON file.

    The file stores ``{"storeProducts": [...]}`` and stands in for the
    browser's local storage.  Both front ends read it when the backend
    is down and rewrite it after every change.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        default_path = Path.home() / ".makeup_store" / "local_storage.json"
        self.path = Path(path or os.getenv("STORE_LOCAL_STORAGE", default_path))

    def load(self) -> Optional[List[Dict[str, Any]]]:
        """Return the cached products, or ``None`` if nothing usable is stored."""
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                stored = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable local storage %s: %s", self.path, exc)
            return None
        products = stored.get(LOCAL_STORAGE_KEY) if isinstance(stored, dict) else None
        return products if isinstance(products, list) else None

    def save(self, products: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump({LOCAL_STORAGE_KEY: products}, fh, indent=2, ensure_ascii=False)


def load_products(api: MakeupStoreAPI, cache: LocalProductCache) -> Tuple[List[Dict[str, Any]], bool]:
    """Fetch the product list, falling back to local data.

    Returns ``(products, use_backend)``.  When the server answers, its
    list is used and ``use_backend`` is true.  Otherwise the cached list
    is used, or the default catalogue when nothing is cached.  Either
    way the resulting list is written back to the cache.
    """
    products, error = api.list_products()
    if error is None:
        use_backend = True
    else:
        logger.warning("Backend not reachable, using local data. (%s)", error["message"])
        use_backend = False
        products = cache.load()
        if products is None:
            products = default_products()
    cache.save(products)
    return products, use_backend
