#!/usr/bin/env python3
"""
Product administration client for the makeup store.

:class:`ProductAdmin` adds, edits and deletes products.  While the
backend is reachable every change goes through the REST API and the
product list is reloaded from the server afterwards.  When it is not,
changes are applied to the local product cache instead, so the admin
keeps working offline against the same data the storefront falls back
to.

Usage:
    python product_admin.py list
    python product_admin.py add --name "Silk Foundation" --code FD-004 --price 6500 --stock 30 [--image photo.png]
    python product_admin.py edit 4 --price 6200 --stock 25
    python product_admin.py delete 4
    python product_admin.py reset

The API location is read from ``STORE_API_URL`` (see
:mod:`makeup_store_client`).
"""

import argparse
import base64
import mimetypes
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from makeup_store_api.app.core.catalog import LOW_STOCK_THRESHOLD, PLACEHOLDER_IMAGE, next_product_id
from makeup_store_api.app.core.logging_config import setup_logging
from makeup_store_client import LocalProductCache, MakeupStoreAPI, load_products


logger = logging.getLogger(__name__)

OFFLINE_NOTICE = "Working offline - changes saved locally."


class AdminError(Exception):
    """The server refused or failed a change."""


class ProductValidationError(AdminError):
    """Form input that cannot be saved."""


def stock_status(product: Dict[str, Any]) -> Tuple[str, str]:
    """CSS class and label describing a product's stock level."""
    stock = product["stock"]
    if stock == 0:
        return "stock-out", "Out of Stock"
    if stock < LOW_STOCK_THRESHOLD:
        return "stock-low", f"Low Stock ({stock})"
    return "stock-available", f"In Stock ({stock})"


def image_to_data_url(path: str) -> str:
    """Read an image file and encode it as a base64 ``data:`` URI."""
    file_path = Path(path)
    mime_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class ProductAdmin:
    """Controller behind the product admin page."""

    def __init__(self, api: Optional[MakeupStoreAPI] = None, cache: Optional[LocalProductCache] = None) -> None:
        self.api = api or MakeupStoreAPI()
        self.cache = cache or LocalProductCache()
        self.products: List[Dict[str, Any]] = []
        self.use_backend = True
        self.notice: Optional[str] = None

    def load_products(self) -> List[Dict[str, Any]]:
        self.products, self.use_backend = load_products(self.api, self.cache)
        self.notice = None if self.use_backend else OFFLINE_NOTICE
        return self.products

    def find_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        return next((p for p in self.products if p["id"] == product_id), None)

    def product_count_label(self) -> str:
        count = len(self.products)
        return f"{count} product{'' if count == 1 else 's'}"

    def save_product(
        self,
        name: str,
        code: str,
        price: float,
        stock: int,
        image: Optional[str] = None,
        product_id: Optional[int] = None,
    ) -> None:
        """Add a product, or edit ``product_id`` when given.

        All five fields are written on an edit, as the admin form always
        submits the whole product.  The list is reloaded afterwards.
        """
        name = (name or "").strip()
        code = (code or "").strip()
        if not name or not code or price < 0 or stock < 0:
            raise ProductValidationError("Please fill all required fields correctly!")

        payload = {
            "name": name,
            "code": code,
            "price": float(price),
            "stock": int(stock),
            "image": image or PLACEHOLDER_IMAGE,
        }

        if product_id is not None:
            if self.use_backend:
                _, error = self.api.update_product(product_id, payload)
                if error:
                    raise AdminError("Could not save product.")
            else:
                product = self.find_product(product_id)
                if product is not None:
                    product.update(payload)
                    self.cache.save(self.products)
            logger.info("Product %s updated", product_id)
        else:
            if self.use_backend:
                _, error = self.api.create_product(payload)
                if error:
                    raise AdminError("Could not save product.")
            else:
                self.products.append({"id": next_product_id(self.products), **payload})
                self.cache.save(self.products)
            logger.info("Product %s added", code)

        self.load_products()

    def delete_product(self, product_id: int) -> None:
        if self.use_backend:
            _, error = self.api.delete_product(product_id)
            if error:
                raise AdminError("Could not delete product.")
        else:
            self.products = [p for p in self.products if p["id"] != product_id]
            self.cache.save(self.products)
        logger.info("Product %s deleted", product_id)
        self.load_products()


def _print_products(admin: ProductAdmin) -> None:
    print(admin.product_count_label())
    if not admin.products:
        print("No products yet. Add your first product!")
    for product in admin.products:
        _, label = stock_status(product)
        print(f"{product['id']:>3}  {product['code']:<8} {product['name']:<30} Rs. {product['price']:.2f}  {label}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Manage makeup store products.")
    ap.add_argument("--api-url", help="API base URL (default: STORE_API_URL or http://localhost:3000/api)")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List products")

    add = sub.add_parser("add", help="Add a product")
    add.add_argument("--name", required=True)
    add.add_argument("--code", required=True)
    add.add_argument("--price", type=float, required=True)
    add.add_argument("--stock", type=int, required=True)
    add.add_argument("--image", help="Image file to embed")

    edit = sub.add_parser("edit", help="Edit a product; unspecified fields keep their value")
    edit.add_argument("id", type=int)
    edit.add_argument("--name")
    edit.add_argument("--code")
    edit.add_argument("--price", type=float)
    edit.add_argument("--stock", type=int)
    edit.add_argument("--image", help="Image file to embed")

    delete = sub.add_parser("delete", help="Delete a product")
    delete.add_argument("id", type=int)

    sub.add_parser("reset", help="Restore the default inventory on the server")

    args = ap.parse_args(argv)
    setup_logging("WARNING")

    image = None
    if getattr(args, "image", None):
        try:
            image = image_to_data_url(args.image)
        except OSError as exc:
            print(f"[!] Cannot read image: {exc}", file=sys.stderr)
            return 1

    admin = ProductAdmin(MakeupStoreAPI(base_url=args.api_url))
    admin.load_products()
    if admin.notice:
        print(f"[!] {admin.notice}", file=sys.stderr)

    try:
        if args.command == "list":
            _print_products(admin)
        elif args.command == "add":
            admin.save_product(args.name, args.code, args.price, args.stock, image)
            print("[+] Product added successfully!")
        elif args.command == "edit":
            current = admin.find_product(args.id)
            if current is None:
                print(f"[!] No product with id {args.id}", file=sys.stderr)
                return 2
            admin.save_product(
                args.name if args.name is not None else current["name"],
                args.code if args.code is not None else current["code"],
                args.price if args.price is not None else current["price"],
                args.stock if args.stock is not None else current["stock"],
                image or current.get("image"),
                product_id=args.id,
            )
            print("[+] Product updated successfully!")
        elif args.command == "delete":
            if admin.find_product(args.id) is None:
                print(f"[!] No product with id {args.id}", file=sys.stderr)
                return 2
            admin.delete_product(args.id)
            print("[+] Product deleted successfully!")
        elif args.command == "reset":
            ok, error = admin.api.reset_store()
            if not ok:
                print(f"[!] Reset failed: {error['message'] if error else 'unknown error'}", file=sys.stderr)
                return 1
            print("[+] Inventory reset successfully")
    except AdminError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
