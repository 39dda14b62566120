"""Storefront billing client for the makeup store.

The storefront keeps a bill on the client and mirrors every change to
the inventory straight away: adding an item takes it out of stock,
removing it or resetting the bill puts it back.  Each stock change is
applied locally first and then pushed to the server with
``PUT /products/{id}``.  When the server was unreachable at start‑up
the session works offline and only the local product cache is
updated.

No bill is recorded on the server; printing produces a plain‑text
receipt of the current bill.

Run ``python storefront.py`` for a small interactive console.  It reads
``STORE_API_URL`` and ``STORE_LOCAL_STORAGE`` like
:mod:`makeup_store_client`.
"""

from __future__ import annotations

import logging
import shlex
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from makeup_store_api.app.core.catalog import TAX_RATE
from makeup_store_api.app.core.logging_config import setup_logging
from makeup_store_client import LocalProductCache, MakeupStoreAPI, load_products


logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for actions the storefront refuses."""


class InvalidQuantityError(StorefrontError):
    pass


class EmptyBillError(StorefrontError):
    pass


def format_money(amount: float) -> str:
    return f"Rs. {amount:.2f}"


class BillingSession:
    """Products on offer plus the bill being assembled."""

    def __init__(
        self,
        api: Optional[MakeupStoreAPI] = None,
        cache: Optional[LocalProductCache] = None,
        *,
        tax_rate: float = TAX_RATE,
    ) -> None:
        self.api = api or MakeupStoreAPI()
        self.cache = cache or LocalProductCache()
        self.tax_rate = tax_rate
        self.products: List[Dict[str, Any]] = []
        # Lines are {"id", "name", "price", "quantity"}; one line per product.
        self.bill_items: List[Dict[str, Any]] = []
        self.use_backend = True
        # Message of the most recent failed stock sync, if any.
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def load_products(self) -> List[Dict[str, Any]]:
        self.products, self.use_backend = load_products(self.api, self.cache)
        return self.products

    def find_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        return next((p for p in self.products if p["id"] == product_id), None)

    def search(self, term: str) -> List[Dict[str, Any]]:
        """Products whose name or code contains ``term``, ignoring case."""
        needle = term.strip().lower()
        return [
            p for p in self.products
            if needle in p["name"].lower() or needle in p["code"].lower()
        ]

    def _sync_stock(self, product: Dict[str, Any], failure_message: str) -> bool:
        """Push a product's stock level to the server and refresh the cache.

        Returns ``False`` if the server rejected the update or could not be
        reached.  The local stock level is kept either way.
        """
        synced = True
        if self.use_backend:
            _, error = self.api.update_product(product["id"], {"stock": product["stock"]})
            if error:
                logger.error("%s (product %s: %s)", failure_message, product["id"], error["message"])
                self.last_error = failure_message
                synced = False
        self.cache.save(self.products)
        return synced

    # ------------------------------------------------------------------
    # Bill
    # ------------------------------------------------------------------
    def find_line(self, product_id: int) -> Optional[Dict[str, Any]]:
        return next((item for item in self.bill_items if item["id"] == product_id), None)

    def add_to_bill(self, product_id: int, quantity: int = 1) -> Optional[Dict[str, Any]]:
        """Add ``quantity`` of a product to the bill and take it out of stock.

        The product's ``stock`` already excludes what is on the bill, so
        the requested quantity only has to fit in what is left.  Returns
        the bill line, or ``None`` for an unknown product.
        """
        product = self.find_product(product_id)
        if product is None:
            return None
        if quantity <= 0 or quantity > product["stock"]:
            raise InvalidQuantityError("Invalid quantity! Please enter a valid number.")

        line = self.find_line(product_id)
        if line is None:
            line = {
                "id": product["id"],
                "name": product["name"],
                "price": product["price"],
                "quantity": quantity,
            }
            self.bill_items.append(line)
        else:
            line["quantity"] += quantity

        product["stock"] -= quantity
        self._sync_stock(product, "Could not update stock on server.")
        return line

    def remove_from_bill(self, product_id: int) -> Optional[Dict[str, Any]]:
        """Drop a line from the bill and return its quantity to stock."""
        line = self.find_line(product_id)
        if line is None:
            return None

        product = self.find_product(product_id)
        if product is not None:
            product["stock"] += line["quantity"]
            self._sync_stock(product, "Could not restore stock on server.")

        self.bill_items.remove(line)
        return line

    def reset_bill(self) -> None:
        """Return every line to stock and empty the bill.

        A failed sync is logged and the reset carries on with the
        remaining lines.
        """
        for line in self.bill_items:
            product = self.find_product(line["id"])
            if product is not None:
                product["stock"] += line["quantity"]
                self._sync_stock(product, "Could not restore stock on server.")
        self.bill_items = []

    # ------------------------------------------------------------------
    # Totals and receipt
    # ------------------------------------------------------------------
    @property
    def subtotal(self) -> float:
        return sum(item["price"] * item["quantity"] for item in self.bill_items)

    @property
    def tax(self) -> float:
        return self.subtotal * self.tax_rate

    @property
    def total(self) -> float:
        return self.subtotal + self.tax

    def print_bill(self, now: Optional[datetime] = None) -> str:
        """Render the current bill as a plain-text receipt."""
        if not self.bill_items:
            raise EmptyBillError("No items in the bill to print!")
        now = now or datetime.now()
        lines = ["Makeup Store", now.strftime("%Y-%m-%d %H:%M"), "-" * 40]
        for item in self.bill_items:
            lines.append(item["name"])
            lines.append(
                f"  {item['quantity']} x {format_money(item['price'])}"
                f"{format_money(item['price'] * item['quantity']):>20}"
            )
        lines.append("-" * 40)
        lines.append(f"{'Subtotal':<20}{format_money(self.subtotal):>20}")
        lines.append(f"{f'Tax ({self.tax_rate:.0%})':<20}{format_money(self.tax):>20}")
        lines.append(f"{'Total':<20}{format_money(self.total):>20}")
        return "\n".join(lines)


class StorefrontConsole:
    """Line-oriented front end for a :class:`BillingSession`."""

    def __init__(self, session: BillingSession, out: Callable[[str], None] = print) -> None:
        self.session = session
        self.out = out
        self.handlers: Dict[str, Callable[[List[str]], None]] = {
            "list": self._handle_list,
            "search": self._handle_search,
            "add": self._handle_add,
            "remove": self._handle_remove,
            "reset": self._handle_reset,
            "totals": self._handle_totals,
            "print": self._handle_print,
            "help": self._handle_help,
        }

    def _show_products(self, products: List[Dict[str, Any]]) -> None:
        if not products:
            self.out("No matching products.")
            return
        for p in products:
            availability = "Out of Stock" if p["stock"] == 0 else f"{p['stock']} in stock"
            self.out(f"{p['id']:>3}  {p['code']:<8} {p['name']:<30} {format_money(p['price']):>12}  {availability}")

    def _handle_list(self, args: List[str]) -> None:
        self._show_products(self.session.products)

    def _handle_search(self, args: List[str]) -> None:
        self._show_products(self.session.search(" ".join(args)))

    def _handle_add(self, args: List[str]) -> None:
        if not args:
            self.out("Usage: add <product id> [quantity]")
            return
        product_id = int(args[0])
        quantity = int(args[1]) if len(args) > 1 else 1
        line = self.session.add_to_bill(product_id, quantity)
        if line is None:
            self.out(f"No product with id {product_id}.")
            return
        self.out(f"{line['name']}: {line['quantity']} on bill")
        self._warn_sync()

    def _handle_remove(self, args: List[str]) -> None:
        if not args:
            self.out("Usage: remove <product id>")
            return
        if self.session.remove_from_bill(int(args[0])) is None:
            self.out("That product is not on the bill.")
        self._warn_sync()

    def _handle_reset(self, args: List[str]) -> None:
        self.session.reset_bill()
        self.out("Bill cleared.")
        self._warn_sync()

    def _handle_totals(self, args: List[str]) -> None:
        if not self.session.bill_items:
            self.out("No items added yet")
        for item in self.session.bill_items:
            self.out(f"{item['name']} (Qty: {item['quantity']}) {format_money(item['price'] * item['quantity'])}")
        self.out(f"Subtotal {format_money(self.session.subtotal)}")
        self.out(f"Tax      {format_money(self.session.tax)}")
        self.out(f"Total    {format_money(self.session.total)}")

    def _handle_print(self, args: List[str]) -> None:
        self.out(self.session.print_bill())

    def _handle_help(self, args: List[str]) -> None:
        self.out("Commands: " + ", ".join(sorted(self.handlers)) + ", quit")

    def _warn_sync(self) -> None:
        if self.session.last_error:
            self.out(self.session.last_error)
            self.session.last_error = None

    def dispatch(self, line: str) -> bool:
        """Run one command line.  Returns ``False`` when the user quits."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self.out(f"Invalid command: {exc}.")
            return True
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]
        if command in {"quit", "exit"}:
            return False
        handler = self.handlers.get(command)
        if handler is None:
            self.out(f"Unknown command '{command}'. Type 'help' for a list.")
            return True
        try:
            handler(args)
        except StorefrontError as exc:
            self.out(str(exc))
        except ValueError:
            self.out("Product ids and quantities must be whole numbers.")
        return True

    def run(self) -> None:
        self.session.load_products()
        if not self.session.use_backend:
            self.out("Working offline - stock changes are saved locally.")
        self._handle_list([])
        try:
            while self.dispatch(input("pos> ")):
                pass
        except (EOFError, KeyboardInterrupt):
            self.out("")
        if self.session.bill_items:
            logger.info("Leaving with %d line(s) still on the bill", len(self.session.bill_items))


def main() -> None:
    setup_logging("WARNING")
    StorefrontConsole(BillingSession()).run()


if __name__ == "__main__":
    main()
