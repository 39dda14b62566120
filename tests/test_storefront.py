"""
Tests for the storefront billing session.

The online tests run against the in-process API so that every local
stock change can be checked on the server as well.
"""

from datetime import datetime

import pytest

from storefront import (
    BillingSession,
    EmptyBillError,
    InvalidQuantityError,
    StorefrontConsole,
    format_money,
)
from tests.conftest import OfflineSession


def _server_stock(api, product_id):
    return api.get_product(product_id)[0]["stock"]


@pytest.fixture
def session(api, cache):
    billing = BillingSession(api, cache)
    billing.load_products()
    return billing


@pytest.fixture
def offline_session(offline_api, cache):
    billing = BillingSession(offline_api, cache)
    billing.load_products()
    return billing


def test_add_to_bill_takes_stock_locally_and_on_server(session, api):
    line = session.add_to_bill(1, 2)

    assert line == {"id": 1, "name": "Radiant Glow Face Powder", "price": 7000.0, "quantity": 2}
    assert session.find_product(1)["stock"] == 48
    assert _server_stock(api, 1) == 48
    assert session.cache.load()[0]["stock"] == 48


def test_adding_again_increases_the_same_line(session, api):
    session.add_to_bill(2, 1)
    session.add_to_bill(2, 4)

    assert len(session.bill_items) == 1
    assert session.bill_items[0]["quantity"] == 5
    assert _server_stock(api, 2) == 115


def test_remaining_stock_can_be_added_in_steps(session):
    session.add_to_bill(1, 10)
    session.add_to_bill(1, 40)

    assert session.bill_items[0]["quantity"] == 50
    assert session.find_product(1)["stock"] == 0
    with pytest.raises(InvalidQuantityError):
        session.add_to_bill(1, 1)


@pytest.mark.parametrize("quantity", [0, -1, 51])
def test_invalid_quantity_is_refused(session, quantity):
    with pytest.raises(InvalidQuantityError, match="Invalid quantity"):
        session.add_to_bill(1, quantity)

    assert session.bill_items == []
    assert session.find_product(1)["stock"] == 50


def test_out_of_stock_product_cannot_be_added(session):
    with pytest.raises(InvalidQuantityError):
        session.add_to_bill(3, 1)


def test_unknown_product_is_ignored(session):
    assert session.add_to_bill(99, 1) is None
    assert session.bill_items == []


def test_remove_from_bill_restores_stock(session, api):
    session.add_to_bill(1, 3)

    removed = session.remove_from_bill(1)

    assert removed["quantity"] == 3
    assert session.bill_items == []
    assert session.find_product(1)["stock"] == 50
    assert _server_stock(api, 1) == 50


def test_remove_unknown_line_is_ignored(session):
    assert session.remove_from_bill(1) is None


def test_reset_bill_restores_every_line(session, api):
    session.add_to_bill(1, 5)
    session.add_to_bill(2, 20)

    session.reset_bill()

    assert session.bill_items == []
    assert _server_stock(api, 1) == 50
    assert _server_stock(api, 2) == 120


def test_totals(session):
    session.add_to_bill(1, 2)
    session.add_to_bill(2, 1)

    assert session.subtotal == pytest.approx(19200.0)
    assert session.tax == pytest.approx(1920.0)
    assert session.total == pytest.approx(21120.0)


def test_empty_bill_totals_are_zero(session):
    assert (session.subtotal, session.tax, session.total) == (0, 0, 0)


def test_search_matches_name_or_code(session):
    assert [p["id"] for p in session.search("LIP")] == [2]
    assert [p["id"] for p in session.search("el-0")] == [3]
    assert len(session.search("")) == 3
    assert session.search("mascara") == []


def test_print_bill(session):
    session.add_to_bill(1, 2)

    receipt = session.print_bill(now=datetime(2024, 5, 1, 9, 30))

    assert "2024-05-01 09:30" in receipt
    assert "2 x Rs. 7000.00" in receipt
    assert "Rs. 15400.00" in receipt
    assert "Tax (10%)" in receipt


def test_print_empty_bill_is_refused(session):
    with pytest.raises(EmptyBillError, match="No items in the bill to print!"):
        session.print_bill()


def test_format_money():
    assert format_money(4200) == "Rs. 4200.00"


def test_offline_session_uses_defaults_and_local_cache(offline_session):
    assert offline_session.use_backend is False
    assert len(offline_session.products) == 3

    offline_session.add_to_bill(2, 20)

    assert offline_session.cache.load()[1]["stock"] == 100
    # Only the initial product fetch went to the network.
    assert len(offline_session.api.session.calls) == 1


def test_offline_session_resumes_from_cache(offline_session, offline_api, cache):
    offline_session.add_to_bill(1, 5)

    resumed = BillingSession(offline_api, cache)
    resumed.load_products()

    assert resumed.find_product(1)["stock"] == 45


def test_failed_sync_keeps_local_change(session):
    session.api.session = OfflineSession()

    session.add_to_bill(1, 2)

    assert session.find_product(1)["stock"] == 48
    assert session.last_error == "Could not update stock on server."
    assert session.cache.load()[0]["stock"] == 48


def test_failed_restore_does_not_stop_reset(session):
    session.add_to_bill(1, 1)
    session.add_to_bill(2, 1)
    session.api.session = OfflineSession()

    session.reset_bill()

    assert session.bill_items == []
    assert session.last_error == "Could not restore stock on server."
    assert len(session.api.session.calls) == 2


def test_console_commands(session):
    output = []
    console = StorefrontConsole(session, out=output.append)

    assert console.dispatch("add 1 2") is True
    assert console.dispatch("totals") is True
    assert console.dispatch("add 3") is True
    assert console.dispatch("add one") is True
    assert console.dispatch("print") is True
    assert console.dispatch("quit") is False

    assert "Radiant Glow Face Powder: 2 on bill" in output
    assert "Total    Rs. 15400.00" in output
    assert "Invalid quantity! Please enter a valid number." in output
    assert "Product ids and quantities must be whole numbers." in output
    assert any("Subtotal" in line for line in output)


def test_console_search_and_unknown_command(session):
    output = []
    console = StorefrontConsole(session, out=output.append)

    console.dispatch("search velvet")
    console.dispatch("dance")

    assert len([line for line in output if "LS-002" in line]) == 1
    assert output[-1] == "Unknown command 'dance'. Type 'help' for a list."


def test_console_survives_unbalanced_quote(session):
    output = []
    console = StorefrontConsole(session, out=output.append)

    assert console.dispatch('search "velvet') is True
    assert output == ["Invalid command: No closing quotation."]

    assert console.dispatch("search velvet") is True
    assert any("LS-002" in line for line in output)
