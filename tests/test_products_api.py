"""
Tests for the product routes.

Covers the response envelope, partial updates, id allocation, the
absolute ``update-stock`` route and the error shapes returned for
unknown products and malformed bodies.
"""

import json

from makeup_store_api.app.core.catalog import PLACEHOLDER_IMAGE


def test_list_products_returns_default_catalogue(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "message" not in body
    assert [p["code"] for p in body["data"]] == ["FP-001", "LS-002", "EL-003"]
    assert [p["stock"] for p in body["data"]] == [50, 120, 0]


def test_get_product(client):
    response = client.get("/api/products/2")

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Matte Velvet Lipstick"


def test_get_unknown_product_returns_404_envelope(client):
    response = client.get("/api/products/99")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Product not found"}


def test_create_product_assigns_next_id_and_placeholder_image(client, data_file):
    response = client.post(
        "/api/products",
        json={"name": "Silk Finish Foundation", "code": "FD-004", "price": "6500.5", "stock": 30},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product added successfully"
    product = body["data"]
    assert product["id"] == 4
    assert product["price"] == 6500.5
    assert product["stock"] == 30
    assert product["image"] == PLACEHOLDER_IMAGE

    on_disk = json.loads(data_file.read_text(encoding="utf-8"))
    assert on_disk["products"][-1]["code"] == "FD-004"


def test_create_product_keeps_supplied_image(client):
    image = "data:image/png;base64,AAAA"
    response = client.post(
        "/api/products",
        json={"name": "Rose Blush", "code": "BL-005", "price": 3000, "stock": 5, "image": image},
    )

    assert response.json()["data"]["image"] == image


def test_create_product_requires_all_fields(client):
    response = client.post("/api/products", json={"name": "Rose Blush", "code": "BL-005", "price": 3000})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Missing required fields"}


def test_create_product_rejects_empty_name(client):
    response = client.post("/api/products", json={"name": "", "code": "BL-005", "price": 3000, "stock": 1})

    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields"


def test_create_product_accepts_zero_price_and_stock(client):
    response = client.post("/api/products", json={"name": "Sample", "code": "SM-000", "price": 0, "stock": 0})

    assert response.status_code == 200
    assert response.json()["data"]["stock"] == 0


def test_create_product_with_non_numeric_stock_is_rejected(client):
    response = client.post(
        "/api/products",
        json={"name": "Rose Blush", "code": "BL-005", "price": 3000, "stock": "lots"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "stock" in body["message"]


def test_new_id_follows_highest_remaining_id(client):
    client.delete("/api/products/3")

    response = client.post("/api/products", json={"name": "Kohl", "code": "EL-009", "price": 100, "stock": 1})

    assert response.json()["data"]["id"] == 3


def test_update_product_is_partial(client):
    response = client.put("/api/products/1", json={"price": 7500})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product updated successfully"
    assert body["data"]["price"] == 7500.0
    assert body["data"]["name"] == "Radiant Glow Face Powder"
    assert body["data"]["stock"] == 50


def test_update_unknown_product_returns_404(client):
    response = client.put("/api/products/42", json={"stock": 1})

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_delete_product_returns_removed_record(client):
    response = client.delete("/api/products/2")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product deleted successfully"
    assert body["data"]["code"] == "LS-002"
    assert client.get("/api/products/2").status_code == 404
    assert len(client.get("/api/products").json()["data"]) == 2


def test_delete_unknown_product_returns_404(client):
    assert client.delete("/api/products/42").status_code == 404


def test_update_stock_sets_absolute_level(client, store):
    response = client.post("/api/products/update-stock", json={"productId": 1, "quantity": 7})

    assert response.status_code == 200
    assert response.json()["message"] == "Stock updated successfully"
    assert response.json()["data"]["stock"] == 7
    assert store.find_product(1)["stock"] == 7


def test_update_stock_unknown_product(client):
    response = client.post("/api/products/update-stock", json={"productId": 99, "quantity": 7})

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_reset_restores_defaults(client):
    client.delete("/api/products/1")
    client.post("/api/bills", json={"items": [{"id": 2, "quantity": 1}]})

    response = client.post("/api/reset")

    assert response.json() == {"success": True, "message": "Inventory reset successfully"}
    products = client.get("/api/products").json()["data"]
    assert [p["stock"] for p in products] == [50, 120, 0]
    assert client.get("/api/bills").json()["data"] == []


def test_health(client):
    assert client.get("/api/health").json() == {"success": True, "status": "ok"}


def test_index_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "POST /api/products/update-stock" in response.text


def test_oversized_body_is_rejected(client, monkeypatch):
    from makeup_store_api.app.core.config import settings

    monkeypatch.setattr(settings, "max_body_bytes", 64)
    response = client.post(
        "/api/products",
        json={"name": "Big", "code": "BG-1", "price": 1, "stock": 1, "image": "x" * 200},
    )

    assert response.status_code == 413
    assert response.json()["success"] is False
