"""
Tests for the Products service HTTP API.
"""
from decimal import Decimal

import pytest

WIDGET = {
    "name": "Widget",
    "sku": "WID-1",
    "description": "A blue widget",
    "price": "19.99",
    "category": "tools",
    "imageUrl": "https://img.example.com/wid-1.png",
}


def test_create_product(products_client):
    response = products_client.post("/api/products", json=WIDGET)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["sku"] == "WID-1"
    assert body["imageUrl"] == WIDGET["imageUrl"]
    assert Decimal(str(body["price"])) == Decimal("19.99")


def test_create_accepts_snake_case_fields(products_client):
    payload = dict(WIDGET)
    payload["image_url"] = payload.pop("imageUrl")

    response = products_client.post("/api/products", json=payload)

    assert response.status_code == 201
    assert response.json()["imageUrl"] == WIDGET["imageUrl"]


def test_get_product_by_sku(products_client):
    created = products_client.post("/api/products", json=WIDGET).json()

    response = products_client.get("/api/products/WID-1")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]
    assert products_client.get("/api/products/NOPE").status_code == 404


def test_duplicate_sku_conflicts(products_client):
    products_client.post("/api/products", json=WIDGET)

    response = products_client.post("/api/products", json=dict(WIDGET, name="Widget copy"))

    assert response.status_code == 409
    assert response.json()["type"] == "about:blank#sku-already-exists"
    assert len(products_client.get("/api/products").json()) == 1


@pytest.mark.parametrize(
    "change,field",
    [
        ({"price": None}, "price"),
        ({"price": "-1"}, "price"),
        ({"price": "1e20"}, "price"),
        ({"sku": ""}, "sku"),
        ({"name": None}, "name"),
    ],
)
def test_invalid_product_is_rejected(products_client, change, field):
    response = products_client.post("/api/products", json=dict(WIDGET, **change))

    assert response.status_code == 400
    assert field in response.json()["errors"]


def test_list_products(products_client):
    products_client.post("/api/products", json=WIDGET)
    products_client.post("/api/products", json=dict(WIDGET, sku="WID-2", name="Gadget"))

    names = [product["name"] for product in products_client.get("/api/products").json()]

    assert names == ["Widget", "Gadget"]


def test_delete_product(products_client):
    created = products_client.post("/api/products", json=WIDGET).json()

    assert products_client.delete(f"/api/products/{created['id']}").status_code == 204
    assert products_client.get("/api/products/WID-1").status_code == 404


def test_delete_missing_product_is_not_found(products_client):
    assert products_client.delete("/api/products/9999").status_code == 404
    assert products_client.delete(f"/api/products/{2**64}").status_code == 400
