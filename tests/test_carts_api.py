"""
Component tests for the /cart endpoints.

Requests go through the real routers, CartService and SQL store; Redis is
the in-memory double from conftest.
"""
import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from shopcart.repos.cart_repo import CartRepo


class TestCreateCartEndpoint:
    def test_created_then_already_exists(self, client, user_headers, principal):
        # Act
        first = client.post("/cart", headers=user_headers)
        second = client.post("/cart", headers=user_headers)

        # Assert
        assert first.status_code == 201
        assert first.json()["message"] == "Cart created"
        assert first.json()["data"]["user_id"] == str(principal.user_id)

        assert second.status_code == 200
        assert second.json()["message"] == "Cart already exists"
        assert second.json()["data"]["id"] == first.json()["data"]["id"]

    def test_missing_identity_is_401(self, client):
        response = client.post("/cart")

        assert response.status_code == 401
        assert response.json() == {"status": 401, "message": "Unauthorized", "error": None}

    def test_malformed_identity_is_400(self, client):
        response = client.post("/cart", headers={"X-User-Id": "not-a-uuid"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user id"

    def test_store_failure_is_500(self, client, user_headers):
        failure = OperationalError("SELECT", {}, Exception("db down"))

        with patch.object(CartRepo, "get_cart_by_user", side_effect=failure):
            response = client.post("/cart", headers=user_headers)

        assert response.status_code == 500
        assert response.json() == {"status": 500, "message": "Internal server error", "error": None}


class TestAddItemEndpoint:
    def test_add_provisions_cart(self, client, user_headers, make_product):
        product = make_product(stock=5)

        response = client.post(
            "/cart/item",
            json={"product_id": str(product.id), "quantity": 3},
            headers=user_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["data"]["product_id"] == str(product.id)
        assert body["data"]["quantity"] == 3

    def test_out_of_stock_is_400_with_distinct_message(self, client, user_headers, make_product):
        product = make_product(stock=5)
        payload = {"product_id": str(product.id), "quantity": 3}
        client.post("/cart/item", json=payload, headers=user_headers)

        response = client.post("/cart/item", json=payload, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Product out of stock"
        assert response.json()["error"] == {"requested": 6, "available": 5}

    def test_unknown_product_is_400(self, client, user_headers):
        response = client.post(
            "/cart/item",
            json={"product_id": str(uuid.uuid4()), "quantity": 1},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Product does not exist"

    @pytest.mark.parametrize("payload", [
        {"product_id": "abc", "quantity": 1},
        {"quantity": 1},
        {"product_id": str(uuid.uuid4()), "quantity": 0},
        {"product_id": str(uuid.uuid4()), "quantity": -2},
    ])
    def test_invalid_body_is_400(self, client, user_headers, payload):
        response = client.post("/cart/item", json=payload, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request body"

    def test_missing_identity_is_401(self, client, make_product):
        product = make_product()

        response = client.post("/cart/item", json={"product_id": str(product.id), "quantity": 1})

        assert response.status_code == 401


class TestListItemsEndpoint:
    def test_store_then_cache(self, client, user_headers, make_product):
        product = make_product(stock=5)
        client.post("/cart/item", json={"product_id": str(product.id), "quantity": 2}, headers=user_headers)

        first = client.get("/cart/items", headers=user_headers)
        second = client.get("/cart/items", headers=user_headers)

        assert first.status_code == 200
        assert first.json()["message"] == "data fetched from store"
        assert second.json()["message"] == "data fetched from cache"
        assert second.json()["data"] == first.json()["data"]
        assert second.json()["data"][0]["quantity"] == 2

    def test_cache_down_still_serves(self, client, user_headers, make_product, fake_redis):
        product = make_product(stock=5)
        client.post("/cart/item", json={"product_id": str(product.id), "quantity": 1}, headers=user_headers)
        fake_redis.down = True

        response = client.get("/cart/items", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "data fetched from store (cache unavailable)"
        assert len(response.json()["data"]) == 1

    def test_corrupted_cache_is_500(self, client, user_headers, fake_redis):
        cart_id = client.post("/cart", headers=user_headers).json()["data"]["id"]
        fake_redis.data[f"cart:{cart_id}"] = "{broken"

        response = client.get("/cart/items", headers=user_headers)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to parse cache"

    def test_without_cart_is_500(self, client, user_headers):
        response = client.get("/cart/items", headers=user_headers)

        assert response.status_code == 500
        assert response.json()["message"] == "Cart does not exist"

    def test_add_after_read_refreshes(self, client, user_headers, make_product):
        product = make_product(stock=5)
        payload = {"product_id": str(product.id), "quantity": 1}
        client.post("/cart/item", json=payload, headers=user_headers)
        client.get("/cart/items", headers=user_headers)

        client.post("/cart/item", json=payload, headers=user_headers)
        response = client.get("/cart/items", headers=user_headers)

        assert response.json()["message"] == "data fetched from store"
        assert response.json()["data"][0]["quantity"] == 2


class TestRemoveItemEndpoint:
    def test_remove_existing_item(self, client, user_headers, make_product):
        product = make_product(stock=5)
        client.post("/cart/item", json={"product_id": str(product.id), "quantity": 1}, headers=user_headers)

        response = client.delete(f"/cart/item/{product.id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Cart item removed"
        assert client.get("/cart/items", headers=user_headers).json()["data"] == []

    def test_remove_missing_item_is_success(self, client, user_headers):
        client.post("/cart", headers=user_headers)

        response = client.delete(f"/cart/item/{uuid.uuid4()}", headers=user_headers)

        assert response.status_code == 200

    def test_invalid_product_id_is_400(self, client, user_headers):
        client.post("/cart", headers=user_headers)

        response = client.delete("/cart/item/not-a-uuid", headers=user_headers)

        assert response.status_code == 400


class TestAdminEndpoints:
    def test_requires_admin_role(self, client, user_headers, principal):
        response = client.get(f"/cart/{principal.user_id}", headers=user_headers)

        assert response.status_code == 403

    def test_get_user_cart(self, client, user_headers, admin_headers, principal, make_product):
        product = make_product(stock=5)
        client.post("/cart/item", json={"product_id": str(product.id), "quantity": 2}, headers=user_headers)

        response = client.get(f"/cart/{principal.user_id}", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user_id"] == str(principal.user_id)
        assert [i["quantity"] for i in data["items"]] == [2]

    def test_get_unknown_cart_is_404(self, client, admin_headers):
        response = client.get(f"/cart/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404

    def test_delete_user_cart(self, client, user_headers, admin_headers, principal, fake_redis):
        cart_id = client.post("/cart", headers=user_headers).json()["data"]["id"]
        client.get("/cart/items", headers=user_headers)
        assert f"cart:{cart_id}" in fake_redis.data

        response = client.delete(f"/cart/{principal.user_id}", headers=admin_headers)

        assert response.status_code == 200
        assert f"cart:{cart_id}" not in fake_redis.data
        assert client.get(f"/cart/{principal.user_id}", headers=admin_headers).status_code == 404

        # next cart-touching request provisions it again
        assert client.post("/cart", headers=user_headers).status_code == 201
