"""
Tests for the JSON routes, using the Flask test client.
"""

import io
import struct

import pytest

from app import create_app
from modules.image_defaults import get_default_image
from services.cart_store import CartStore


PRINT_BODY = {
    "type": "print",
    "name": "Print A4",
    "description": "Matte photo paper",
    "price": 350,
    "quantity": 1,
    "options": {"material": "matte", "size": "A4"},
}

CUSTOMER_BODY = {"name": "Ann", "email": "a@b.c", "phone": "123"}


@pytest.fixture
def png_upload():
    png = b"\x89PNG\r\n\x1a\n\x00\x00\x00\x0dIHDR" + struct.pack(">II", 64, 32) + b"\x08\x06\x00\x00\x00"
    return {"image": (io.BytesIO(png), "photo.png")}


def place_order(client):
    client.post("/api/cart/items", json=PRINT_BODY)
    return client.post("/api/checkout", json=CUSTOMER_BODY).get_json()["orderId"]


class TestStorefront:

    def test_index(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.get_json()
        assert data["name"] == "PrintStudio"
        assert data["language"] == "ru"

    def test_set_language(self, client):
        response = client.get("/set_language/en")

        assert response.status_code == 200
        assert response.get_json()["message"] == "Language changed"
        assert client.get("/").get_json()["language"] == "en"

    def test_unsupported_language(self, client):
        assert client.get("/set_language/de").status_code == 400

    def test_unknown_route_returns_json(self, client):
        response = client.get("/no-such-page")

        assert response.status_code == 404
        assert response.get_json()["error"] == "not_found"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["checks"] == {"cart_store": "ok", "image_service": "ok"}

    def test_health_degraded_on_unreadable_snapshot(self, client, storage):
        storage.put_raw("cart-storage", "{broken")

        response = client.get("/health")

        assert response.status_code == 503
        assert response.get_json()["checks"]["cart_store"] == "storage_unreadable"


class TestCartRoutes:

    def test_empty_cart(self, client):
        data = client.get("/api/cart").get_json()

        assert data == {"items": [], "totalItems": 0, "totalPrice": 0, "isOpen": False}

    def test_add_item(self, client):
        response = client.post("/api/cart/items", json=PRINT_BODY)

        assert response.status_code == 201
        data = response.get_json()
        assert data["totalItems"] == 1
        assert data["totalPrice"] == 350
        assert data["items"][0]["id"] == data["itemId"]
        assert data["message"] == "Товар добавлен в корзину"

    def test_add_same_item_merges(self, client):
        first = client.post("/api/cart/items", json=PRINT_BODY).get_json()
        second = client.post("/api/cart/items", json=dict(PRINT_BODY, quantity=2)).get_json()

        assert first["itemId"] == second["itemId"]
        assert len(second["items"]) == 1
        assert second["items"][0]["quantity"] == 3

    @pytest.mark.parametrize("body", [
        dict(PRINT_BODY, type="poster"),
        dict(PRINT_BODY, price="abc"),
        dict(PRINT_BODY, name=""),
        dict(PRINT_BODY, quantity=0),
        dict(PRINT_BODY, price=-1),
        dict(PRINT_BODY, price="Infinity"),
        dict(PRINT_BODY, quantity=2.5),
        dict(PRINT_BODY, quantity="2.7"),
    ])
    def test_add_invalid_item(self, client, body):
        response = client.post("/api/cart/items", json=body)

        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_item"

    def test_add_nan_price(self, client):
        body = '{"type": "print", "name": "Print A4", "price": NaN, "quantity": 1}'

        response = client.post("/api/cart/items", data=body, content_type="application/json")

        assert response.status_code == 400
        assert client.get("/api/cart").get_json()["totalPrice"] == 0

    def test_add_item_without_image_gets_default(self, client):
        data = client.post("/api/cart/items", json=PRINT_BODY).get_json()

        assert data["items"][0]["imageUrl"] == get_default_image("print")

    def test_add_cartridge(self, client):
        response = client.post("/api/cart/cartridges", json={"sku": "hp-123-black", "quantity": 2})

        assert response.status_code == 201
        assert response.get_json()["totalPrice"] == 3780

    def test_add_unknown_cartridge(self, client):
        assert client.post("/api/cart/cartridges", json={"sku": "nope"}).status_code == 404

    def test_update_quantity(self, client):
        item_id = client.post("/api/cart/items", json=PRINT_BODY).get_json()["itemId"]

        data = client.patch(f"/api/cart/items/{item_id}", json={"quantity": 4}).get_json()

        assert data["totalItems"] == 4
        assert data["totalPrice"] == 1400

    def test_update_quantity_zero_removes(self, client):
        item_id = client.post("/api/cart/items", json=PRINT_BODY).get_json()["itemId"]

        data = client.put(f"/api/cart/items/{item_id}", json={"quantity": 0}).get_json()

        assert data["items"] == []

    def test_update_quantity_not_a_number(self, client):
        assert client.patch("/api/cart/items/x", json={"quantity": "many"}).status_code == 400

    def test_update_quantity_fraction_rejected(self, client):
        item_id = client.post("/api/cart/items", json=PRINT_BODY).get_json()["itemId"]

        response = client.patch(f"/api/cart/items/{item_id}", json={"quantity": 2.7})

        assert response.status_code == 400
        assert client.get("/api/cart").get_json()["totalItems"] == 1

    def test_update_quantity_whole_float_accepted(self, client):
        item_id = client.post("/api/cart/items", json=PRINT_BODY).get_json()["itemId"]

        data = client.patch(f"/api/cart/items/{item_id}", json={"quantity": 3.0}).get_json()

        assert data["totalItems"] == 3

    def test_add_cartridge_fraction_rejected(self, client):
        response = client.post("/api/cart/cartridges", json={"sku": "hp-123-black", "quantity": 1.5})

        assert response.status_code == 400

    def test_remove_item(self, client):
        item_id = client.post("/api/cart/items", json=PRINT_BODY).get_json()["itemId"]

        assert client.delete(f"/api/cart/items/{item_id}").get_json()["items"] == []

    def test_remove_unknown_item_is_ignored(self, client):
        client.post("/api/cart/items", json=PRINT_BODY)

        response = client.delete("/api/cart/items/unknown")

        assert response.status_code == 200
        assert response.get_json()["totalItems"] == 1

    def test_clear_cart(self, client):
        client.post("/api/cart/items", json=PRINT_BODY)

        data = client.delete("/api/cart").get_json()

        assert data["items"] == []
        assert data["message"] == "Корзина очищена"

    def test_toggle(self, client):
        assert client.post("/api/cart/toggle").get_json() == {"isOpen": True}
        assert client.post("/api/cart/toggle").get_json() == {"isOpen": False}


class TestCheckout:

    def test_checkout_creates_order_and_empties_cart(self, client):
        client.post("/api/cart/items", json=dict(PRINT_BODY, quantity=2))

        response = client.post("/api/checkout", json=dict(CUSTOMER_BODY, address="Moscow"))

        assert response.status_code == 201
        data = response.get_json()
        assert data["orderId"].startswith("ORD-")
        assert data["orderId"] in data["message"]
        assert data["order"]["total"] == 700
        assert data["order"]["status"] == "pending"
        assert data["order"]["customerInfo"]["address"] == "Moscow"
        assert client.get("/api/cart").get_json()["items"] == []

    def test_checkout_accepts_form_data(self, client):
        client.post("/api/cart/items", json=PRINT_BODY)

        response = client.post("/api/checkout", data=CUSTOMER_BODY)

        assert response.status_code == 201

    def test_missing_fields(self, client):
        client.post("/api/cart/items", json=PRINT_BODY)

        response = client.post("/api/checkout", json={"name": "Ann"})

        assert response.status_code == 400
        data = response.get_json()
        assert data["details"]["missing_fields"] == ["email", "phone"]
        assert data["message"] == "Пожалуйста, заполните все обязательные поля"
        assert client.get("/api/cart").get_json()["totalItems"] == 1

    def test_messages_follow_language(self, client):
        client.get("/set_language/en")
        client.post("/api/cart/items", json=PRINT_BODY)

        data = client.post("/api/checkout", json=CUSTOMER_BODY).get_json()

        assert data["message"] == f"Order placed! Order number: {data['orderId']}"


class TestOrderRoutes:

    def test_list_orders(self, client):
        order_id = place_order(client)

        orders = client.get("/api/orders").get_json()["orders"]

        assert [order["id"] for order in orders] == [order_id]

    def test_get_order(self, client):
        order_id = place_order(client)

        data = client.get(f"/api/orders/{order_id}").get_json()

        assert data["order"]["items"][0]["name"] == "Print A4"

    def test_get_unknown_order(self, client):
        response = client.get("/api/orders/ORD-NOPE")

        assert response.status_code == 404
        assert response.get_json()["error"] == "OrderNotFoundError"

    def test_update_status(self, client):
        order_id = place_order(client)

        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "processing"})

        assert response.status_code == 200
        assert response.get_json()["order"]["status"] == "processing"

    def test_permissive_by_default(self, client):
        order_id = place_order(client)

        response = client.post(f"/api/orders/{order_id}/status", json={"status": "completed"})

        assert response.status_code == 200

    def test_invalid_status(self, client):
        order_id = place_order(client)

        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "shipped"})

        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_status"

    def test_unknown_order_status(self, client):
        response = client.patch("/api/orders/ORD-NOPE/status", json={"status": "ready"})

        assert response.status_code == 404

    def test_strict_transitions(self, app, client, storage):
        app.config["CART_STORE"] = CartStore(storage, enforce_transitions=True)
        order_id = place_order(client)

        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "completed"})

        assert response.status_code == 409
        assert response.get_json()["details"] == {
            "order_id": order_id, "current": "pending", "requested": "completed",
        }


class TestCalculatorRoutes:

    def test_options(self, client):
        data = client.get("/api/calculator/options").get_json()

        assert len(data["materials"]) == 4
        assert len(data["sizes"]) == 5

    def test_quote(self, client):
        response = client.post("/api/calculator/quote", json={"material": "glossy", "size": "A3", "quantity": 2})

        assert response.get_json()["quote"]["total"] == 1520

    def test_quote_invalid_size(self, client):
        response = client.post("/api/calculator/quote", json={"material": "matte", "size": "Z9"})

        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "size"

    def test_quote_quantity_not_a_number(self, client):
        response = client.post("/api/calculator/quote", json={"material": "matte", "size": "A4", "quantity": "x"})

        assert response.status_code == 400

    def test_quote_quantity_fraction_rejected(self, client):
        response = client.post("/api/calculator/quote", json={"material": "matte", "size": "A4", "quantity": 2.5})

        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "quantity"

    def test_add_to_cart(self, client):
        response = client.post("/api/calculator/add-to-cart", json={"material": "matte", "size": "A4"})

        assert response.status_code == 201
        data = response.get_json()
        assert data["items"][0]["options"] == {"material": "matte", "size": "A4"}
        assert data["totalPrice"] == 350


class TestAIRoutes:

    def test_generate(self, client):
        response = client.post("/api/ai/generate", json={"prompt": "Sunset"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["success"] is True
        assert data["imageUrl"].startswith("data:image/svg+xml;base64,")

    def test_generate_empty_prompt(self, client):
        assert client.post("/api/ai/generate", json={"prompt": " "}).status_code == 400

    def test_generate_failure(self, app, client):
        app.config["IMAGE_SERVICE"].success_rate = 0.0

        response = client.post("/api/ai/generate", json={"prompt": "Sunset"})

        assert response.status_code == 502
        assert response.get_json()["error"] == "Service temporarily unavailable"

    def test_enhance(self, client, png_upload):
        response = client.post("/api/ai/enhance", data=png_upload, content_type="multipart/form-data")

        assert response.status_code == 200
        assert response.get_json()["success"] is True

    def test_remove_background(self, client, png_upload):
        response = client.post("/api/ai/remove-background", data=png_upload, content_type="multipart/form-data")

        assert response.status_code == 200

    def test_enhance_without_upload(self, client):
        assert client.post("/api/ai/enhance").status_code == 400

    def test_enhance_unsupported_upload(self, client):
        upload = {"image": (io.BytesIO(b"not an image"), "notes.txt")}

        response = client.post("/api/ai/enhance", data=upload, content_type="multipart/form-data")

        assert response.status_code == 502
        assert response.get_json()["success"] is False

    def test_upload_too_large(self, app, client, png_upload):
        app.config["MAX_CONTENT_LENGTH"] = 16

        response = client.post("/api/ai/enhance", data=png_upload, content_type="multipart/form-data")

        assert response.status_code == 413
        assert response.get_json()["error"] == "file_too_large"

    def test_add_to_cart(self, client):
        image_url = client.post("/api/ai/generate", json={"prompt": "Sunset"}).get_json()["imageUrl"]

        response = client.post(
            "/api/ai/add-to-cart",
            json={"operation": "generate", "imageUrl": image_url, "prompt": "Sunset"},
        )

        assert response.status_code == 201
        item = response.get_json()["items"][0]
        assert item["type"] == "service"
        assert item["imageUrl"] == image_url
        assert item["price"] == 300

    def test_add_to_cart_unknown_operation(self, client):
        response = client.post("/api/ai/add-to-cart", json={"operation": "upscale", "imageUrl": "data:,"})

        assert response.status_code == 400

    def test_add_to_cart_without_image(self, client):
        assert client.post("/api/ai/add-to-cart", json={"operation": "generate"}).status_code == 400


class TestApplication:

    def test_state_survives_restart(self, client, storage):
        client.post("/api/cart/items", json=PRINT_BODY)
        order_id = place_order(client)
        client.post("/api/cart/items", json=PRINT_BODY)

        restarted = create_app("config.TestingConfig", storage=storage).test_client()

        assert restarted.get("/api/cart").get_json()["totalItems"] == 1
        assert restarted.get(f"/api/orders/{order_id}").status_code == 200

    def test_unexpected_error_returns_json_500(self, app, client, monkeypatch):
        def explode():
            raise RuntimeError("boom")

        monkeypatch.setattr(app.config["CART_STORE"], "get_total_items", explode)

        response = client.get("/api/cart")

        assert response.status_code == 500
        assert response.get_json()["error"] == "server_error"
