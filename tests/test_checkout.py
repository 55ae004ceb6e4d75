"""Checkout validation and /api/checkout."""

import pytest

from storefront.checkout import validate_customer
from storefront.errors import ValidationError
from storefront.schemas import CheckoutRequest

CUSTOMER = {"name": "John Doe", "email": "john.doe@example.com"}


def _add(client, product_id, quantity):
    response = client.post("/api/cart", json={"productId": product_id, "quantity": quantity})
    assert response.status_code == 201, response.text


class TestValidateCustomer:
    @pytest.mark.parametrize(
        "fields, message",
        [
            ({"email": "a@b.co"}, "Name and email are required"),
            ({"name": "A"}, "Name and email are required"),
            ({"name": "", "email": "a@b.co"}, "Name and email are required"),
            ({"name": "A", "email": "bad-email"}, "Invalid email format"),
            ({"name": "A", "email": "a b@c.de"}, "Invalid email format"),
            ({"name": "A", "email": "a@b.co\n"}, "Invalid email format"),
            ({"name": "A", "email": "\na@b.co"}, "Invalid email format"),
            ({"name": "A", "email": "a@b.co", "phone": "12345"}, "Phone number must be 10 digits"),
            ({"name": "A", "email": "a@b.co", "zip": "1234"}, "ZIP code must be 6 digits"),
            ({"name": "A", "email": "a@b.co", "phone": "\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669\u0660"}, "Phone number must be 10 digits"),
            ({"name": "A", "email": "a@b.co", "zip": "\u0665\u0666\u0660\u0660\u0660\u0661"}, "ZIP code must be 6 digits"),
        ],
    )
    def test_rejects(self, fields, message):
        with pytest.raises(ValidationError) as exc:
            validate_customer(CheckoutRequest(**fields))
        assert exc.value.message == message

    def test_first_violation_wins(self):
        details = CheckoutRequest(name="A", email="nope", phone="1", zip="1")

        with pytest.raises(ValidationError, match="Invalid email format"):
            validate_customer(details)

    @pytest.mark.parametrize(
        "extra",
        [
            {},
            {"phone": "(555) 123-4567"},
            {"phone": 5551234567},
            {"phone": "   "},
            {"zip": "560 001"},
            {"zip": 560001},
            {"zip": ""},
        ],
    )
    def test_accepts(self, extra):
        validate_customer(CheckoutRequest(name="A", email="a@b.co", **extra))


class TestCheckoutEndpoint:
    def test_empty_cart(self, client):
        response = client.post("/api/checkout", json=CUSTOMER)

        assert response.status_code == 400
        assert response.json() == {"message": "Cart is empty"}

    def test_invalid_email(self, client):
        _add(client, "1", 1)

        response = client.post("/api/checkout", json={"name": "John Doe", "email": "bad-email"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email format"}
        # a rejected checkout leaves the cart alone
        assert len(client.get("/api/cart").json()["items"]) == 1

    def test_validation_runs_before_empty_cart_check(self, client):
        response = client.post("/api/checkout", json={"name": "John Doe"})

        assert response.status_code == 400
        assert response.json() == {"message": "Name and email are required"}

    def test_receipt_matches_cart_and_cart_is_cleared(self, client):
        _add(client, "1", 2)
        _add(client, "4", 1)
        cart_total = client.get("/api/cart").json()["total"]

        response = client.post("/api/checkout", json=CUSTOMER)

        assert response.status_code == 200
        receipt = response.json()
        assert receipt["total"] == cart_total == 249.97
        assert receipt["items"] == [
            {"product": "Wireless Headphones", "quantity": 2, "price": 99.99, "total": 199.98},
            {"product": "Gaming Mouse", "quantity": 1, "price": 49.99, "total": 49.99},
        ]
        assert client.get("/api/cart").json() == {"items": [], "total": 0.0}

    def test_receipt_echoes_customer_fields(self, client):
        _add(client, "2", 1)
        body = {
            **CUSTOMER,
            "phone": "555-123-4567",
            "address": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zip": "627001",
            "country": "US",
            "paymentMethod": "upi",
        }

        receipt = client.post("/api/checkout", json=body).json()

        for key, value in body.items():
            assert receipt[key] == value
        assert receipt["id"]
        assert receipt["timestamp"]

    def test_optional_fields_default(self, client):
        _add(client, "2", 1)

        receipt = client.post("/api/checkout", json=CUSTOMER).json()

        assert receipt["paymentMethod"] == "card"
        assert receipt["phone"] == receipt["zip"] == receipt["country"] == ""

    def test_dangling_items_are_skipped_but_still_cleared(self, app, client):
        _add(client, "3", 1)
        app.state.cart_store.upsert("999", 2)

        receipt = client.post("/api/checkout", json=CUSTOMER).json()

        assert [line["product"] for line in receipt["items"]] == ["Bluetooth Speaker"]
        assert receipt["total"] == 79.99
        assert len(app.state.cart_store) == 0

    def test_second_checkout_finds_empty_cart(self, client):
        _add(client, "1", 1)
        assert client.post("/api/checkout", json=CUSTOMER).status_code == 200

        response = client.post("/api/checkout", json=CUSTOMER)

        assert response.status_code == 400
        assert response.json() == {"message": "Cart is empty"}

    def test_malformed_body_is_a_bad_request(self, client):
        response = client.post("/api/checkout", json={"name": ["not", "a", "string"], "email": "a@b.co"})

        assert response.status_code == 400
        assert "message" in response.json()

    def test_email_with_trailing_newline_is_rejected(self, client):
        _add(client, "1", 1)

        response = client.post("/api/checkout", json={"name": "John", "email": "john@example.com\n"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid email format"}
        assert len(client.get("/api/cart").json()["items"]) == 1
