#!/usr/bin/env python3
"""Smoke test against a running server: products -> cart -> checkout.

Usage:
    python scripts/smoke_api.py [BASE_URL]
"""
import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"


def show(label: str, resp: httpx.Response) -> None:
    print(f"{label}: {resp.status_code}")
    print(resp.text)
    print()


def run() -> int:
    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        try:
            products = client.get("/api/products")
        except httpx.RequestError as e:
            print("Request failed:", e)
            return 1
        show("GET /api/products", products)
        first = products.json()[0]

        added = client.post("/api/cart", json={"productId": first["id"], "quantity": 2})
        show("POST /api/cart", added)

        cart = client.get("/api/cart")
        show("GET /api/cart", cart)

        item_id = cart.json()["items"][0]["id"]
        show(f"PUT /api/cart/{item_id}", client.put(f"/api/cart/{item_id}", json={"quantity": 3}))
        show("GET /api/cart", client.get("/api/cart"))

        receipt = client.post("/api/checkout", json={"name": "John Doe", "email": "john.doe@example.com"})
        show("POST /api/checkout", receipt)
        show("GET /api/cart", client.get("/api/cart"))
    return 0


if __name__ == "__main__":
    sys.exit(run())
