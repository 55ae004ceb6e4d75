"""Catalog store and /api/products."""

import asyncio

from fastapi.testclient import TestClient

from storefront.catalog import DEFAULT_PRODUCTS, CatalogStore, normalize_product_id
from storefront.main import create_app


class TestListProducts:
    def test_seeded_catalog_is_listed(self, client):
        response = client.get("/api/products")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == len(DEFAULT_PRODUCTS)
        assert products[0] == {
            "id": "1",
            "name": "Wireless Headphones",
            "price": 99.99,
            "description": "High-quality wireless headphones with noise cancellation",
            "image": DEFAULT_PRODUCTS[0]["image"],
            "category": "Electronics",
        }

    def test_ids_unique_and_prices_non_negative(self, client):
        products = client.get("/api/products").json()

        ids = [p["id"] for p in products]
        assert len(ids) == len(set(ids))
        assert all(p["price"] >= 0 for p in products)

    def test_seed_runs_only_once(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
        with TestClient(create_app(database_url=url)) as first:
            assert len(first.get("/api/products").json()) == 8
        with TestClient(create_app(database_url=url)) as second:
            assert len(second.get("/api/products").json()) == 8


class TestGetProduct:
    def test_get_existing_product(self, client):
        response = client.get("/api/products/5")

        assert response.status_code == 200
        assert response.json()["name"] == "Mechanical Keyboard"
        assert response.json()["price"] == 129.99

    def test_get_unknown_product(self, client):
        response = client.get("/api/products/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}


class TestFallbackCatalog:
    def test_unreachable_database_serves_fallback(self, offline_client):
        response = offline_client.get("/api/products")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [p["id"] for p in DEFAULT_PRODUCTS]

    def test_fallback_lookup_by_id(self, offline_client):
        response = offline_client.get("/api/products/8")

        assert response.status_code == 200
        assert response.json()["name"] == "Noise Cancelling Earbuds"

    def test_store_reports_unavailable(self, tmp_path):
        store = CatalogStore(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}")

        async def scenario():
            try:
                connected = await store.connect()
                product = await store.get_product(2)
                return connected, product
            finally:
                await store.close()

        connected, product = asyncio.run(scenario())
        assert connected is False
        assert store.available is False
        assert product.name == "Smart Watch"


class TestNormalizeProductId:
    def test_numbers_and_strings_share_a_key(self):
        assert normalize_product_id(3) == "3"
        assert normalize_product_id("3") == "3"
        assert normalize_product_id(" 3 ") == "3"
        assert normalize_product_id(3.0) == "3"

    def test_empty_references(self):
        assert normalize_product_id(None) is None
        assert normalize_product_id("") is None
        assert normalize_product_id("   ") is None
        assert normalize_product_id(True) is None
