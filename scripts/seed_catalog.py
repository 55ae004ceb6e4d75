"""Seed the catalog database with the default products.

Idempotent: creates the `products` table if it does not exist and inserts
the default catalog only when the table is empty.

Usage:
    python scripts/seed_catalog.py

The script reads DATABASE_URL from the environment; default matches the app.
"""
import asyncio
import sys

from sqlalchemy import select

from storefront.catalog import CatalogStore
from storefront.config import DATABASE_URL
from storefront.database import masked_url
from storefront.models import Product


async def main() -> int:
    print("Catalog seed starting, DATABASE_URL=", masked_url(DATABASE_URL))
    store = CatalogStore(DATABASE_URL)
    try:
        # connect() creates the schema and seeds an empty table
        if not await store.connect():
            print("Failed to connect to database")
            return 1

        async with store.session_maker() as session:
            result = await session.execute(select(Product.id, Product.name, Product.price).order_by(Product.id))
            rows = result.all()
        print("DB products after seeding:")
        for r in rows:
            print(r)
    finally:
        await store.close()

    print("Catalog seed complete")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
