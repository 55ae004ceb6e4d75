# storefront/catalog.py
from decimal import Decimal
from typing import List, Optional, Union

from fastapi import Request
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import DATABASE_URL
from .database import Base, build_engine, build_session_maker, masked_url
from .errors import CatalogUnavailableError
from .logging_config import get_logger
from .models import Product
from .schemas import ProductOut

logger = get_logger(__name__)

# Seed data and the offline catalog share ids, so a product reference means
# the same thing whether or not the database is reachable
DEFAULT_PRODUCTS = [
    {
        "id": "1",
        "name": "Wireless Headphones",
        "price": "99.99",
        "description": "High-quality wireless headphones with noise cancellation",
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?auto=format&fit=crop&w=600&h=600",
        "category": "Electronics",
    },
    {
        "id": "2",
        "name": "Smart Watch",
        "price": "199.99",
        "description": "Feature-rich smartwatch with health monitoring",
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?auto=format&fit=crop&w=600&h=600",
        "category": "Electronics",
    },
    {
        "id": "3",
        "name": "Bluetooth Speaker",
        "price": "79.99",
        "description": "Portable Bluetooth speaker with excellent sound",
        "image": "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?auto=format&fit=crop&w=600&h=600",
        "category": "Electronics",
    },
    {
        "id": "4",
        "name": "Gaming Mouse",
        "price": "49.99",
        "description": "Ergonomic gaming mouse with customizable buttons",
        "image": "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?auto=format&fit=crop&w=600&h=600",
        "category": "Accessories",
    },
    {
        "id": "5",
        "name": "Mechanical Keyboard",
        "price": "129.99",
        "description": "RGB mechanical keyboard with tactile switches",
        "image": "https://images.unsplash.com/photo-1595225476202-1e6433f609d5?auto=format&fit=crop&w=600&h=600",
        "category": "Accessories",
    },
    {
        "id": "6",
        "name": "USB-C Hub",
        "price": "39.99",
        "description": "Multi-port USB-C hub for laptops",
        "image": "https://images.unsplash.com/photo-1593642632823-8f785ba67e45?auto=format&fit=crop&w=600&h=600",
        "category": "Accessories",
    },
    {
        "id": "7",
        "name": "Wireless Charger",
        "price": "29.99",
        "description": "Fast wireless charging pad for all devices",
        "image": "https://images.unsplash.com/photo-1606220588911-4a0f7f8e0d3f?auto=format&fit=crop&w=600&h=600",
        "category": "Accessories",
    },
    {
        "id": "8",
        "name": "Noise Cancelling Earbuds",
        "price": "149.99",
        "description": "True wireless earbuds with active noise cancellation",
        "image": "https://images.unsplash.com/photo-1572536147248-ac59a8abfa4b?auto=format&fit=crop&w=600&h=600",
        "category": "Electronics",
    },
]


def fallback_products() -> List[ProductOut]:
    return [ProductOut.model_validate(p) for p in DEFAULT_PRODUCTS]


def normalize_product_id(raw: Union[str, int, float, None]) -> Optional[str]:
    """Turn a client-supplied product reference into the catalog's key type.

    JSON clients send ids as strings or numbers; both map to the same
    stripped string. Returns ``None`` for an empty reference.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float):
        if not raw.is_integer():
            return str(raw)
        raw = int(raw)
    value = str(raw).strip()
    return value or None


async def seed_defaults(session: AsyncSession) -> int:
    """Insert the default catalog when the products table is empty."""
    res = await session.execute(select(func.count()).select_from(Product))
    if res.scalar_one() > 0:
        return 0

    for data in DEFAULT_PRODUCTS:
        session.add(Product(**{**data, "price": Decimal(data["price"])}))
    await session.commit()
    return len(DEFAULT_PRODUCTS)


class CatalogStore:
    """Read side of the product table.

    ``connect()`` runs once at startup. If it fails the store stays in
    fallback mode for the life of the process and serves ``DEFAULT_PRODUCTS``.
    """

    def __init__(self, database_url: str = DATABASE_URL):
        self.database_url = database_url
        self.engine = build_engine(database_url)
        self.session_maker = build_session_maker(self.engine)
        self.available = False

    async def connect(self) -> bool:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async with self.session_maker() as session:
                inserted = await seed_defaults(session)
        except (SQLAlchemyError, OSError) as exc:
            self.available = False
            logger.warning(
                "Catalog database unreachable, serving fallback products",
                url=masked_url(self.database_url),
                error=str(exc),
            )
            return False

        self.available = True
        logger.info("Connected to catalog database", url=masked_url(self.database_url), seeded=inserted)
        return True

    async def close(self) -> None:
        await self.engine.dispose()

    async def list_products(self) -> List[ProductOut]:
        if not self.available:
            return fallback_products()
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(Product).order_by(Product.id))
                return [ProductOut.model_validate(p) for p in result.scalars().all()]
        except (SQLAlchemyError, OSError):
            logger.exception("Error fetching products, serving fallback products")
            return fallback_products()

    async def get_product(self, product_id: Union[str, int, float, None]) -> Optional[ProductOut]:
        pid = normalize_product_id(product_id)
        if pid is None:
            return None

        if not self.available:
            return next((p for p in fallback_products() if p.id == pid), None)

        try:
            async with self.session_maker() as session:
                product = await session.get(Product, pid)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Catalog lookup failed", product_id=pid, error=str(exc))
            raise CatalogUnavailableError("Catalog database is unavailable") from exc

        if product is None:
            return None
        return ProductOut.model_validate(product)


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog
