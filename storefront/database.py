# storefront/database.py
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL, SQL_ECHO

# Base declarative
Base = declarative_base()


def build_engine(url: str = DATABASE_URL) -> AsyncEngine:
    # Nothing connects here; the first connection happens on catalog startup
    return create_async_engine(url, echo=SQL_ECHO, future=True)


def build_session_maker(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


def masked_url(url: str) -> str:
    """Render a database URL with the password hidden, for logs and /api/health."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<invalid url>"
