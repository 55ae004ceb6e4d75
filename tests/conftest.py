import pytest
from fastapi.testclient import TestClient

from storefront.main import create_app


@pytest.fixture()
def app(tmp_path):
    return create_app(database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")


@pytest.fixture()
def client(app):
    # entering the context runs startup, which creates and seeds the catalog
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def offline_client(tmp_path):
    """App whose database cannot be opened, so the catalog runs on its fallback list."""
    app = create_app(database_url=f"sqlite+aiosqlite:///{tmp_path / 'no-such-dir' / 'catalog.db'}")
    with TestClient(app) as c:
        yield c
