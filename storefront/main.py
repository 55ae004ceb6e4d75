# storefront/main.py
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import cart, checkout, pages, shop
from .cart_store import CartStore
from .catalog import CatalogStore
from .config import CORS_ORIGINS, DATABASE_URL, ENVIRONMENT, HOST, PORT
from .database import masked_url
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid value for {field}: {first.get('msg')}" if field else str(first.get("msg"))


def create_app(database_url: Optional[str] = None, cart_store: Optional[CartStore] = None) -> FastAPI:
    app = FastAPI(
        title="Storefront",
        description="Product catalog, in-memory cart and mock checkout",
        version="1.0.0",
    )

    app.state.catalog = CatalogStore(database_url or DATABASE_URL)
    app.state.cart_store = cart_store if cart_store is not None else CartStore()

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(shop.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)
    app.include_router(pages.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    @app.get("/api/health")
    async def health(request: Request):
        catalog_store: CatalogStore = request.app.state.catalog
        return {
            "status": "OK",
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "origin": request.headers.get("origin") or "No Origin Header",
            "database": {
                "connected": catalog_store.available,
                "url": masked_url(catalog_store.database_url),
            },
            "environment": ENVIRONMENT,
        }

    @app.on_event("startup")
    async def on_startup():
        # A dead database only switches the catalog to its fallback list
        connected = await app.state.catalog.connect()
        logger.info("Server started", database_connected=connected)

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.catalog.close()

    return app


configure_logging()
app = create_app()

if __name__ == "__main__":
    uvicorn.run("storefront.main:app", host=HOST, port=PORT, reload=ENVIRONMENT == "development")
