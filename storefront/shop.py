# storefront/shop.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from .catalog import CatalogStore, get_catalog
from .errors import CatalogUnavailableError
from .schemas import ProductOut

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
async def list_products(catalog: CatalogStore = Depends(get_catalog)):
    # never fails: an unreachable database yields the fallback list
    return await catalog.list_products()


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, catalog: CatalogStore = Depends(get_catalog)):
    try:
        product = await catalog.get_product(product_id)
    except CatalogUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
