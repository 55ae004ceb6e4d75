# storefront/cart.py
import math
import re
from decimal import Decimal
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status

from .cart_store import CartItem, CartStore, get_cart_store
from .catalog import CatalogStore, get_catalog, normalize_product_id
from .errors import CatalogUnavailableError, NotFoundError, ValidationError
from .logging_config import get_logger
from .pricing import line_total, money
from .schemas import (
    CartAddRequest,
    CartItemOut,
    CartItemSummary,
    CartOut,
    CartUpdateRequest,
    MessageOut,
    ProductOut,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_quantity(value: Union[int, float, str]) -> int:
    """Coerce a client quantity to an int: floats truncate, strings parse
    their leading integer (``"3 pcs"`` -> 3)."""
    if isinstance(value, bool):
        raise ValidationError("Quantity must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValidationError("Quantity must be a number")
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        raise ValidationError("Quantity must be a number")
    return int(match.group(1))


def _item_out(item: CartItem, product: ProductOut) -> CartItemOut:
    return CartItemOut(
        id=item.id,
        product_id=item.product_id,
        quantity=item.quantity,
        product=product,
        total=float(line_total(product.price, item.quantity)),
    )


class CartService:
    def __init__(self, store: CartStore, catalog: CatalogStore):
        self.store = store
        self.catalog = catalog

    async def list_cart(self) -> CartOut:
        items = []
        total = Decimal("0.00")
        for item in self.store.items():
            product = await self.catalog.get_product(item.product_id)
            if product is None:
                # dangling reference: hidden from the listing and the total
                continue
            out = _item_out(item, product)
            total += line_total(product.price, item.quantity)
            items.append(out)
        return CartOut(items=items, total=float(money(total)))

    async def add_item(self, product_id, quantity, min_quantity: Optional[int] = None) -> CartItemOut:
        # falsy references (None, "", 0) count as missing
        pid = normalize_product_id(product_id) if product_id else None
        if pid is None or quantity is None:
            raise ValidationError("productId and quantity are required")
        qty = self._checked_quantity(quantity, min_quantity)

        product = await self.catalog.get_product(pid)
        if product is None:
            raise NotFoundError("Product not found")

        item = self.store.upsert(pid, qty)
        logger.info("Cart item saved", item_id=item.id, product_id=pid, quantity=qty)
        return _item_out(item, product)

    def update_item(self, item_id: str, quantity, min_quantity: Optional[int] = None) -> CartItemSummary:
        if quantity is None:
            raise ValidationError("Quantity is required")
        if self.store.find(item_id) is None:
            raise NotFoundError("Item not found in cart")
        qty = self._checked_quantity(quantity, min_quantity)

        item = self.store.set_quantity(item_id, qty)
        logger.info("Cart item updated", item_id=item.id, quantity=qty)
        return CartItemSummary(id=item.id, product_id=item.product_id, quantity=item.quantity)

    def remove_item(self, item_id: str) -> None:
        if not self.store.remove(item_id):
            raise NotFoundError("Item not found in cart")
        logger.info("Cart item removed", item_id=item_id)

    @staticmethod
    def _checked_quantity(quantity, min_quantity: Optional[int]) -> int:
        qty = coerce_quantity(quantity)
        if min_quantity is not None and qty < min_quantity:
            raise ValidationError("Quantity must be a positive integer")
        return qty


def get_cart_service(
    store: CartStore = Depends(get_cart_store),
    catalog: CatalogStore = Depends(get_catalog),
) -> CartService:
    return CartService(store, catalog)


@router.get("", response_model=CartOut)
async def get_cart(service: CartService = Depends(get_cart_service)):
    try:
        return await service.list_cart()
    except CatalogUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post("", response_model=CartItemOut, status_code=status.HTTP_201_CREATED)
async def add_to_cart(payload: CartAddRequest, service: CartService = Depends(get_cart_service)):
    try:
        return await service.add_item(payload.product_id, payload.quantity, min_quantity=1)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except CatalogUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put("/{item_id}", response_model=CartItemSummary)
async def update_cart_item(
    item_id: str,
    payload: CartUpdateRequest,
    service: CartService = Depends(get_cart_service),
):
    try:
        return service.update_item(item_id, payload.quantity, min_quantity=1)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/{item_id}", response_model=MessageOut)
async def remove_cart_item(item_id: str, service: CartService = Depends(get_cart_service)):
    try:
        service.remove_item(item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Item removed from cart"}
