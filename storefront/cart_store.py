# storefront/cart_store.py
import uuid
from typing import List, Optional

from fastapi import Request
from pydantic import BaseModel


class CartItem(BaseModel):
    id: str
    product_id: str
    quantity: int


def generate_item_id() -> str:
    return uuid.uuid4().hex[:12]


class CartStore:
    """In-memory cart shared by every client of the process.

    Nothing here is persisted or locked. Handlers run on a single event loop
    and never await while mutating, so each call sees a consistent list.
    """

    def __init__(self):
        self._items: List[CartItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> List[CartItem]:
        return list(self._items)

    def find(self, item_id: str) -> Optional[CartItem]:
        return next((it for it in self._items if it.id == item_id), None)

    def find_by_product(self, product_id: str) -> Optional[CartItem]:
        return next((it for it in self._items if it.product_id == product_id), None)

    def upsert(self, product_id: str, quantity: int) -> CartItem:
        # a repeat add replaces the quantity, it does not add to it
        existing = self.find_by_product(product_id)
        if existing is not None:
            existing.quantity = quantity
            return existing

        item = CartItem(id=generate_item_id(), product_id=product_id, quantity=quantity)
        self._items.append(item)
        return item

    def set_quantity(self, item_id: str, quantity: int) -> Optional[CartItem]:
        item = self.find(item_id)
        if item is None:
            return None
        item.quantity = quantity
        return item

    def remove(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [it for it in self._items if it.id != item_id]
        return len(self._items) < before

    def clear(self) -> int:
        removed = len(self._items)
        self._items = []
        return removed


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store
