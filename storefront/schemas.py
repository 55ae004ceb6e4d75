# storefront/schemas.py
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field


# Product
class ProductOut(BaseModel):
    id: str
    name: str
    price: float
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None

    class Config:
        from_attributes = True


# Cart: request bodies are loose on purpose, the handlers answer 400 with
# their own messages instead of pydantic's 422
class CartAddRequest(BaseModel):
    product_id: Optional[Union[str, int]] = Field(default=None, alias="productId")
    quantity: Optional[Union[int, float, str]] = None

    class Config:
        populate_by_name = True


class CartUpdateRequest(BaseModel):
    quantity: Optional[Union[int, float, str]] = None


class CartItemOut(BaseModel):
    id: str
    product_id: str = Field(alias="productId")
    quantity: int
    product: ProductOut
    total: float

    class Config:
        populate_by_name = True


class CartItemSummary(BaseModel):
    id: str
    product_id: str = Field(alias="productId")
    quantity: int

    class Config:
        populate_by_name = True


class CartOut(BaseModel):
    items: List[CartItemOut]
    total: float


class MessageOut(BaseModel):
    message: str


# Checkout
class CheckoutRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[Union[str, int]] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[Union[str, int]] = None
    country: Optional[str] = None
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")

    class Config:
        populate_by_name = True


class ReceiptLine(BaseModel):
    product: str
    quantity: int
    price: float
    total: float


class Receipt(BaseModel):
    id: str
    name: str
    email: str
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    payment_method: str = Field(default="card", alias="paymentMethod")
    items: List[ReceiptLine]
    total: float
    timestamp: datetime

    class Config:
        populate_by_name = True
