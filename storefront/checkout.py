# storefront/checkout.py
import re
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status

from .cart_store import CartStore, get_cart_store
from .catalog import CatalogStore, get_catalog
from .errors import CatalogUnavailableError, ValidationError
from .logging_config import get_logger
from .pricing import line_total, money
from .schemas import CheckoutRequest, Receipt, ReceiptLine

logger = get_logger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["checkout"])

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NON_DIGITS = re.compile(r"[^0-9]")

PHONE_DIGITS = 10
ZIP_DIGITS = 6


def _text(value) -> str:
    return "" if value is None else str(value)


def validate_customer(details: CheckoutRequest) -> None:
    """Check contact fields in order and stop at the first problem."""
    if not details.name or not details.email:
        raise ValidationError("Name and email are required")

    if not EMAIL_RE.fullmatch(details.email):
        raise ValidationError("Invalid email format")

    phone = _text(details.phone)
    if phone.strip() and len(NON_DIGITS.sub("", phone)) != PHONE_DIGITS:
        raise ValidationError("Phone number must be 10 digits")

    zip_code = _text(details.zip)
    if zip_code.strip() and len(NON_DIGITS.sub("", zip_code)) != ZIP_DIGITS:
        raise ValidationError("ZIP code must be 6 digits")


class CheckoutService:
    def __init__(self, store: CartStore, catalog: CatalogStore):
        self.store = store
        self.catalog = catalog

    async def checkout(self, details: CheckoutRequest) -> Receipt:
        validate_customer(details)

        cart_items = self.store.items()
        if not cart_items:
            raise ValidationError("Cart is empty")

        lines = []
        total = Decimal("0.00")
        for item in cart_items:
            product = await self.catalog.get_product(item.product_id)
            if product is None:
                continue
            item_total = line_total(product.price, item.quantity)
            total += item_total
            lines.append(ReceiptLine(
                product=product.name,
                quantity=item.quantity,
                price=float(money(product.price)),
                total=float(item_total),
            ))

        receipt = Receipt(
            id=uuid.uuid4().hex[:12],
            name=details.name,
            email=details.email,
            phone=_text(details.phone),
            address=_text(details.address),
            city=_text(details.city),
            state=_text(details.state),
            zip=_text(details.zip),
            country=_text(details.country),
            payment_method=details.payment_method or "card",
            items=lines,
            total=float(money(total)),
            timestamp=datetime.now(timezone.utc),
        )

        # the whole cart goes, including lines whose product no longer resolves
        cleared = self.store.clear()
        logger.info("Checkout completed", receipt_id=receipt.id, total=receipt.total, cleared_items=cleared)
        return receipt


def get_checkout_service(
    store: CartStore = Depends(get_cart_store),
    catalog: CatalogStore = Depends(get_catalog),
) -> CheckoutService:
    return CheckoutService(store, catalog)


@router.post("", response_model=Receipt)
async def process_checkout(payload: CheckoutRequest, service: CheckoutService = Depends(get_checkout_service)):
    try:
        return await service.checkout(payload)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except CatalogUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
