# storefront/pricing.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT = Decimal("0.01")

Number = Union[Decimal, float, int, str]


def money(value: Number) -> Decimal:
    """Round a price-like value half-up to whole cents.

    Floats go through ``str`` first so ``99.99`` stays ``99.99`` instead of
    picking up its binary representation error.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(price: Number, quantity: int) -> Decimal:
    return money(money(price) * quantity)
