# portal/utils/money.py
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round for display only; the cart keeps full precision internally."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
