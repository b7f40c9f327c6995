"""Cent-level money helpers shared by order placement and settlement."""
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_cents(value) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
