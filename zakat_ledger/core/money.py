"""Money — fixed-point amounts and the header total calculator.

Invariants:
    - Amounts are Decimal quantized to 2 places (NUMERIC(18, 2) in storage)
    - fits_digits guards the storage precision before any write
    - compute_total is pure, deterministic and order-independent
    - Floats from drivers are converted through str(), never Decimal(float)
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Integer digits left of the point: NUMERIC(18, 2) amounts, NUMERIC(10, 2) rice weights
AMOUNT_DIGITS = 16
RICE_KG_DIGITS = 8


def to_money(value: Any) -> Decimal:
    """Normalize a driver or user value to a 2-place Decimal. None → 0.00."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    if isinstance(value, float):
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def has_money_scale(value: Decimal) -> bool:
    """True when value has at most two decimal places."""
    return value == value.quantize(CENT)


def _amount_of(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item["amount"]
    return item.amount


def compute_total(items: Iterable[Any]) -> Decimal:
    """Sum line-item amounts. Accepts mappings or objects with .amount."""
    total = sum((to_money(_amount_of(item)) for item in items), ZERO)
    return total.quantize(CENT)


def fits_digits(value: Decimal, digits: int) -> bool:
    """True when value has at most `digits` digits before the decimal point."""
    return abs(value) < Decimal(10) ** digits
