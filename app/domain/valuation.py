"""Monetary derivation for contract totals.

All arithmetic runs on ``Decimal`` and every stored amount is quantized to
cents with ROUND_HALF_UP, so ``final_value`` never carries binary float drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from app.core.exceptions import ValidationError

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")
# Largest amount a Numeric(12, 2) column holds.
MAX_MONEY = Decimal("9999999999.99")
MAX_TOTAL_SPOTS = 1_000_000


@dataclass(frozen=True)
class Valuation:
    total_value: Decimal
    discount_amount: Decimal
    final_value: Decimal


def to_decimal(value: Decimal | int | float | str, field: str) -> Decimal:
    """Convert input to Decimal; floats go through ``str`` to keep their printed value."""
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(
            f"{field} must be a number.", errors=[{"field": field, "message": "must be a number"}]
        ) from exc


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute(
    total_spots: int,
    price_per_spot: Decimal | int | float | str,
    discount_percentage: Decimal | int | float | str = 0,
) -> Valuation:
    """Return total, discount and final values for a contract."""
    price = to_decimal(price_per_spot, "price_per_spot")
    discount = to_decimal(discount_percentage, "discount_percentage")

    errors = []
    if isinstance(total_spots, bool) or not isinstance(total_spots, int) or total_spots < 1:
        errors.append({"field": "total_spots", "message": "must be a positive integer"})
    elif total_spots > MAX_TOTAL_SPOTS:
        errors.append({"field": "total_spots", "message": f"must be at most {MAX_TOTAL_SPOTS}"})
    if not price.is_finite() or price < 0:
        errors.append({"field": "price_per_spot", "message": "must be a non-negative number"})
    if not discount.is_finite() or discount < 0 or discount > HUNDRED:
        errors.append({"field": "discount_percentage", "message": "must be between 0 and 100"})
    if errors:
        raise ValidationError("Invalid contract values.", errors=errors)

    total_value = quantize_money(Decimal(total_spots) * price)
    if total_value > MAX_MONEY:
        raise ValidationError(
            "Contract total is too large.",
            errors=[{"field": "total_spots", "message": f"total value must not exceed {MAX_MONEY}"}],
        )
    discount_amount = quantize_money(total_value * discount / HUNDRED)
    final_value = total_value - discount_amount
    return Valuation(
        total_value=total_value,
        discount_amount=discount_amount,
        final_value=quantize_money(final_value),
    )
