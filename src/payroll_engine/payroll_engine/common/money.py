"""Decimal helpers shared by the tax tables and the calculator."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..core.exceptions import InputError

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value, field_name: str = "value") -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        raise InputError(f"{field_name} is not a number: {value!r}")
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InputError(f"{field_name} is not a number: {value!r}")
    if not amount.is_finite():
        raise InputError(f"{field_name} is not a finite number: {value!r}")
    return amount


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(value: Decimal) -> int:
    """Convert a currency amount to integer minor units (cents)."""
    return int((round_money(value) * 100).to_integral_value(rounding=ROUND_HALF_UP))
