from __future__ import annotations

from datetime import date
from decimal import Decimal

from ..core.exceptions import InputError
from .money import to_decimal


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise InputError(f"{field_name} is required")
    return value.strip()


def require_non_negative(value, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise InputError(f"{field_name} must not be negative (got {amount})")
    return amount


def require_date_range(start: date, end: date) -> None:
    if start >= end:
        raise InputError(
            f"Start date {start.isoformat()} must be before end date {end.isoformat()}",
            period_start=start,
            period_end=end,
        )
