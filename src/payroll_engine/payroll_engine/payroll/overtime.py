"""Overtime tier allocation.

The first `standard_cap` hours of overtime are paid at 1.5x the hourly rate,
the next `premium_cap` hours at 2x. Hours beyond both caps are not paid under
this formula; validation flags them instead of the allocator truncating input.
"""

from __future__ import annotations

from decimal import Decimal

from ..common.money import ZERO
from ..core.constants import (
    EXCESSIVE_PREMIUM_OVERTIME_HOURS,
    LEGAL_MONTHLY_HOURS_LIMIT,
    LEGAL_WEEKLY_HOURS_LIMIT,
    OVERTIME_APPROVAL_THRESHOLD_HOURS,
    PREMIUM_OVERTIME_CAP_HOURS,
    PREMIUM_OVERTIME_MULTIPLIER,
    STANDARD_OVERTIME_CAP_HOURS,
    STANDARD_OVERTIME_MULTIPLIER,
    DEFAULT_STANDARD_WORKING_HOURS,
)
from .model import OvertimeSplit


def allocate(
    total_overtime_hours: Decimal,
    standard_cap: Decimal = STANDARD_OVERTIME_CAP_HOURS,
    premium_cap: Decimal = PREMIUM_OVERTIME_CAP_HOURS,
) -> OvertimeSplit:
    if total_overtime_hours <= standard_cap:
        return OvertimeSplit(standard_hours=max(total_overtime_hours, ZERO), premium_hours=ZERO)
    return OvertimeSplit(
        standard_hours=standard_cap,
        premium_hours=min(total_overtime_hours - standard_cap, premium_cap),
    )


def rates_from_hourly(hourly_rate: Decimal) -> tuple[Decimal, Decimal]:
    """(standard overtime rate, premium overtime rate), unrounded."""
    return hourly_rate * STANDARD_OVERTIME_MULTIPLIER, hourly_rate * PREMIUM_OVERTIME_MULTIPLIER


def overtime_policy() -> dict:
    standard_cap = int(STANDARD_OVERTIME_CAP_HOURS)
    total_cap = int(STANDARD_OVERTIME_CAP_HOURS + PREMIUM_OVERTIME_CAP_HOURS)
    return {
        "standard_working_hours": int(DEFAULT_STANDARD_WORKING_HOURS),
        "max_regular_hours": int(DEFAULT_STANDARD_WORKING_HOURS),
        "max_overtime_hours": total_cap,
        "overtime_tiers": [
            {
                "name": "Standard Overtime",
                "hours": f"1-{standard_cap}",
                "rate": f"{STANDARD_OVERTIME_MULTIPLIER}x hourly rate",
                "description": f"First {standard_cap} overtime hours",
            },
            {
                "name": "Premium Overtime",
                "hours": f"{standard_cap + 1}-{total_cap}",
                "rate": f"{PREMIUM_OVERTIME_MULTIPLIER}x hourly rate",
                "description": f"Additional overtime beyond {standard_cap} hours",
            },
        ],
        "approval_required": {
            "threshold": int(OVERTIME_APPROVAL_THRESHOLD_HOURS),
            "description": (
                f"Overtime exceeding {int(OVERTIME_APPROVAL_THRESHOLD_HOURS)} hours requires management approval"
            ),
        },
        "excessive_premium_hours": int(EXCESSIVE_PREMIUM_OVERTIME_HOURS),
        "legal_limit": {
            "weekly_hours": int(LEGAL_WEEKLY_HOURS_LIMIT),
            "monthly_hours": int(LEGAL_MONTHLY_HOURS_LIMIT),
            "description": "Kenya Labour Act maximum working hours",
        },
    }
