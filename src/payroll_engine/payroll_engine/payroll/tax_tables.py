"""Kenyan statutory deduction schedules (monthly, 2024 rates).

This is the single authoritative rate table for the engine. Every function is
pure and total over non-negative gross pay; results are rounded to cents.
"""

from __future__ import annotations

from decimal import Decimal

from ..common.money import ZERO, round_money
from .model import Deductions

# PAYE marginal bands: (upper bound of band, marginal rate). The last band is open-ended.
PAYE_BAND_1_LIMIT = Decimal("24000")
PAYE_BAND_2_LIMIT = Decimal("32333")
PAYE_BAND_3_LIMIT = Decimal("500000")
PAYE_BAND_4_LIMIT = Decimal("800000")

PAYE_BANDS: tuple[tuple[Decimal | None, Decimal], ...] = (
    (PAYE_BAND_1_LIMIT, Decimal("0.10")),
    (PAYE_BAND_2_LIMIT, Decimal("0.25")),
    (PAYE_BAND_3_LIMIT, Decimal("0.30")),
    (PAYE_BAND_4_LIMIT, Decimal("0.325")),
    (None, Decimal("0.35")),
)
PERSONAL_RELIEF = Decimal("2400")

# Health levy (NHIF): inclusive upper bound of gross pay -> flat amount.
HEALTH_LEVY_BANDS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("5999"), Decimal("150")),
    (Decimal("7999"), Decimal("300")),
    (Decimal("11999"), Decimal("400")),
    (Decimal("14999"), Decimal("500")),
    (Decimal("19999"), Decimal("600")),
    (Decimal("24999"), Decimal("750")),
    (Decimal("29999"), Decimal("850")),
    (Decimal("34999"), Decimal("900")),
    (Decimal("39999"), Decimal("950")),
    (Decimal("44999"), Decimal("1000")),
    (Decimal("49999"), Decimal("1100")),
    (Decimal("59999"), Decimal("1200")),
    (Decimal("69999"), Decimal("1300")),
    (Decimal("79999"), Decimal("1400")),
    (Decimal("89999"), Decimal("1500")),
    (Decimal("99999"), Decimal("1600")),
)
HEALTH_LEVY_TOP_BAND = Decimal("1700")

# Social security (NSSF): Tier I up to the lower limit, Tier II up to the upper limit.
SOCIAL_SECURITY_RATE = Decimal("0.06")
SOCIAL_SECURITY_TIER_1_LIMIT = Decimal("7000")
SOCIAL_SECURITY_TIER_2_LIMIT = Decimal("36000")

HOUSING_LEVY_RATE = Decimal("0.015")


def compute_paye(gross_pay: Decimal) -> Decimal:
    """Progressive income tax less personal relief, never negative."""
    tax = ZERO
    lower = ZERO
    for upper, rate in PAYE_BANDS:
        if gross_pay <= lower:
            break
        taxable_top = gross_pay if upper is None else min(gross_pay, upper)
        tax += (taxable_top - lower) * rate
        if upper is None:
            break
        lower = upper
    return round_money(max(ZERO, tax - PERSONAL_RELIEF))


def compute_health_levy(gross_pay: Decimal) -> Decimal:
    for upper, amount in HEALTH_LEVY_BANDS:
        if gross_pay <= upper:
            return round_money(amount)
    return round_money(HEALTH_LEVY_TOP_BAND)


def compute_social_security(gross_pay: Decimal) -> Decimal:
    tier_1 = min(gross_pay, SOCIAL_SECURITY_TIER_1_LIMIT) * SOCIAL_SECURITY_RATE
    tier_2_base = min(
        max(gross_pay - SOCIAL_SECURITY_TIER_1_LIMIT, ZERO),
        SOCIAL_SECURITY_TIER_2_LIMIT - SOCIAL_SECURITY_TIER_1_LIMIT,
    )
    tier_2 = tier_2_base * SOCIAL_SECURITY_RATE
    return round_money(tier_1 + tier_2)


def compute_housing_levy(gross_pay: Decimal) -> Decimal:
    return round_money(gross_pay * HOUSING_LEVY_RATE)


def compute_statutory_deductions(gross_pay: Decimal, other_deductions: Decimal = ZERO) -> Deductions:
    paye = compute_paye(gross_pay)
    health_levy = compute_health_levy(gross_pay)
    social_security = compute_social_security(gross_pay)
    housing_levy = compute_housing_levy(gross_pay)
    other = round_money(other_deductions)
    return Deductions(
        paye=paye,
        health_levy=health_levy,
        social_security=social_security,
        housing_levy=housing_levy,
        other_deductions=other,
        total_deductions=round_money(paye + health_levy + social_security + housing_levy + other),
    )
