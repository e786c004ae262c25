from __future__ import annotations

from decimal import Decimal

from ...attendance.model import AttendanceSummary
from ...common.money import ZERO, round_money
from ...core.constants import (
    EXCESSIVE_PREMIUM_OVERTIME_HOURS,
    LEGAL_WEEKLY_HOURS_LIMIT,
    OVERTIME_APPROVAL_THRESHOLD_HOURS,
    PREMIUM_OVERTIME_CAP_HOURS,
    STANDARD_OVERTIME_CAP_HOURS,
    WEEKS_PER_MONTH,
)
from .. import overtime, tax_tables
from ..model import CalculationResult, CompensationProfile, PayrollRecord, SalaryBreakdown
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: regular hours capped at standard hours, two overtime tiers,
    Kenyan statutory deductions on gross pay, net pay not below 0.

    Rates are kept unrounded while computing pay; every stored amount is
    rounded to cents.
    """

    def __init__(
        self,
        *,
        standard_cap: Decimal = STANDARD_OVERTIME_CAP_HOURS,
        premium_cap: Decimal = PREMIUM_OVERTIME_CAP_HOURS,
        approval_threshold: Decimal = OVERTIME_APPROVAL_THRESHOLD_HOURS,
        weekly_hours_limit: Decimal = LEGAL_WEEKLY_HOURS_LIMIT,
        excessive_premium_hours: Decimal = EXCESSIVE_PREMIUM_OVERTIME_HOURS,
    ):
        self._standard_cap = standard_cap
        self._premium_cap = premium_cap
        self._approval_threshold = approval_threshold
        self._weekly_hours_limit = weekly_hours_limit
        self._excessive_premium_hours = excessive_premium_hours

    def calculate(
        self,
        compensation: CompensationProfile,
        attendance: AttendanceSummary,
        *,
        other_deductions: Decimal = ZERO,
    ) -> CalculationResult:
        hourly_rate = compensation.basic_salary / compensation.standard_working_hours
        standard_rate, premium_rate = overtime.rates_from_hourly(hourly_rate)
        split = overtime.allocate(attendance.overtime_hours, self._standard_cap, self._premium_cap)

        actual_regular_hours = min(attendance.regular_hours, compensation.standard_working_hours)
        regular_pay = round_money(actual_regular_hours * hourly_rate)
        standard_overtime_pay = round_money(split.standard_hours * standard_rate)
        premium_overtime_pay = round_money(split.premium_hours * premium_rate)
        total_overtime_pay = standard_overtime_pay + premium_overtime_pay
        gross_pay = regular_pay + total_overtime_pay

        salary = SalaryBreakdown(
            hourly_rate=round_money(hourly_rate),
            standard_overtime_rate=round_money(standard_rate),
            premium_overtime_rate=round_money(premium_rate),
            regular_pay=regular_pay,
            standard_overtime_pay=standard_overtime_pay,
            premium_overtime_pay=premium_overtime_pay,
            total_overtime_pay=total_overtime_pay,
            gross_pay=gross_pay,
        )
        deductions = tax_tables.compute_statutory_deductions(gross_pay, other_deductions)
        net_pay = max(ZERO, gross_pay - deductions.total_deductions)

        return CalculationResult(
            overtime_split=split,
            salary=salary,
            deductions=deductions,
            net_pay=round_money(net_pay),
            overtime_approval_required=attendance.overtime_hours > self._approval_threshold,
        )

    def overtime_approval_message(self, overtime_hours: Decimal) -> str:
        return f"Overtime hours ({overtime_hours}) require management approval"

    def validate_working_hours(self, record: PayrollRecord) -> list[str]:
        errors: list[str] = []
        attendance = record.attendance

        weekly_hours = attendance.total_hours / WEEKS_PER_MONTH
        if weekly_hours > self._weekly_hours_limit:
            errors.append(
                f"Weekly hours ({weekly_hours:.1f}) exceed legal limit of {self._weekly_hours_limit} hours"
            )

        if attendance.overtime_hours > self._approval_threshold and record.overtime_approval.approved_by is None:
            errors.append(self.overtime_approval_message(attendance.overtime_hours))

        premium_hours = record.overtime_split.premium_hours
        if premium_hours > self._excessive_premium_hours:
            errors.append(f"Premium overtime hours ({premium_hours}) are excessive")

        return errors
