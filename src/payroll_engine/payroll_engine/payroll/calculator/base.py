from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...attendance.model import AttendanceSummary
from ..model import CalculationResult, CompensationProfile, PayrollRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        compensation: CompensationProfile,
        attendance: AttendanceSummary,
        *,
        other_deductions: Decimal,
    ) -> CalculationResult:
        raise NotImplementedError

    @abstractmethod
    def validate_working_hours(self, record: PayrollRecord) -> list[str]:
        """Advisory rule violations; they block payment unless forced."""

        raise NotImplementedError

    @abstractmethod
    def overtime_approval_message(self, overtime_hours: Decimal) -> str:
        raise NotImplementedError
