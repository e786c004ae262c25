from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ..attendance.model import AttendanceSummary
from ..common.money import ZERO
from ..core.constants import DEFAULT_STANDARD_WORKING_HOURS
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import (
    ConflictError,
    InputError,
    InvalidTransitionError,
    PreconditionError,
    RecordLockedError,
)

if TYPE_CHECKING:
    from .calculator.base import PayrollCalculator


@dataclass(frozen=True)
class CompensationProfile:
    """Snapshot of the employee's pay terms at generation time."""

    basic_salary: Decimal
    standard_working_hours: Decimal = DEFAULT_STANDARD_WORKING_HOURS


@dataclass(frozen=True)
class OvertimeSplit:
    standard_hours: Decimal = ZERO
    premium_hours: Decimal = ZERO


@dataclass(frozen=True)
class SalaryBreakdown:
    hourly_rate: Decimal = ZERO
    standard_overtime_rate: Decimal = ZERO
    premium_overtime_rate: Decimal = ZERO
    regular_pay: Decimal = ZERO
    standard_overtime_pay: Decimal = ZERO
    premium_overtime_pay: Decimal = ZERO
    total_overtime_pay: Decimal = ZERO
    gross_pay: Decimal = ZERO


@dataclass(frozen=True)
class Deductions:
    paye: Decimal = ZERO
    health_levy: Decimal = ZERO
    social_security: Decimal = ZERO
    housing_levy: Decimal = ZERO
    other_deductions: Decimal = ZERO
    total_deductions: Decimal = ZERO


@dataclass(frozen=True)
class OvertimeApproval:
    required: bool = False
    approved_by: Optional[int] = None
    approved_date: Optional[datetime] = None
    reason: str = ""

    @property
    def pending(self) -> bool:
        return self.required and self.approved_by is None


@dataclass(frozen=True)
class PaymentDetails:
    reference_id: Optional[str] = None
    payment_date: Optional[datetime] = None
    payment_method: PaymentMethod = PaymentMethod.GATEWAY_TRANSFER
    payout_destination: Optional[str] = None
    failure_reason: Optional[str] = None
    attempts: int = 0


@dataclass(frozen=True)
class CalculationResult:
    """Output of a PayrollCalculator for one record."""

    overtime_split: OvertimeSplit
    salary: SalaryBreakdown
    deductions: Deductions
    net_pay: Decimal
    overtime_approval_required: bool


# Allowed payment status transitions. PAID is terminal.
ALLOWED_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PROCESSING, PaymentStatus.CANCELLED}),
    PaymentStatus.PROCESSING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PROCESSING, PaymentStatus.CANCELLED}),
    PaymentStatus.CANCELLED: frozenset({PaymentStatus.PENDING}),
    PaymentStatus.PAID: frozenset(),
}


@dataclass
class PayrollRecord:
    """Payroll of one employee for one pay period, with its payment state machine.

    Identity is (employee_id, period_start, period_end). Inputs are changed
    through the mutating methods below; callers then invoke `recompute()`
    explicitly. Once PAID the record is immutable.
    """

    employee_id: int
    period_start: date
    period_end: date
    compensation: CompensationProfile
    attendance: AttendanceSummary
    payroll_id: Optional[int] = None
    overtime_split: OvertimeSplit = field(default_factory=OvertimeSplit)
    salary: SalaryBreakdown = field(default_factory=SalaryBreakdown)
    deductions: Deductions = field(default_factory=Deductions)
    net_pay: Decimal = ZERO
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment: PaymentDetails = field(default_factory=PaymentDetails)
    overtime_approval: OvertimeApproval = field(default_factory=OvertimeApproval)
    approved_by: Optional[int] = None
    approved_date: Optional[datetime] = None
    leave_days: int = 0
    notes: str = ""
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def key(self) -> tuple[int, date, date]:
        return self.employee_id, self.period_start, self.period_end

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def idempotency_key(self) -> str:
        """Gateway idempotency key; one per submission attempt."""
        return (
            f"PAYROLL:{self.employee_id}:{self.period_start.isoformat()}:"
            f"{self.period_end.isoformat()}:{self.payment.attempts}"
        )

    def context(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period_start,
            "period_end": self.period_end,
        }

    def _ensure_mutable(self) -> None:
        if self.is_paid:
            raise RecordLockedError("Payroll record is paid and can no longer be modified", **self.context())

    def _transition(self, target: PaymentStatus) -> None:
        self._ensure_mutable()
        if target not in ALLOWED_TRANSITIONS[self.payment_status]:
            raise InvalidTransitionError(
                f"Cannot move payment status from {self.payment_status.value} to {target.value}",
                **self.context(),
            )
        self.payment_status = target

    # -------- Computation --------
    def recompute(self, calculator: "PayrollCalculator") -> "PayrollRecord":
        self._ensure_mutable()
        result = calculator.calculate(
            self.compensation,
            self.attendance,
            other_deductions=self.deductions.other_deductions,
        )
        self.overtime_split = result.overtime_split
        self.salary = result.salary
        self.deductions = result.deductions
        self.net_pay = result.net_pay
        if result.overtime_approval_required and not self.overtime_approval.required:
            self.overtime_approval = replace(self.overtime_approval, required=True)
        return self

    def validate_working_hours(self, calculator: "PayrollCalculator") -> list[str]:
        return calculator.validate_working_hours(self)

    # -------- Administrative edits --------
    def apply_edits(
        self,
        *,
        notes: Optional[str] = None,
        other_deductions: Optional[Decimal] = None,
        attendance: Optional[AttendanceSummary] = None,
    ) -> None:
        """Change editable inputs. Call `recompute()` afterwards."""
        self._ensure_mutable()
        if self.payment_status == PaymentStatus.PROCESSING:
            raise ConflictError("Payroll record is being paid and cannot be edited", **self.context())
        if notes is not None:
            self.notes = notes
        if other_deductions is not None:
            if other_deductions < 0:
                raise InputError("Other deductions must not be negative", **self.context())
            self.deductions = replace(self.deductions, other_deductions=other_deductions)
        if attendance is not None:
            self.attendance = attendance

    def approve_overtime(self, *, admin_id: int, now: datetime, reason: str = "") -> None:
        self._ensure_mutable()
        if self.overtime_approval.approved_by is not None:
            raise ConflictError("Overtime has already been approved", **self.context())
        if not self.overtime_approval.required:
            raise InputError("Overtime approval is not required for this record", **self.context())
        self.overtime_approval = replace(
            self.overtime_approval,
            approved_by=admin_id,
            approved_date=now,
            reason=reason,
        )

    def sign_off(self, *, admin_id: int, now: datetime) -> None:
        self._ensure_mutable()
        if self.approved_by is not None:
            raise ConflictError("Payroll record has already been signed off", **self.context())
        self.approved_by = admin_id
        self.approved_date = now

    # -------- Payment state machine --------
    def begin_processing(
        self,
        calculator: "PayrollCalculator",
        *,
        payout_destination: Optional[str],
        force_payment: bool = False,
    ) -> None:
        """PENDING/FAILED -> PROCESSING, after checking every payment precondition."""
        self._ensure_mutable()
        if self.payment_status not in (PaymentStatus.PENDING, PaymentStatus.FAILED):
            raise InvalidTransitionError(
                f"Cannot submit a payroll record in status {self.payment_status.value} for payment",
                **self.context(),
            )

        violations: list[str] = []
        if not force_payment:
            if self.overtime_approval.pending:
                violations.append(calculator.overtime_approval_message(self.attendance.overtime_hours))
            for violation in calculator.validate_working_hours(self):
                if violation not in violations:
                    violations.append(violation)
        if violations:
            raise PreconditionError("Payment preconditions not met", violations, **self.context())

        destination = (payout_destination or "").strip()
        if not destination:
            raise PreconditionError(
                "Payment preconditions not met",
                ["Employee has no payout destination on file"],
                **self.context(),
            )
        if self.net_pay <= 0:
            raise PreconditionError("Payment preconditions not met", ["Net pay is zero"], **self.context())

        self._transition(PaymentStatus.PROCESSING)
        self.payment = replace(
            self.payment,
            payout_destination=destination,
            reference_id=None,
            failure_reason=None,
            attempts=self.payment.attempts + 1,
        )

    def record_gateway_reference(self, reference_id: str) -> None:
        if self.payment_status != PaymentStatus.PROCESSING:
            raise InvalidTransitionError("Gateway reference can only be stored while processing", **self.context())
        self.payment = replace(self.payment, reference_id=reference_id)

    def mark_paid(
        self,
        *,
        now: datetime,
        reference_id: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
    ) -> None:
        if self.is_paid:
            raise InvalidTransitionError("Payroll record has already been paid", **self.context())
        self._transition(PaymentStatus.PAID)
        self.payment = replace(
            self.payment,
            reference_id=reference_id or self.payment.reference_id,
            payment_date=now,
            payment_method=payment_method or self.payment.payment_method,
            failure_reason=None,
        )

    def mark_failed(self, *, reason: str, reference_id: Optional[str] = None) -> None:
        self._transition(PaymentStatus.FAILED)
        self.payment = replace(
            self.payment,
            reference_id=reference_id or self.payment.reference_id,
            failure_reason=reason or "Payment failed",
        )

    def cancel(self) -> None:
        self._transition(PaymentStatus.CANCELLED)

    def reinstate(self) -> None:
        self._transition(PaymentStatus.PENDING)

    def to_payslip(self) -> dict:
        return {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "period": {"start_date": self.period_start.isoformat(), "end_date": self.period_end.isoformat()},
            "attendance": {
                "total_hours": str(self.attendance.total_hours),
                "regular_hours": str(self.attendance.regular_hours),
                "overtime_hours": str(self.attendance.overtime_hours),
                "standard_overtime_hours": str(self.overtime_split.standard_hours),
                "premium_overtime_hours": str(self.overtime_split.premium_hours),
                "leave_days": self.leave_days,
            },
            "salary": {
                "basic_salary": str(self.compensation.basic_salary),
                "hourly_rate": str(self.salary.hourly_rate),
                "regular_pay": str(self.salary.regular_pay),
                "standard_overtime_pay": str(self.salary.standard_overtime_pay),
                "premium_overtime_pay": str(self.salary.premium_overtime_pay),
                "total_overtime_pay": str(self.salary.total_overtime_pay),
                "gross_pay": str(self.salary.gross_pay),
            },
            "deductions": {
                "paye": str(self.deductions.paye),
                "health_levy": str(self.deductions.health_levy),
                "social_security": str(self.deductions.social_security),
                "housing_levy": str(self.deductions.housing_levy),
                "other_deductions": str(self.deductions.other_deductions),
                "total_deductions": str(self.deductions.total_deductions),
            },
            "net_pay": str(self.net_pay),
            "payment_status": self.payment_status.value,
            "payment_date": self.payment.payment_date.isoformat() if self.payment.payment_date else None,
            "payment_method": self.payment.payment_method.value,
            "reference_id": self.payment.reference_id,
            "notes": self.notes,
        }
