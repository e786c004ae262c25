from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

from ..attendance.model import AttendanceSummary
from ..attendance.repository import AttendanceSource
from ..common.datetime_utils import month_bounds, now_local
from ..common.money import ZERO, round_money, to_decimal, to_minor_units
from ..common.validators import require_date_range, require_non_negative
from ..core.constants import DEFAULT_CURRENCY, DEFAULT_HISTORY_LIMIT, DEFAULT_MINIMUM_WAGE, MAX_HISTORY_LIMIT
from ..core.enums import GatewayStatus, PaymentMethod, PaymentStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    ConcurrentModificationError,
    DomainError,
    GatewayError,
    GatewayTimeoutError,
    InputError,
    InvalidTransitionError,
    RecordNotFoundError,
)
from ..employees.repository import EmployeeDirectory
from ..leave.repository import LeaveSource
from ..notifications.notifier import LoggingNotifier, Notifier
from ..payments.gateway import PaymentGateway, PayoutRequest, PayoutResult
from . import overtime
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import CompensationProfile, PayrollRecord
from .options import PayrollOptions
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

OptionsArg = Union[PayrollOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class EmployeeFailure:
    employee_id: int
    reason: str
    error: str


@dataclass(frozen=True)
class GenerationReport:
    period_start: date
    period_end: date
    created: list[PayrollRecord] = field(default_factory=list)
    failures: list[EmployeeFailure] = field(default_factory=list)
    warnings: dict[int, list[str]] = field(default_factory=dict)

    @property
    def total_employees(self) -> int:
        return len(self.created)


@dataclass(frozen=True)
class PaymentFailure:
    payroll_id: int
    reason: str
    error: str


@dataclass(frozen=True)
class PaymentBatchReport:
    """Outcome of a batch payment run.

    `processing` holds payouts the gateway has accepted but not settled yet
    (including timeouts); they are settled later through reconcile_payment.
    """

    paid: list[PayrollRecord] = field(default_factory=list)
    processing: list[PayrollRecord] = field(default_factory=list)
    failures: list[PaymentFailure] = field(default_factory=list)

    @property
    def total_amount_paid(self) -> Decimal:
        return sum((r.net_pay for r in self.paid), ZERO)


@dataclass(frozen=True)
class PayrollStatistics:
    period_start: date
    period_end: date
    total_payrolls: int
    total_gross_pay: Decimal
    total_net_pay: Decimal
    total_deductions: Decimal
    status_counts: dict[PaymentStatus, int]

    @property
    def successful_payments(self) -> int:
        return self.status_counts.get(PaymentStatus.PAID, 0)

    @property
    def pending_payments(self) -> int:
        return self.status_counts.get(PaymentStatus.PENDING, 0) + self.status_counts.get(PaymentStatus.PROCESSING, 0)

    @property
    def failed_payments(self) -> int:
        return self.status_counts.get(PaymentStatus.FAILED, 0)


@dataclass(frozen=True)
class Page:
    items: Sequence[PayrollRecord]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class PayrollService:
    """Payroll use cases: generation, approvals, payment and reporting.

    Collaborators are injected (see container.py). Every write loads the
    record fresh, applies the change through the record's own rules and saves
    with an optimistic version check.
    """

    def __init__(
        self,
        payrolls: PayrollRepository,
        employees: EmployeeDirectory,
        attendance: AttendanceSource,
        gateway: PaymentGateway,
        *,
        leave: Optional[LeaveSource] = None,
        notifier: Optional[Notifier] = None,
        calculator: Optional[PayrollCalculator] = None,
        currency: str = DEFAULT_CURRENCY,
        minimum_wage: Decimal = DEFAULT_MINIMUM_WAGE,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payrolls = payrolls
        self._employees = employees
        self._attendance = attendance
        self._gateway = gateway
        self._leave = leave
        self._notifier = notifier or LoggingNotifier()
        self._calculator = calculator or StandardPayrollCalculator()
        self._currency = currency
        self._minimum_wage = to_decimal(minimum_wage, "minimum_wage")
        self._clock = clock

    # -------- Generation --------
    def generate_payroll(
        self,
        *,
        current_role: Role,
        period_start: date,
        period_end: date,
        employee_ids: Optional[Iterable[int]] = None,
        options: OptionsArg = None,
        admin_id: Optional[int] = None,
    ) -> GenerationReport:
        self._require_admin(current_role)
        require_date_range(period_start, period_end)
        opts = self._options(options)

        if employee_ids is not None:
            ids = [int(i) for i in employee_ids]
        else:
            ids = list(self._employees.list_active_ids())
        if not ids:
            raise RecordNotFoundError("No active employees found", period_start=period_start, period_end=period_end)

        report = GenerationReport(period_start=period_start, period_end=period_end)
        for employee_id in ids:
            try:
                record = self._build_record(employee_id, period_start, period_end)
            except DomainError as e:
                logger.warning("payroll skipped for employee %s: %s", employee_id, e)
                report.failures.append(EmployeeFailure(employee_id, e.message, type(e).__name__))
                continue
            except Exception as e:
                logger.exception("payroll for employee %s could not be built", employee_id)
                report.failures.append(EmployeeFailure(employee_id, str(e) or type(e).__name__, type(e).__name__))
                continue

            # Storage errors other than domain conflicts abort the run.
            try:
                self._payrolls.insert(record)
            except DomainError as e:
                logger.warning("payroll skipped for employee %s: %s", employee_id, e)
                report.failures.append(EmployeeFailure(employee_id, e.message, type(e).__name__))
                continue

            report.created.append(record)
            if opts.validate_overtime:
                violations = record.validate_working_hours(self._calculator)
                if violations:
                    report.warnings[employee_id] = violations

            self._notify(
                recipient_id=employee_id,
                sender_id=admin_id,
                title="Payroll Generated",
                message=(
                    f"Your payroll for {period_start.isoformat()} to {period_end.isoformat()} has been generated: "
                    f"net pay {self._currency.upper()} {record.net_pay:,.2f}."
                ),
                type="payroll",
            )

        logger.info(
            "payroll generated for %s..%s: %d created, %d skipped, %d with warnings",
            period_start,
            period_end,
            len(report.created),
            len(report.failures),
            len(report.warnings),
        )
        return report

    def _build_record(self, employee_id: int, period_start: date, period_end: date) -> PayrollRecord:
        context = {"employee_id": employee_id, "period_start": period_start, "period_end": period_end}

        profile = self._employees.get_profile(employee_id)
        if not profile:
            raise RecordNotFoundError("Employee not found", **context)
        if not profile.is_active:
            raise InputError(f"Employee is not active (status {profile.status.value})", **context)

        basic_salary = self._contextual(to_decimal, profile.basic_salary, "basic_salary", context=context)
        if basic_salary <= 0:
            raise InputError("Employee has no positive basic salary", **context)
        if basic_salary < self._minimum_wage:
            raise InputError(f"Basic salary {basic_salary} is below the minimum wage {self._minimum_wage}", **context)
        standard_hours = self._contextual(
            to_decimal, profile.standard_working_hours, "standard_working_hours", context=context
        )
        if standard_hours <= 0:
            raise InputError("Standard working hours must be positive", **context)

        raw = self._attendance.get_summary(employee_id=employee_id, start_date=period_start, end_date=period_end)
        attendance = self._contextual(self._checked_attendance, raw, context=context)
        leave_days = 0
        if self._leave is not None:
            leave_days = self._leave.count_leave_days(
                employee_id=employee_id, start_date=period_start, end_date=period_end
            )

        now = self._clock()
        record = PayrollRecord(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            compensation=CompensationProfile(basic_salary=basic_salary, standard_working_hours=standard_hours),
            attendance=attendance,
            leave_days=int(leave_days),
            created_at=now,
            updated_at=now,
        )
        return record.recompute(self._calculator)

    @staticmethod
    def _checked_attendance(summary: AttendanceSummary) -> AttendanceSummary:
        return AttendanceSummary.of(
            total_hours=summary.total_hours,
            regular_hours=summary.regular_hours,
            overtime_hours=summary.overtime_hours,
        )

    @staticmethod
    def _contextual(fn, *args, context: dict):
        """Call `fn`, re-raising its InputError with the employee/period attached."""
        try:
            return fn(*args)
        except InputError as e:
            raise InputError(e.message, **context) from e

    # -------- Administrative actions --------
    def approve_overtime(
        self,
        *,
        current_role: Role,
        admin_id: int,
        payroll_id: int,
        reason: str = "",
    ) -> PayrollRecord:
        self._require_admin(current_role)
        record = self._load(payroll_id)
        expected = record.version

        record.approve_overtime(admin_id=int(admin_id), now=self._clock(), reason=(reason or "").strip())
        self._save(record, expected)

        logger.info("overtime approved for payroll %s by %s", record.payroll_id, admin_id)
        self._notify(
            recipient_id=record.employee_id,
            sender_id=admin_id,
            title="Overtime Approved",
            message=(
                f"Your overtime of {record.attendance.overtime_hours} hours for "
                f"{record.period_start.isoformat()} to {record.period_end.isoformat()} has been approved."
            ),
            type="payroll",
        )
        return record

    def update_record(
        self,
        *,
        current_role: Role,
        payroll_id: int,
        notes: Optional[str] = None,
        other_deductions=None,
        attendance: Optional[AttendanceSummary] = None,
    ) -> PayrollRecord:
        self._require_admin(current_role)
        record = self._load(payroll_id)
        expected = record.version
        context = record.context()

        other = None
        if other_deductions is not None:
            other = round_money(self._contextual(require_non_negative, other_deductions, "other_deductions", context=context))
        if attendance is not None:
            attendance = self._contextual(self._checked_attendance, attendance, context=context)

        record.apply_edits(notes=notes, other_deductions=other, attendance=attendance)
        record.recompute(self._calculator)
        self._save(record, expected)

        logger.info("payroll %s updated and recomputed (net pay %s)", record.payroll_id, record.net_pay)
        return record

    def sign_off(self, *, current_role: Role, admin_id: int, payroll_id: int) -> PayrollRecord:
        self._require_admin(current_role)
        record = self._load(payroll_id)
        expected = record.version

        record.sign_off(admin_id=int(admin_id), now=self._clock())
        self._save(record, expected)
        logger.info("payroll %s signed off by %s", record.payroll_id, admin_id)
        return record

    # -------- Payment --------
    def submit_payment(
        self,
        *,
        current_role: Role,
        payroll_id: int,
        options: OptionsArg = None,
        admin_id: Optional[int] = None,
    ) -> PayrollRecord:
        """Move the record to Processing, then ask the gateway to pay it.

        Returns the record in its resulting state (Paid, Failed, or Processing
        when the gateway reports the payout as pending). A gateway timeout
        leaves the record in Processing and re-raises GatewayTimeoutError.
        """
        self._require_admin(current_role)
        opts = self._options(options)
        record = self._load(payroll_id)
        expected = record.version

        profile = self._employees.get_profile(record.employee_id)
        record.begin_processing(
            self._calculator,
            payout_destination=profile.payout_destination if profile else None,
            force_payment=opts.force_payment,
        )
        self._save(record, expected)

        if opts.force_payment:
            logger.warning("payroll %s submitted with force_payment by %s", record.payroll_id, admin_id)
        logger.info("payroll %s processing: %s %s", record.payroll_id, self._currency.upper(), record.net_pay)

        try:
            result = self._gateway.create_payout(self._payout_request(record))
        except GatewayTimeoutError:
            logger.warning("payroll %s left in Processing pending reconciliation", record.payroll_id)
            raise
        except GatewayError as e:
            logger.error("payroll %s payout rejected: %s", record.payroll_id, e)
            result = PayoutResult(reference_id="", status=GatewayStatus.FAILED, failure_reason=e.message)

        return self._apply_gateway_result(record, result, sender_id=admin_id)

    def submit_payments(
        self,
        *,
        current_role: Role,
        payroll_ids: Iterable[int],
        options: OptionsArg = None,
        admin_id: Optional[int] = None,
    ) -> PaymentBatchReport:
        """Submit several records for payment; one record's failure never stops the rest."""
        self._require_admin(current_role)
        opts = self._options(options)
        ids = [int(i) for i in payroll_ids]
        if not ids:
            raise InputError("No payroll records selected for payment")

        report = PaymentBatchReport()
        for payroll_id in ids:
            try:
                record = self.submit_payment(
                    current_role=current_role,
                    payroll_id=payroll_id,
                    options=opts,
                    admin_id=admin_id,
                )
            except GatewayTimeoutError:
                logger.warning("payroll %s payout timed out; reconcile later", payroll_id)
                report.processing.append(self._load(payroll_id))
                continue
            except DomainError as e:
                logger.warning("payroll %s not paid: %s", payroll_id, e)
                report.failures.append(PaymentFailure(payroll_id, str(e), type(e).__name__))
                continue

            if record.payment_status == PaymentStatus.PAID:
                report.paid.append(record)
            elif record.payment_status == PaymentStatus.FAILED:
                reason = record.payment.failure_reason or "Payment failed"
                report.failures.append(PaymentFailure(payroll_id, reason, GatewayError.__name__))
            else:
                report.processing.append(record)

        logger.info(
            "payment batch: %d paid, %d processing, %d failed, %s %s paid",
            len(report.paid),
            len(report.processing),
            len(report.failures),
            self._currency.upper(),
            report.total_amount_paid,
        )
        if admin_id is not None:
            self._notify(
                recipient_id=admin_id,
                title="Payroll Processing Complete",
                message=(
                    f"Processed {len(report.paid)} successful payments, {len(report.failures)} failed payments, "
                    f"{len(report.processing)} awaiting the gateway. "
                    f"Total paid {self._currency.upper()} {report.total_amount_paid:,.2f}."
                ),
                type="system",
            )
        return report

    def reconcile_payment(self, *, current_role: Role, payroll_id: int) -> PayrollRecord:
        """Ask the gateway for the current outcome of a Processing payout.

        Without a gateway reference the first payout request is replayed
        with the same idempotency key.
        """
        self._require_admin(current_role)
        record = self._load(payroll_id)
        if record.payment_status != PaymentStatus.PROCESSING:
            raise InvalidTransitionError(
                f"Only payments in Processing can be reconciled (status {record.payment_status.value})",
                **record.context(),
            )

        if record.payment.reference_id:
            result = self._gateway.retrieve_payout(record.payment.reference_id)
        else:
            result = self._gateway.create_payout(self._payout_request(record))
        return self._apply_gateway_result(record, result)

    def update_payment_status(
        self,
        *,
        current_role: Role,
        payroll_id: int,
        status: Union[PaymentStatus, str],
        reference_id: Optional[str] = None,
        reason: str = "",
        payment_method: Union[PaymentMethod, str, None] = None,
        admin_id: Optional[int] = None,
    ) -> PayrollRecord:
        """Administrative status change. `payment_method` applies only when marking Paid."""
        self._require_admin(current_role)
        try:
            target = PaymentStatus(status)
        except ValueError:
            raise InputError(f"Invalid payment status: {status!r}")
        method = None
        if payment_method is not None:
            try:
                method = PaymentMethod(payment_method)
            except ValueError:
                raise InputError(f"Invalid payment method: {payment_method!r}")
            if target != PaymentStatus.PAID:
                raise InputError("A payment method can only be given when marking a payment as Paid")

        record = self._load(payroll_id)
        expected = record.version

        if target == PaymentStatus.PAID:
            record.mark_paid(now=self._clock(), reference_id=reference_id, payment_method=method)
        elif target == PaymentStatus.FAILED:
            record.mark_failed(reason=reason or "Marked as failed by administrator", reference_id=reference_id)
        elif target == PaymentStatus.CANCELLED:
            record.cancel()
        elif target == PaymentStatus.PENDING:
            record.reinstate()
        else:
            raise InvalidTransitionError("Use submit_payment to start processing a payment", **record.context())
        self._save(record, expected)

        logger.info("payroll %s payment status set to %s", record.payroll_id, target.value)
        self._notify(
            recipient_id=record.employee_id,
            sender_id=admin_id,
            title="Payment Status Updated",
            message=f"Your salary payment status has been updated to: {target.value}",
            type="payroll",
        )
        return record

    def _payout_request(self, record: PayrollRecord) -> PayoutRequest:
        period = f"{record.period_start.isoformat()} to {record.period_end.isoformat()}"
        return PayoutRequest(
            amount=to_minor_units(record.net_pay),
            currency=self._currency,
            destination=record.payment.payout_destination or "",
            idempotency_key=record.idempotency_key,
            description=f"Salary Payment - {period}",
            metadata={
                "payroll_id": str(record.payroll_id),
                "employee_id": str(record.employee_id),
                "payroll_period": period,
                "payment_type": "salary",
            },
        )

    def _apply_gateway_result(
        self,
        record: PayrollRecord,
        result: PayoutResult,
        *,
        sender_id: Optional[int] = None,
    ) -> PayrollRecord:
        try:
            self._apply_and_save(record, result)
        except ConcurrentModificationError:
            # Someone else wrote in between (e.g. a webhook status update); retry on fresh state.
            record = self._load(record.payroll_id)
            self._apply_and_save(record, result)

        period = f"{record.period_start.isoformat()} to {record.period_end.isoformat()}"
        if record.payment_status == PaymentStatus.PAID:
            logger.info("payroll %s paid (reference %s)", record.payroll_id, record.payment.reference_id)
            self._notify(
                recipient_id=record.employee_id,
                sender_id=sender_id,
                title="Salary Payment Processed",
                message=(
                    f"Your salary of {self._currency.upper()} {record.net_pay:,.2f} for the period {period} "
                    "has been processed successfully."
                ),
                type="payroll",
            )
        elif record.payment_status == PaymentStatus.FAILED:
            logger.warning("payroll %s payment failed: %s", record.payroll_id, record.payment.failure_reason)
            self._notify(
                recipient_id=record.employee_id,
                sender_id=sender_id,
                title="Salary Payment Failed",
                message=f"Your salary payment for the period {period} could not be completed.",
                type="payroll",
            )
        else:
            logger.info("payroll %s payout pending at gateway (reference %s)", record.payroll_id, result.reference_id)
        return record

    def _apply_and_save(self, record: PayrollRecord, result: PayoutResult) -> None:
        expected = record.version
        reference_id = result.reference_id or None
        if result.status == GatewayStatus.SUCCEEDED:
            record.mark_paid(
                now=self._clock(), reference_id=reference_id, payment_method=PaymentMethod.GATEWAY_TRANSFER
            )
        elif result.status == GatewayStatus.FAILED:
            record.mark_failed(reason=result.failure_reason or "Payment failed at gateway", reference_id=reference_id)
        else:
            if reference_id is None:
                return
            record.record_gateway_reference(reference_id)
        self._save(record, expected)

    # -------- Reporting --------
    def get_statistics(
        self,
        *,
        current_role: Role,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> PayrollStatistics:
        """Totals for records whose period lies in the range (default: current month)."""
        self._require_admin(current_role)
        if start_date is None or end_date is None:
            today = self._clock().date()
            start_date, end_date = month_bounds(today.year, today.month)

        records = self._payrolls.list_records(start_date=start_date, end_date=end_date)
        counts = {status: 0 for status in PaymentStatus}
        gross = net = deductions = ZERO
        for r in records:
            counts[r.payment_status] += 1
            gross += r.salary.gross_pay
            net += r.net_pay
            deductions += r.deductions.total_deductions

        return PayrollStatistics(
            period_start=start_date,
            period_end=end_date,
            total_payrolls=len(records),
            total_gross_pay=gross,
            total_net_pay=net,
            total_deductions=deductions,
            status_counts=counts,
        )

    def list_history(
        self,
        *,
        current_role: Role,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Union[PaymentStatus, str, None] = None,
        page: int = 1,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Page:
        self._require_admin(current_role)
        if status is not None:
            try:
                status = PaymentStatus(status)
            except ValueError:
                raise InputError(f"Invalid payment status: {status!r}")
        return self._page(
            start_date=start_date,
            end_date=end_date,
            employee_id=employee_id,
            status=status,
            page=page,
            limit=limit,
        )

    def list_my_payrolls(self, *, user_id: int, page: int = 1, limit: int = DEFAULT_HISTORY_LIMIT) -> Page:
        return self._page(employee_id=int(user_id), page=page, limit=limit)

    def get_payslip(self, *, current_role: Role, current_user_id: int, payroll_id: int) -> dict:
        record = self._load(payroll_id)
        if current_role != Role.ADMIN and record.employee_id != int(current_user_id):
            raise AuthorizationError("Access denied")
        return record.to_payslip()

    def overtime_policy(self) -> dict:
        return overtime.overtime_policy()

    def _page(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        page: int,
        limit: int,
    ) -> Page:
        page = int(page)
        limit = int(limit)
        if page < 1:
            raise InputError("Page must be at least 1")
        if limit < 1 or limit > MAX_HISTORY_LIMIT:
            raise InputError(f"Limit must be between 1 and {MAX_HISTORY_LIMIT}")

        filters = {"start_date": start_date, "end_date": end_date, "employee_id": employee_id, "status": status}
        items = self._payrolls.list_records(**filters, offset=(page - 1) * limit, limit=limit)
        total = self._payrolls.count_records(**filters)
        return Page(items=items, page=page, limit=limit, total=total)

    # -------- Helpers --------
    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage payroll")

    @staticmethod
    def _options(options: OptionsArg) -> PayrollOptions:
        if isinstance(options, PayrollOptions):
            return options
        return PayrollOptions.from_mapping(options)

    def _load(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get(int(payroll_id))
        if not record:
            raise RecordNotFoundError(f"Payroll record {payroll_id} not found")
        return record

    def _save(self, record: PayrollRecord, expected_version: int) -> None:
        record.updated_at = self._clock()
        if not self._payrolls.update(record, expected_version=expected_version):
            raise ConcurrentModificationError(
                "Payroll record was modified concurrently; reload and retry",
                **record.context(),
            )

    def _notify(self, **kwargs) -> None:
        try:
            self._notifier.notify(**kwargs)
        except Exception:
            logger.exception("notification %r to %s failed", kwargs.get("title"), kwargs.get("recipient_id"))
