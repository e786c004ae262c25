from __future__ import annotations

import copy
from datetime import date, datetime
from decimal import Decimal

import pytest

from payroll_engine.attendance.model import AttendanceSummary
from payroll_engine.core.enums import EmployeeStatus, GatewayStatus, PaymentMethod, PaymentStatus, Role
from payroll_engine.core.exceptions import (
    AuthorizationError,
    ConcurrentModificationError,
    ConflictError,
    DuplicateRecordError,
    GatewayError,
    GatewayTimeoutError,
    InputError,
    InvalidTransitionError,
    PreconditionError,
    RecordLockedError,
    RecordNotFoundError,
)
from payroll_engine.employees.model import EmployeeProfile
from payroll_engine.payments.gateway import PayoutResult
from payroll_engine.payroll.service import PayrollService

START = date(2024, 1, 1)
END = date(2024, 1, 31)
NOW = datetime(2024, 2, 1, 9, 0)


class FakePayrollRepo:
    def __init__(self):
        self._next_id = 1
        self._rows = {}

    def insert(self, record):
        if any(r.key == record.key for r in self._rows.values()):
            raise DuplicateRecordError("Payroll already exists for this employee and period", **record.context())
        record.payroll_id = self._next_id
        record.version = 1
        self._next_id += 1
        self._rows[record.payroll_id] = copy.deepcopy(record)
        return record.payroll_id

    def get(self, payroll_id):
        r = self._rows.get(int(payroll_id))
        return copy.deepcopy(r) if r else None

    def update(self, record, *, expected_version):
        stored = self._rows.get(record.payroll_id)
        if not stored or stored.version != expected_version:
            return False
        record.version = expected_version + 1
        self._rows[record.payroll_id] = copy.deepcopy(record)
        return True

    def _filter(self, start_date, end_date, employee_id, status):
        rows = list(self._rows.values())
        if start_date is not None:
            rows = [r for r in rows if r.period_start >= start_date]
        if end_date is not None:
            rows = [r for r in rows if r.period_end <= end_date]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == employee_id]
        if status is not None:
            rows = [r for r in rows if r.payment_status == status]
        return sorted(rows, key=lambda r: r.payroll_id, reverse=True)

    def list_records(self, *, start_date=None, end_date=None, employee_id=None, status=None, offset=0, limit=None):
        rows = self._filter(start_date, end_date, employee_id, status)
        if limit is not None:
            rows = rows[offset : offset + limit]
        return [copy.deepcopy(r) for r in rows]

    def count_records(self, *, start_date=None, end_date=None, employee_id=None, status=None):
        return len(self._filter(start_date, end_date, employee_id, status))

    def stored(self, payroll_id):
        return self._rows[payroll_id]


class StaleWritePayrollRepo(FakePayrollRepo):
    def update(self, record, *, expected_version):
        return False


class FakeDirectory:
    def __init__(self, *profiles):
        self._profiles = {p.employee_id: p for p in profiles}

    def get_profile(self, employee_id):
        return self._profiles.get(int(employee_id))

    def list_active_ids(self):
        return sorted(i for i, p in self._profiles.items() if p.is_active)


class FakeAttendance:
    def __init__(self, overrides=None):
        self._overrides = overrides or {}
        self.calls = []

    def get_summary(self, *, employee_id, start_date, end_date):
        self.calls.append((employee_id, start_date, end_date))
        return self._overrides.get(
            employee_id,
            AttendanceSummary(total_hours=Decimal("160"), regular_hours=Decimal("160"), overtime_hours=Decimal("0")),
        )


class FakeLeave:
    def __init__(self, days=0):
        self._days = days

    def count_leave_days(self, *, employee_id, start_date, end_date):
        return self._days


class BrokenLeave:
    def __init__(self, broken_ids):
        self._broken_ids = set(broken_ids)

    def count_leave_days(self, *, employee_id, start_date, end_date):
        if employee_id in self._broken_ids:
            raise ValueError("bad leave row")
        return 0


class FakeGateway:
    def __init__(self, result=None, error=None):
        self.result = result or PayoutResult(reference_id="po_1", status=GatewayStatus.SUCCEEDED)
        self.error = error
        self.lookup = None
        self.requests = []
        self.retrieved = []

    def create_payout(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result

    def retrieve_payout(self, reference_id):
        self.retrieved.append(reference_id)
        return self.lookup


class ScriptedGateway(FakeGateway):
    """Outcome per payout destination: a PayoutResult or an exception to raise."""

    def __init__(self, outcomes):
        super().__init__()
        self.outcomes = outcomes

    def create_payout(self, request):
        self.requests.append(request)
        outcome = self.outcomes.get(request.destination, self.result)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeNotifier:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def notify(self, *, recipient_id, title, message, type, sender_id=None):
        if self.fail:
            raise RuntimeError("smtp down")
        self.sent.append({"recipient_id": recipient_id, "title": title, "message": message})


def _profile(employee_id=1, salary="32000", status=EmployeeStatus.ACTIVE, destination="acct_1"):
    return EmployeeProfile(
        employee_id=employee_id,
        full_name=f"Employee {employee_id}",
        email=f"e{employee_id}@example.com",
        basic_salary=Decimal(salary),
        payout_destination=destination,
        status=status,
    )


def _overtime(hours):
    hours = Decimal(hours)
    return AttendanceSummary(total_hours=Decimal("160") + hours, regular_hours=Decimal("160"), overtime_hours=hours)


def _service(*profiles, repo=None, attendance=None, gateway=None, notifier=None, leave=None, leave_days=0):
    return PayrollService(
        repo or FakePayrollRepo(),
        FakeDirectory(*(profiles or (_profile(),))),
        attendance or FakeAttendance(),
        gateway or FakeGateway(),
        leave=leave or FakeLeave(leave_days),
        notifier=notifier or FakeNotifier(),
        clock=lambda: NOW,
    )


def _generate(svc, **kwargs):
    return svc.generate_payroll(current_role=Role.ADMIN, period_start=START, period_end=END, admin_id=99, **kwargs)


def test_generate_creates_record_and_notifies_employee():
    notifier = FakeNotifier()
    svc = _service(notifier=notifier, leave_days=2)

    report = _generate(svc)

    assert report.total_employees == 1
    record = report.created[0]
    assert record.payroll_id == 1
    assert record.net_pay == Decimal("26700.00")
    assert record.leave_days == 2
    assert record.payment_status == PaymentStatus.PENDING
    assert notifier.sent[0]["recipient_id"] == 1
    assert "KES 26,700.00" in notifier.sent[0]["message"]


def test_generate_skips_invalid_employees_without_aborting():
    svc = _service(
        _profile(1),
        _profile(2, salary="0"),
        _profile(3, salary="12000"),
    )

    report = _generate(svc, employee_ids=[1, 2, 3, 4])

    assert [r.employee_id for r in report.created] == [1]
    failures = {f.employee_id: f for f in report.failures}
    assert set(failures) == {2, 3, 4}
    assert failures[2].error == "InputError"
    assert "minimum wage" in failures[3].reason
    assert failures[4].error == "RecordNotFoundError"


def test_generate_skips_inactive_and_duplicate_records():
    repo = FakePayrollRepo()
    svc = _service(_profile(1), _profile(2, status=EmployeeStatus.ON_LEAVE), repo=repo)
    _generate(svc)

    again = _generate(svc, employee_ids=[1, 2])

    assert again.created == []
    errors = {f.employee_id: f.error for f in again.failures}
    assert errors == {1: "DuplicateRecordError", 2: "InputError"}
    assert repo.count_records() == 1


def test_generate_reports_malformed_attendance():
    attendance = FakeAttendance({1: AttendanceSummary(Decimal("-1"), Decimal("0"), Decimal("0"))})
    report = _generate(_service(attendance=attendance))

    assert report.created == []
    assert report.failures[0].error == "InputError"


def test_generate_collects_overtime_warnings():
    svc = _service(attendance=FakeAttendance({1: _overtime("50")}))

    report = _generate(svc)

    assert report.created[0].overtime_approval.required is True
    assert report.warnings == {1: ["Overtime hours (50) require management approval"]}


def test_generate_without_overtime_validation_has_no_warnings():
    svc = _service(attendance=FakeAttendance({1: _overtime("50")}))
    report = _generate(svc, options={"validateOvertime": False})
    assert report.warnings == {}


def test_generate_rejects_bad_requests():
    svc = _service()

    with pytest.raises(AuthorizationError):
        svc.generate_payroll(current_role=Role.EMPLOYEE, period_start=START, period_end=END)
    with pytest.raises(InputError):
        svc.generate_payroll(current_role=Role.ADMIN, period_start=END, period_end=START)
    with pytest.raises(InputError):
        _generate(svc, options={"dryRun": True})


def test_generate_without_active_employees():
    svc = _service(_profile(1, status=EmployeeStatus.TERMINATED))
    with pytest.raises(RecordNotFoundError):
        _generate(svc)


def test_generate_with_empty_selection_creates_nothing():
    repo = FakePayrollRepo()
    svc = _service(_profile(1), _profile(2), repo=repo)

    with pytest.raises(RecordNotFoundError):
        _generate(svc, employee_ids=[])
    assert repo.count_records() == 0


def test_generate_reports_unexpected_collaborator_errors():
    svc = _service(_profile(1), _profile(2), leave=BrokenLeave([1]))

    report = _generate(svc)

    assert [r.employee_id for r in report.created] == [2]
    assert report.failures[0].employee_id == 1
    assert report.failures[0].error == "ValueError"
    assert report.failures[0].reason == "bad leave row"


def test_notification_failure_does_not_abort_generation():
    report = _generate(_service(_profile(1), _profile(2), notifier=FakeNotifier(fail=True)))
    assert len(report.created) == 2


def test_submit_payment_pays_through_gateway():
    repo = FakePayrollRepo()
    gateway = FakeGateway()
    svc = _service(repo=repo, gateway=gateway)
    _generate(svc)

    record = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1, admin_id=99)

    assert record.payment_status == PaymentStatus.PAID
    assert record.payment.reference_id == "po_1"
    assert record.payment.payment_date == NOW
    assert repo.stored(1).payment_status == PaymentStatus.PAID

    request = gateway.requests[0]
    assert request.amount == 2670000
    assert request.currency == "kes"
    assert request.destination == "acct_1"
    assert request.idempotency_key == "PAYROLL:1:2024-01-01:2024-01-31:1"
    assert request.metadata["payroll_id"] == "1"


def test_submit_payment_blocked_by_pending_overtime_approval():
    repo = FakePayrollRepo()
    gateway = FakeGateway()
    svc = _service(repo=repo, gateway=gateway, attendance=FakeAttendance({1: _overtime("50")}))
    _generate(svc)

    with pytest.raises(PreconditionError) as exc:
        svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    assert exc.value.violations == ["Overtime hours (50) require management approval"]
    assert exc.value.employee_id == 1
    assert repo.stored(1).payment_status == PaymentStatus.PENDING
    assert gateway.requests == []


def test_approved_or_forced_overtime_can_be_paid():
    svc = _service(_profile(1), _profile(2), attendance=FakeAttendance({1: _overtime("50"), 2: _overtime("50")}))
    _generate(svc)

    svc.approve_overtime(current_role=Role.ADMIN, admin_id=99, payroll_id=1, reason="Stock take")
    approved = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)
    forced = svc.submit_payment(current_role=Role.ADMIN, payroll_id=2, options={"force_payment": True})

    assert approved.overtime_approval.approved_by == 99
    assert approved.payment_status == PaymentStatus.PAID
    assert forced.payment_status == PaymentStatus.PAID


def test_submit_payment_requires_payout_destination():
    svc = _service(_profile(1, destination=None))
    _generate(svc)

    with pytest.raises(PreconditionError) as exc:
        svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)
    assert exc.value.violations == ["Employee has no payout destination on file"]


def test_working_hour_violations_block_payment_without_overtime_validation():
    repo = FakePayrollRepo()
    gateway = FakeGateway()
    long_month = AttendanceSummary(Decimal("260"), Decimal("250"), Decimal("10"))
    svc = _service(repo=repo, gateway=gateway, attendance=FakeAttendance({1: long_month}))
    report = _generate(svc, options={"validateOvertime": False})
    assert report.warnings == {}

    with pytest.raises(PreconditionError) as exc:
        svc.submit_payment(current_role=Role.ADMIN, payroll_id=1, options={"validateOvertime": False})

    assert exc.value.violations == ["Weekly hours (65.0) exceed legal limit of 60 hours"]
    assert repo.stored(1).payment_status == PaymentStatus.PENDING
    assert gateway.requests == []

    forced = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1, options={"forcePayment": True})
    assert forced.payment_status == PaymentStatus.PAID


def test_gateway_rejection_marks_failed_and_retry_uses_new_key():
    repo = FakePayrollRepo()
    gateway = FakeGateway(error=GatewayError("insufficient funds"))
    notifier = FakeNotifier()
    svc = _service(repo=repo, gateway=gateway, notifier=notifier)
    _generate(svc)

    failed = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    assert failed.payment_status == PaymentStatus.FAILED
    assert failed.payment.failure_reason == "insufficient funds"
    assert notifier.sent[-1]["title"] == "Salary Payment Failed"

    gateway.error = None
    paid = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    assert paid.payment_status == PaymentStatus.PAID
    assert paid.payment.attempts == 2
    assert gateway.requests[1].idempotency_key.endswith(":2")


def test_gateway_timeout_leaves_processing_then_reconcile_replays_same_key():
    repo = FakePayrollRepo()
    gateway = FakeGateway(error=GatewayTimeoutError("Payment gateway timed out"))
    svc = _service(repo=repo, gateway=gateway)
    _generate(svc)

    with pytest.raises(GatewayTimeoutError):
        svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)
    assert repo.stored(1).payment_status == PaymentStatus.PROCESSING

    gateway.error = None
    record = svc.reconcile_payment(current_role=Role.ADMIN, payroll_id=1)

    assert record.payment_status == PaymentStatus.PAID
    assert gateway.requests[0].idempotency_key == gateway.requests[1].idempotency_key


def test_pending_payout_is_reconciled_by_reference():
    repo = FakePayrollRepo()
    gateway = FakeGateway(result=PayoutResult(reference_id="po_9", status=GatewayStatus.PENDING))
    svc = _service(repo=repo, gateway=gateway)
    _generate(svc)

    record = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)
    assert record.payment_status == PaymentStatus.PROCESSING
    assert repo.stored(1).payment.reference_id == "po_9"

    gateway.lookup = PayoutResult(reference_id="po_9", status=GatewayStatus.SUCCEEDED)
    record = svc.reconcile_payment(current_role=Role.ADMIN, payroll_id=1)

    assert gateway.retrieved == ["po_9"]
    assert record.payment_status == PaymentStatus.PAID


def test_reconcile_requires_processing_status():
    svc = _service()
    _generate(svc)
    with pytest.raises(InvalidTransitionError):
        svc.reconcile_payment(current_role=Role.ADMIN, payroll_id=1)


def test_update_payment_status_transitions():
    svc = _service()
    _generate(svc)

    with pytest.raises(InputError):
        svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Refunded")
    with pytest.raises(InvalidTransitionError):
        svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Processing")
    with pytest.raises(InvalidTransitionError):
        svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Paid")

    cancelled = svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status=PaymentStatus.CANCELLED)
    assert cancelled.payment_status == PaymentStatus.CANCELLED
    reinstated = svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Pending")
    assert reinstated.payment_status == PaymentStatus.PENDING


def test_marking_paid_twice_is_a_conflict():
    svc = _service(gateway=FakeGateway(result=PayoutResult(reference_id="po_5", status=GatewayStatus.PENDING)))
    _generate(svc)
    svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    paid = svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Paid", reference_id="bank_1")
    assert paid.payment.reference_id == "bank_1"

    with pytest.raises(ConflictError):
        svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Paid")


def test_manual_payment_records_method():
    svc = _service(gateway=FakeGateway(result=PayoutResult(reference_id="po_5", status=GatewayStatus.PENDING)))
    _generate(svc)
    svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    with pytest.raises(InputError):
        svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Paid", payment_method="barter")
    with pytest.raises(InputError):
        svc.update_payment_status(current_role=Role.ADMIN, payroll_id=1, status="Failed", payment_method="cash")

    paid = svc.update_payment_status(
        current_role=Role.ADMIN,
        payroll_id=1,
        status="Paid",
        reference_id="chq_204",
        payment_method=PaymentMethod.CHECK,
    )
    assert paid.payment.payment_method == PaymentMethod.CHECK
    assert paid.payment.reference_id == "chq_204"


def test_gateway_payment_is_recorded_as_gateway_transfer():
    svc = _service()
    _generate(svc)
    record = svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)
    assert record.payment.payment_method == PaymentMethod.GATEWAY_TRANSFER


def test_update_record_recomputes_and_locks_after_payment():
    svc = _service()
    _generate(svc)

    updated = svc.update_record(current_role=Role.ADMIN, payroll_id=1, other_deductions="1000", notes="Advance")
    assert updated.deductions.other_deductions == Decimal("1000.00")
    assert updated.net_pay == Decimal("25700.00")
    assert updated.notes == "Advance"

    with pytest.raises(InputError):
        svc.update_record(current_role=Role.ADMIN, payroll_id=1, other_deductions="-5")

    svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)
    with pytest.raises(RecordLockedError):
        svc.update_record(current_role=Role.ADMIN, payroll_id=1, notes="too late")


def test_sign_off_once():
    svc = _service()
    _generate(svc)

    record = svc.sign_off(current_role=Role.ADMIN, admin_id=99, payroll_id=1)
    assert record.approved_by == 99
    assert record.approved_date == NOW

    with pytest.raises(ConflictError):
        svc.sign_off(current_role=Role.ADMIN, admin_id=99, payroll_id=1)


def test_stale_write_is_rejected():
    svc = _service(repo=StaleWritePayrollRepo())
    _generate(svc)

    with pytest.raises(ConcurrentModificationError):
        svc.sign_off(current_role=Role.ADMIN, admin_id=99, payroll_id=1)


def test_missing_record():
    svc = _service()
    with pytest.raises(RecordNotFoundError):
        svc.sign_off(current_role=Role.ADMIN, admin_id=99, payroll_id=42)


def test_statistics_for_period():
    svc = _service(_profile(1), _profile(2))
    _generate(svc)
    svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    stats = svc.get_statistics(current_role=Role.ADMIN, start_date=START, end_date=END)

    assert stats.total_payrolls == 2
    assert stats.total_gross_pay == Decimal("64000.00")
    assert stats.total_net_pay == Decimal("53400.00")
    assert stats.total_deductions == Decimal("10600.00")
    assert stats.successful_payments == 1
    assert stats.pending_payments == 1
    assert stats.failed_payments == 0


def test_statistics_default_to_current_month():
    svc = _service()
    stats = svc.get_statistics(current_role=Role.ADMIN)
    assert (stats.period_start, stats.period_end) == (date(2024, 2, 1), date(2024, 2, 29))
    assert stats.total_payrolls == 0


def test_history_pagination():
    svc = _service(_profile(1), _profile(2), _profile(3))
    _generate(svc)

    page = svc.list_history(current_role=Role.ADMIN, page=1, limit=2)
    assert [r.payroll_id for r in page.items] == [3, 2]
    assert (page.total, page.total_pages, page.has_next, page.has_prev) == (3, 2, True, False)

    mine = svc.list_my_payrolls(user_id=2)
    assert [r.employee_id for r in mine.items] == [2]

    with pytest.raises(InputError):
        svc.list_history(current_role=Role.ADMIN, limit=0)
    with pytest.raises(InputError):
        svc.list_history(current_role=Role.ADMIN, page=0)


def test_history_filtered_by_status():
    svc = _service(_profile(1), _profile(2))
    _generate(svc)
    svc.submit_payment(current_role=Role.ADMIN, payroll_id=1)

    paid = svc.list_history(current_role=Role.ADMIN, status="Paid")
    pending = svc.list_history(current_role=Role.ADMIN, status=PaymentStatus.PENDING)

    assert [r.payroll_id for r in paid.items] == [1]
    assert paid.total == 1
    assert [r.payroll_id for r in pending.items] == [2]
    with pytest.raises(InputError):
        svc.list_history(current_role=Role.ADMIN, status="Refunded")


def test_payslip_access():
    svc = _service(_profile(1), _profile(2))
    _generate(svc)

    slip = svc.get_payslip(current_role=Role.EMPLOYEE, current_user_id=1, payroll_id=1)
    assert slip["net_pay"] == "26700.00"
    assert svc.get_payslip(current_role=Role.ADMIN, current_user_id=99, payroll_id=2)["employee_id"] == 2

    with pytest.raises(AuthorizationError):
        svc.get_payslip(current_role=Role.EMPLOYEE, current_user_id=2, payroll_id=1)


def test_submit_payments_collects_each_outcome():
    notifier = FakeNotifier()
    gateway = ScriptedGateway(
        {
            "acct_2": GatewayError("card declined"),
            "acct_3": GatewayTimeoutError("Payment gateway timed out"),
        }
    )
    svc = _service(
        _profile(1, destination="acct_1"),
        _profile(2, destination="acct_2"),
        _profile(3, destination="acct_3"),
        _profile(4, destination=None),
        gateway=gateway,
        notifier=notifier,
    )
    _generate(svc)

    report = svc.submit_payments(current_role=Role.ADMIN, payroll_ids=[1, 2, 3, 4, 42], admin_id=99)

    assert [r.payroll_id for r in report.paid] == [1]
    assert report.total_amount_paid == Decimal("26700.00")
    assert [(r.payroll_id, r.payment_status) for r in report.processing] == [(3, PaymentStatus.PROCESSING)]

    failures = {f.payroll_id: f for f in report.failures}
    assert set(failures) == {2, 4, 42}
    assert (failures[2].reason, failures[2].error) == ("card declined", "GatewayError")
    assert failures[4].error == "PreconditionError"
    assert "no payout destination" in failures[4].reason
    assert failures[42].error == "RecordNotFoundError"

    summary = notifier.sent[-1]
    assert (summary["recipient_id"], summary["title"]) == (99, "Payroll Processing Complete")
    assert summary["message"].startswith("Processed 1 successful payments, 3 failed payments")
    assert "KES 26,700.00" in summary["message"]


def test_submit_payments_applies_options_to_every_record():
    svc = _service(_profile(1), _profile(2), attendance=FakeAttendance({1: _overtime("50"), 2: _overtime("50")}))
    _generate(svc)

    blocked = svc.submit_payments(current_role=Role.ADMIN, payroll_ids=[1, 2])
    forced = svc.submit_payments(current_role=Role.ADMIN, payroll_ids=[1, 2], options={"forcePayment": True})

    assert blocked.paid == []
    assert [f.error for f in blocked.failures] == ["PreconditionError", "PreconditionError"]
    assert [r.payroll_id for r in forced.paid] == [1, 2]


def test_submit_payments_rejects_bad_requests():
    svc = _service()
    _generate(svc)

    with pytest.raises(InputError):
        svc.submit_payments(current_role=Role.ADMIN, payroll_ids=[])
    with pytest.raises(AuthorizationError):
        svc.submit_payments(current_role=Role.EMPLOYEE, payroll_ids=[1])
    with pytest.raises(InputError):
        svc.submit_payments(current_role=Role.ADMIN, payroll_ids=[1], options={"dryRun": True})
