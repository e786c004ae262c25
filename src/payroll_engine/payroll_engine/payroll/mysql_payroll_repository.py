from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..attendance.model import AttendanceSummary
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import (
    CompensationProfile,
    Deductions,
    OvertimeApproval,
    OvertimeSplit,
    PaymentDetails,
    PayrollRecord,
    SalaryBreakdown,
)
from .repository import PayrollRepository

# Every mutable column, in the order used by INSERT and UPDATE.
_COLUMNS = (
    "basic_salary",
    "standard_working_hours",
    "total_hours",
    "regular_hours",
    "overtime_hours",
    "standard_overtime_hours",
    "premium_overtime_hours",
    "hourly_rate",
    "standard_overtime_rate",
    "premium_overtime_rate",
    "regular_pay",
    "standard_overtime_pay",
    "premium_overtime_pay",
    "total_overtime_pay",
    "gross_pay",
    "paye",
    "health_levy",
    "social_security",
    "housing_levy",
    "other_deductions",
    "total_deductions",
    "net_pay",
    "payment_status",
    "payment_reference",
    "payment_date",
    "payment_method",
    "payout_destination",
    "failure_reason",
    "payment_attempts",
    "overtime_approval_required",
    "overtime_approved_by",
    "overtime_approved_date",
    "overtime_approval_reason",
    "approved_by",
    "approved_date",
    "leave_days",
    "notes",
)

_SELECT = f"""
    SELECT payroll_id, employee_id, period_start, period_end, version, created_at, updated_at,
           {", ".join(_COLUMNS)}
    FROM payroll_records
"""


def _values(record: PayrollRecord) -> tuple:
    return (
        record.compensation.basic_salary,
        record.compensation.standard_working_hours,
        record.attendance.total_hours,
        record.attendance.regular_hours,
        record.attendance.overtime_hours,
        record.overtime_split.standard_hours,
        record.overtime_split.premium_hours,
        record.salary.hourly_rate,
        record.salary.standard_overtime_rate,
        record.salary.premium_overtime_rate,
        record.salary.regular_pay,
        record.salary.standard_overtime_pay,
        record.salary.premium_overtime_pay,
        record.salary.total_overtime_pay,
        record.salary.gross_pay,
        record.deductions.paye,
        record.deductions.health_levy,
        record.deductions.social_security,
        record.deductions.housing_levy,
        record.deductions.other_deductions,
        record.deductions.total_deductions,
        record.net_pay,
        record.payment_status.value,
        record.payment.reference_id,
        record.payment.payment_date,
        record.payment.payment_method.value,
        record.payment.payout_destination,
        record.payment.failure_reason,
        int(record.payment.attempts),
        int(record.overtime_approval.required),
        record.overtime_approval.approved_by,
        record.overtime_approval.approved_date,
        record.overtime_approval.reason,
        record.approved_by,
        record.approved_date,
        int(record.leave_days),
        record.notes,
    )


def _dec(value: Any) -> Decimal:
    return Decimal(value if value is not None else 0)


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        period_start=r["period_start"],
        period_end=r["period_end"],
        compensation=CompensationProfile(
            basic_salary=_dec(r["basic_salary"]),
            standard_working_hours=_dec(r["standard_working_hours"]),
        ),
        attendance=AttendanceSummary(
            total_hours=_dec(r["total_hours"]),
            regular_hours=_dec(r["regular_hours"]),
            overtime_hours=_dec(r["overtime_hours"]),
        ),
        overtime_split=OvertimeSplit(
            standard_hours=_dec(r["standard_overtime_hours"]),
            premium_hours=_dec(r["premium_overtime_hours"]),
        ),
        salary=SalaryBreakdown(
            hourly_rate=_dec(r["hourly_rate"]),
            standard_overtime_rate=_dec(r["standard_overtime_rate"]),
            premium_overtime_rate=_dec(r["premium_overtime_rate"]),
            regular_pay=_dec(r["regular_pay"]),
            standard_overtime_pay=_dec(r["standard_overtime_pay"]),
            premium_overtime_pay=_dec(r["premium_overtime_pay"]),
            total_overtime_pay=_dec(r["total_overtime_pay"]),
            gross_pay=_dec(r["gross_pay"]),
        ),
        deductions=Deductions(
            paye=_dec(r["paye"]),
            health_levy=_dec(r["health_levy"]),
            social_security=_dec(r["social_security"]),
            housing_levy=_dec(r["housing_levy"]),
            other_deductions=_dec(r["other_deductions"]),
            total_deductions=_dec(r["total_deductions"]),
        ),
        net_pay=_dec(r["net_pay"]),
        payment_status=PaymentStatus(r["payment_status"]),
        payment=PaymentDetails(
            reference_id=r.get("payment_reference"),
            payment_date=r.get("payment_date"),
            payment_method=PaymentMethod(r["payment_method"]),
            payout_destination=r.get("payout_destination"),
            failure_reason=r.get("failure_reason"),
            attempts=int(r["payment_attempts"] or 0),
        ),
        overtime_approval=OvertimeApproval(
            required=bool(r["overtime_approval_required"]),
            approved_by=r.get("overtime_approved_by"),
            approved_date=r.get("overtime_approved_date"),
            reason=r.get("overtime_approval_reason") or "",
        ),
        approved_by=r.get("approved_by"),
        approved_date=r.get("approved_date"),
        leave_days=int(r["leave_days"] or 0),
        notes=r.get("notes") or "",
        version=int(r["version"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _where(
    *,
    start_date: Optional[date],
    end_date: Optional[date],
    employee_id: Optional[int],
    status: Optional[PaymentStatus],
) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []

    if start_date is not None:
        clauses.append("period_start>=%s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("period_end<=%s")
        params.append(end_date)
    if employee_id is not None:
        clauses.append("employee_id=%s")
        params.append(int(employee_id))
    if status is not None:
        clauses.append("payment_status=%s")
        params.append(status.value)

    return " AND ".join(clauses), params


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, record: PayrollRecord) -> int:
        placeholders = ",".join(["%s"] * (len(_COLUMNS) + 4))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO payroll_records(employee_id, period_start, period_end, version, {", ".join(_COLUMNS)})
                    VALUES({placeholders})
                    """,
                    (int(record.employee_id), record.period_start, record.period_end, 1) + _values(record),
                )
                payroll_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError(
                    "Payroll already exists for this employee and period",
                    **record.context(),
                ) from e
            raise

        record.payroll_id = payroll_id
        record.version = 1
        return payroll_id

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def update(self, record: PayrollRecord, *, expected_version: int) -> bool:
        assignments = ", ".join(f"{col}=%s" for col in _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE payroll_records
                SET {assignments}, version=version+1
                WHERE payroll_id=%s AND version=%s
                """,
                _values(record) + (int(record.payroll_id), int(expected_version)),
            )
            updated = cur.rowcount > 0

        if updated:
            record.version = int(expected_version) + 1
        return updated

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        where, params = _where(start_date=start_date, end_date=end_date, employee_id=employee_id, status=status)
        sql = _SELECT + f" WHERE {where} ORDER BY created_at DESC, payroll_id DESC"
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params += [int(limit), int(offset)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def count_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
    ) -> int:
        where, params = _where(start_date=start_date, end_date=end_date, employee_id=employee_id, status=status)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM payroll_records WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
