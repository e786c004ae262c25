from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_attendance_source import MySQLAttendanceSource
from .common.money import to_decimal
from .common.validators import require_non_empty
from .core.constants import DEFAULT_CURRENCY, DEFAULT_MINIMUM_WAGE, DEFAULT_STANDARD_WORKING_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .leave.mysql_leave_source import MySQLLeaveSource
from .notifications.mysql_notifier import MySQLNotifier
from .notifications.notifier import LoggingNotifier, Notifier
from .payments.http_gateway import HttpPaymentGateway
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    payroll_repo: MySQLPayrollRepository
    employee_directory: MySQLEmployeeDirectory
    attendance_source: MySQLAttendanceSource
    leave_source: MySQLLeaveSource
    gateway: HttpPaymentGateway
    notifier: Notifier

    payroll_service: PayrollService

    def close(self) -> None:
        self.gateway.close()


def build_container(
    *,
    db_config: Mapping,
    gateway_config: Mapping,
    currency: str = DEFAULT_CURRENCY,
    minimum_wage=DEFAULT_MINIMUM_WAGE,
    standard_working_hours=DEFAULT_STANDARD_WORKING_HOURS,
    store_notifications: bool = True,
    notifier: Optional[Notifier] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    gateway = HttpPaymentGateway(
        base_url=require_non_empty(str(gateway_config.get("base_url") or ""), "PAYMENT_GATEWAY base_url"),
        api_key=str(gateway_config.get("api_key", "")),
        timeout=float(gateway_config.get("timeout", 30.0)),
    )

    payroll_repo = MySQLPayrollRepository(conn)
    employee_directory = MySQLEmployeeDirectory(
        conn,
        default_standard_hours=to_decimal(standard_working_hours, "STANDARD_WORKING_HOURS"),
    )
    attendance_source = MySQLAttendanceSource(conn)
    leave_source = MySQLLeaveSource(conn)
    if notifier is None:
        notifier = MySQLNotifier(conn) if store_notifications else LoggingNotifier()

    payroll_service = PayrollService(
        payroll_repo,
        employee_directory,
        attendance_source,
        gateway,
        leave=leave_source,
        notifier=notifier,
        calculator=StandardPayrollCalculator(),
        currency=str(currency).lower(),
        minimum_wage=to_decimal(minimum_wage, "MINIMUM_WAGE"),
    )

    return Container(
        conn=conn,
        payroll_repo=payroll_repo,
        employee_directory=employee_directory,
        attendance_source=attendance_source,
        leave_source=leave_source,
        gateway=gateway,
        notifier=notifier,
        payroll_service=payroll_service,
    )
