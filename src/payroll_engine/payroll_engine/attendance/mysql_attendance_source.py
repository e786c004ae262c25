from __future__ import annotations

from datetime import date
from decimal import Decimal

from ..core.constants import DEFAULT_STANDARD_DAILY_HOURS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceSummary, DailyAttendance
from .repository import AttendanceSource
from .summary import summarize_attendance


class MySQLAttendanceSource(AttendanceSource):
    def __init__(self, conn_factory: DatabaseConnection, *, standard_daily_hours: Decimal = DEFAULT_STANDARD_DAILY_HOURS):
        self._conn_factory = conn_factory
        self._standard_daily_hours = standard_daily_hours

    def get_summary(self, *, employee_id: int, start_date: date, end_date: date) -> AttendanceSummary:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.employee_id, a.work_date, a.check_in_time, a.check_out_time,
                       COALESCE(s.break_minutes, 0) AS break_minutes
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                LEFT JOIN shifts s ON s.shift_id = e.shift_id
                WHERE a.employee_id=%s AND a.work_date BETWEEN %s AND %s
                ORDER BY a.work_date
                """,
                (int(employee_id), start_date, end_date),
            )
            rows = [
                DailyAttendance(
                    user_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    check_in_time=r["check_in_time"],
                    check_out_time=r.get("check_out_time"),
                    break_minutes=int(r["break_minutes"] or 0),
                )
                for r in fetchall(cur)
            ]
        return summarize_attendance(rows, standard_daily_hours=self._standard_daily_hours)
