from __future__ import annotations

from datetime import date

from ..common.datetime_utils import count_working_days, overlap
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import LeaveSource

APPROVED = "Approved"


class MySQLLeaveSource(LeaveSource):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_leave_days(self, *, employee_id: int, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT start_date, end_date
                FROM leave_requests
                WHERE employee_id=%s AND status=%s AND start_date<=%s AND end_date>=%s
                """,
                (int(employee_id), APPROVED, end_date, start_date),
            )
            rows = fetchall(cur)

        total = 0
        for r in rows:
            clipped = overlap(r["start_date"], r["end_date"], start_date, end_date)
            if clipped:
                total += count_working_days(*clipped)
        return total
