from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.constants import DEFAULT_STANDARD_WORKING_HOURS
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeProfile
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        default_standard_hours: Decimal = DEFAULT_STANDARD_WORKING_HOURS,
    ):
        self._conn_factory = conn_factory
        self._default_standard_hours = default_standard_hours

    def get_profile(self, employee_id: int) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, email, basic_salary,
                       standard_working_hours, payout_destination, employee_status
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return EmployeeProfile(
                employee_id=int(r["employee_id"]),
                full_name=r["full_name"],
                email=r["email"],
                basic_salary=Decimal(r["basic_salary"] or 0),
                standard_working_hours=(
                    Decimal(r["standard_working_hours"])
                    if r["standard_working_hours"] is not None
                    else self._default_standard_hours
                ),
                payout_destination=r.get("payout_destination"),
                status=EmployeeStatus(r["employee_status"]),
            )

    def list_active_ids(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id FROM employees WHERE employee_status=%s ORDER BY employee_id",
                (EmployeeStatus.ACTIVE.value,),
            )
            return [int(r["employee_id"]) for r in fetchall(cur)]
