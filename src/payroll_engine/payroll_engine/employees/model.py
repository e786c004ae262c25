from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_STANDARD_WORKING_HOURS
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: what the payroll core needs to know about an employee.

    Note: Plain data object, owned by the employee directory (no DB code here).
    """

    employee_id: int
    full_name: str
    email: str
    basic_salary: Decimal
    standard_working_hours: Decimal = DEFAULT_STANDARD_WORKING_HOURS
    payout_destination: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
