from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..common.validators import require_non_negative


@dataclass(frozen=True)
class DailyAttendance:
    """One day of attendance as recorded by check-in/check-out."""

    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    break_minutes: int = 0


@dataclass(frozen=True)
class AttendanceSummary:
    """Hours worked by one employee over one pay period.

    Built by the attendance source; the payroll core never reads individual
    attendance events.
    """

    total_hours: Decimal = ZERO
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO

    @classmethod
    def of(cls, *, total_hours, regular_hours, overtime_hours) -> "AttendanceSummary":
        """Build a summary from raw numbers, rejecting malformed input."""
        return cls(
            total_hours=require_non_negative(total_hours, "total_hours"),
            regular_hours=require_non_negative(regular_hours, "regular_hours"),
            overtime_hours=require_non_negative(overtime_hours, "overtime_hours"),
        )
