from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..common.money import round_money
from ..core.constants import DEFAULT_STANDARD_DAILY_HOURS
from .model import AttendanceSummary, DailyAttendance

_MINUTES_PER_HOUR = Decimal("60")


def worked_minutes(row: DailyAttendance) -> int:
    """(out - in) - break_minutes, not below 0. No check-out counts as 0."""
    if not row.check_out_time:
        return 0
    minutes = int((row.check_out_time - row.check_in_time).total_seconds() // 60)
    minutes -= int(row.break_minutes or 0)
    return max(minutes, 0)


def summarize_attendance(
    rows: Iterable[DailyAttendance],
    *,
    standard_daily_hours: Decimal = DEFAULT_STANDARD_DAILY_HOURS,
) -> AttendanceSummary:
    """Aggregate daily records: minutes beyond the standard day count as overtime."""
    standard_daily_minutes = int(standard_daily_hours * _MINUTES_PER_HOUR)
    regular_minutes = 0
    overtime_minutes = 0

    for row in rows:
        minutes = worked_minutes(row)
        day_regular = min(minutes, standard_daily_minutes)
        regular_minutes += day_regular
        overtime_minutes += minutes - day_regular

    regular = round_money(Decimal(regular_minutes) / _MINUTES_PER_HOUR)
    overtime = round_money(Decimal(overtime_minutes) / _MINUTES_PER_HOUR)
    return AttendanceSummary(total_hours=regular + overtime, regular_hours=regular, overtime_hours=overtime)
