from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import AttendanceSummary


class AttendanceSource(Protocol):
    def get_summary(self, *, employee_id: int, start_date: date, end_date: date) -> AttendanceSummary:
        """Hours worked in the inclusive date range, aggregated per day."""

        raise NotImplementedError
