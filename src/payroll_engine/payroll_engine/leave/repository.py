from __future__ import annotations

from datetime import date
from typing import Protocol


class LeaveSource(Protocol):
    def count_leave_days(self, *, employee_id: int, start_date: date, end_date: date) -> int:
        """Approved leave working days overlapping the period (informational only)."""

        raise NotImplementedError
