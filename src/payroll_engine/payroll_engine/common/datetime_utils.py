from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def count_working_days(start: date, end: date) -> int:
    """Monday-Friday days in the inclusive range [start, end]."""
    if end < start:
        return 0
    days = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            days += 1
        current += timedelta(days=1)
    return days


def overlap(start: date, end: date, other_start: date, other_end: date) -> Optional[tuple[date, date]]:
    lo = max(start, other_start)
    hi = min(end, other_end)
    if hi < lo:
        return None
    return lo, hi


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
