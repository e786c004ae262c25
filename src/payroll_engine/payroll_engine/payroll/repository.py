from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import PayrollRecord


class PayrollRepository(Protocol):
    """Persistence for payroll records.

    Implementations must enforce (employee_id, period_start, period_end)
    uniqueness atomically and serialize writes per record via `version`.
    """

    def insert(self, record: PayrollRecord) -> int:
        """Insert if absent; raise DuplicateRecordError if the key exists.

        Sets `payroll_id` and `version` on the record and returns the id.
        """

        raise NotImplementedError

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def update(self, record: PayrollRecord, *, expected_version: int) -> bool:
        """Save the record only if its stored version still equals `expected_version`.

        On success the record's `version` is incremented.
        """

        raise NotImplementedError

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        """Records whose period lies within [start_date, end_date], newest first."""

        raise NotImplementedError

    def count_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
    ) -> int:
        raise NotImplementedError
