from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeProfile


class EmployeeDirectory(Protocol):
    """Repository interface for employee pay data.

    Note (DIP): the payroll service depends on this interface, not on a concrete DB.
    """

    def get_profile(self, employee_id: int) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_active_ids(self) -> Sequence[int]:
        raise NotImplementedError
