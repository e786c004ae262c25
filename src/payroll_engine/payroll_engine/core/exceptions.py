from __future__ import annotations

from datetime import date
from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries the employee and pay period the failure relates to (when known),
    so callers can act on it without re-deriving state.
    """

    def __init__(
        self,
        message: str,
        *,
        employee_id: Optional[int] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
    ):
        super().__init__(message)
        self.message = message
        self.employee_id = employee_id
        self.period_start = period_start
        self.period_end = period_end

    def __str__(self) -> str:
        parts = []
        if self.employee_id is not None:
            parts.append(f"employee={self.employee_id}")
        if self.period_start is not None and self.period_end is not None:
            parts.append(f"period={self.period_start.isoformat()}..{self.period_end.isoformat()}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class InputError(DomainError):
    """Raised when input data is invalid (salary, dates, attendance, options)."""


class RecordNotFoundError(InputError):
    """Raised when a payroll record or employee does not exist."""


class ConflictError(DomainError):
    """Raised when a write conflicts with the current state of a record."""


class DuplicateRecordError(ConflictError):
    """A payroll record already exists for the employee and period."""


class InvalidTransitionError(ConflictError):
    """The requested payment status transition is not allowed."""


class RecordLockedError(ConflictError):
    """The record is paid and can no longer be modified."""


class ConcurrentModificationError(ConflictError):
    """The record changed between load and save."""


class PreconditionError(DomainError):
    """Payment preconditions failed; `violations` lists every failed rule."""

    def __init__(self, message: str, violations: Sequence[str] = (), **context):
        super().__init__(message, **context)
        self.violations = list(violations)

    def __str__(self) -> str:
        base = super().__str__()
        if not self.violations:
            return base
        return f"{base}: " + "; ".join(self.violations)


class GatewayError(DomainError):
    """The payment gateway explicitly rejected or failed a payout."""


class GatewayTimeoutError(GatewayError):
    """The gateway timed out or answered ambiguously; payout state unknown."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
