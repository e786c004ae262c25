from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the caller, used for permission checks in services."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmployeeStatus(str, Enum):
    """Employment status as stored in the employee directory."""

    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class PaymentStatus(str, Enum):
    """Payment lifecycle of a payroll record."""

    PENDING = "Pending"
    PROCESSING = "Processing"
    PAID = "Paid"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    GATEWAY_TRANSFER = "gateway_transfer"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CHECK = "check"


class GatewayStatus(str, Enum):
    """Payout status as reported by the payment gateway."""

    SUCCEEDED = "succeeded"
    PENDING = "pending"
    FAILED = "failed"
