from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from ..core.enums import GatewayStatus


@dataclass(frozen=True)
class PayoutRequest:
    amount: int  # minor currency units
    currency: str
    destination: str
    idempotency_key: str
    description: str = ""
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PayoutResult:
    reference_id: str
    status: GatewayStatus
    failure_reason: str = ""


class PaymentGateway(Protocol):
    """Third-party payout processor.

    Raise GatewayError on an explicit rejection and GatewayTimeoutError when the
    outcome is unknown (timeout, transport error, ambiguous response).
    """

    def create_payout(self, request: PayoutRequest) -> PayoutResult:
        raise NotImplementedError

    def retrieve_payout(self, reference_id: str) -> PayoutResult:
        raise NotImplementedError
