"""HTTP client for the payout processor.

Wire contract:
    POST {base_url}/v1/payouts        -> {"id": ..., "status": "succeeded|pending|failed"}
    GET  {base_url}/v1/payouts/{id}   -> same shape

Explicit rejections (4xx) raise GatewayError. Anything that leaves the payout
outcome unknown (timeouts, transport errors, 5xx, unparseable replies) raises
GatewayTimeoutError so the caller keeps the record in Processing.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..core.enums import GatewayStatus
from ..core.exceptions import GatewayError, GatewayTimeoutError
from .gateway import PaymentGateway, PayoutRequest, PayoutResult

logger = logging.getLogger(__name__)


class HttpPaymentGateway(PaymentGateway):
    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def close(self) -> None:
        self._client.close()

    def create_payout(self, request: PayoutRequest) -> PayoutResult:
        payload = {
            "amount": request.amount,
            "currency": request.currency,
            "destination": request.destination,
            "reference": request.idempotency_key,
            "description": request.description,
            "metadata": dict(request.metadata),
        }
        headers = dict(self._headers)
        headers["Idempotency-Key"] = request.idempotency_key
        data = self._request("POST", "/v1/payouts", json=payload, headers=headers)
        return self._to_result(data)

    def retrieve_payout(self, reference_id: str) -> PayoutResult:
        data = self._request("GET", f"/v1/payouts/{reference_id}", headers=self._headers)
        return self._to_result(data)

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("payout gateway timeout: %s %s", method, path)
            raise GatewayTimeoutError(f"Payment gateway timed out ({method} {path})") from e
        except httpx.RequestError as e:
            logger.warning("payout gateway unreachable: %s %s: %s", method, path, e)
            raise GatewayTimeoutError(f"Payment gateway unreachable ({method} {path}): {e}") from e

        if response.status_code >= 500:
            raise GatewayTimeoutError(f"Payment gateway error {response.status_code} ({method} {path})")

        try:
            data = response.json()
        except ValueError as e:
            if response.status_code >= 400:
                raise GatewayError(f"Payment gateway rejected the payout: {response.reason_phrase}") from e
            raise GatewayTimeoutError(f"Payment gateway returned an unreadable response ({method} {path})") from e

        if response.status_code >= 400:
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            raise GatewayError(f"Payment gateway rejected the payout: {message or response.reason_phrase}")

        if not isinstance(data, dict):
            raise GatewayTimeoutError(f"Payment gateway returned an unexpected response ({method} {path})")
        return data

    @staticmethod
    def _to_result(data: Dict[str, Any]) -> PayoutResult:
        reference_id = data.get("id")
        try:
            status = GatewayStatus(str(data.get("status", "")).lower())
        except ValueError:
            status = None
        if not reference_id or status is None:
            raise GatewayTimeoutError(f"Payment gateway returned an ambiguous payout status: {data.get('status')!r}")
        return PayoutResult(
            reference_id=str(reference_id),
            status=status,
            failure_reason=str(data.get("failure_reason") or ""),
        )
