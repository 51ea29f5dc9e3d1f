"""HTTP adapter for the remote payments service.

Every call carries its own timeout (10s to process, 5s to cancel by
default). Calls are never retried; a timed-out payment request may still
have been processed on the remote side.
"""

from urllib.parse import quote

import httpx

from ordering.domain import logger
from ordering.payment_gateway.port import (
    CancellationReceipt,
    GatewayError,
    PaymentAuthorization,
    RemotePaymentGateway,
)
from shared.contracts.payments import PaymentMethod


class HttpPaymentGateway(RemotePaymentGateway):
    def __init__(
        self,
        base_url: str,
        process_timeout: float = 10.0,
        cancel_timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.process_timeout = process_timeout
        self.cancel_timeout = cancel_timeout
        self.client = client or httpx.Client(base_url=self.base_url)

    def _post(self, path: str, payload: dict, timeout: float) -> dict:
        try:
            response = self.client.post(path, json=payload, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            logger.warning("payment_gateway.timeout", path=path, timeout=timeout)
            raise GatewayError(f"Payments service timed out after {timeout}s on {path}") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning("payment_gateway.error_response", path=path, status_code=exc.response.status_code)
            raise GatewayError(f"Payments service answered {exc.response.status_code} on {path}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("payment_gateway.unreachable", path=path, error=str(exc))
            raise GatewayError(f"Payments service call to {path} failed: {exc}") from exc

    def process_payment(
        self,
        order_id: str,
        amount: float,
        payment_method: PaymentMethod,
        customer_email: str,
        customer_name: str,
    ) -> PaymentAuthorization:
        body = self._post(
            "/payments",
            {
                "order_id": order_id,
                "amount": amount,
                "payment_method": payment_method.value,
                "customer_email": customer_email,
                "customer_name": customer_name,
            },
            self.process_timeout,
        )
        try:
            return PaymentAuthorization(
                payment_id=body["payment_id"],
                status=body["status"],
                transaction_id=body.get("transaction_id"),
                message=body.get("message", ""),
            )
        except (KeyError, TypeError) as exc:
            raise GatewayError(f"Malformed payment response: {body!r}") from exc

    def cancel_payment(self, payment_id: str, reason: str) -> CancellationReceipt:
        body = self._post(f"/payments/{quote(payment_id, safe='')}/cancel", {"reason": reason}, self.cancel_timeout)
        try:
            return CancellationReceipt(success=bool(body["success"]), message=body.get("message", ""))
        except (KeyError, TypeError) as exc:
            raise GatewayError(f"Malformed cancellation response: {body!r}") from exc

    def close(self) -> None:
        self.client.close()
