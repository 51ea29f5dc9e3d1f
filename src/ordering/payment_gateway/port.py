"""Remote payment gateway port — how Ordering reaches the payments service.

Adapters must raise ``GatewayError`` for anything that prevents an answer
(transport failure, timeout, unreadable or error response). A declined
payment or a refused cancellation is an answer, not an error.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shared.contracts.payments import PaymentMethod


class GatewayError(Exception):
    """The payments service could not be reached or did not answer usefully."""


@dataclass(frozen=True)
class PaymentAuthorization:
    """Verdict returned by the payments service for a payment request."""

    payment_id: str
    status: str
    transaction_id: str | None = None
    message: str = ""


@dataclass(frozen=True)
class CancellationReceipt:
    success: bool
    message: str = ""


class RemotePaymentGateway(ABC):
    @abstractmethod
    def process_payment(
        self,
        order_id: str,
        amount: float,
        payment_method: PaymentMethod,
        customer_email: str,
        customer_name: str,
    ) -> PaymentAuthorization:
        """Ask the payments service to charge ``amount`` for the order."""
        ...

    @abstractmethod
    def cancel_payment(self, payment_id: str, reason: str) -> CancellationReceipt:
        """Ask the payments service to cancel a payment."""
        ...
