"""Authorization processor port for the payments service.

Defines the contract that card/wallet processors must implement, so the
payments service can authorize and refund without knowing which processor
sits behind it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shared.contracts.payments import PaymentMethod


@dataclass(frozen=True)
class ChargeResult:
    """Processor verdict for one charge; ``success`` is False for a decline."""

    success: bool
    gateway_status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    """Processor answer to a refund request."""

    success: bool
    gateway_refund_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """A card/wallet processor as seen by the payment handlers."""

    @abstractmethod
    def create_charge(
        self,
        amount: float,
        payment_method: PaymentMethod,
        transaction_id: str,
    ) -> ChargeResult:
        """Authorize and capture ``amount`` under ``transaction_id``."""
        ...

    @abstractmethod
    def create_refund(
        self,
        transaction_id: str,
        amount: float,
    ) -> RefundResult:
        """Return ``amount`` of the charge recorded under ``transaction_id``."""
        ...
