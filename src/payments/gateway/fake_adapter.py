"""Configurable fake payment gateway for development and testing.

Approves every charge strictly below ``decline_threshold`` and declines the
rest, which mirrors how the sandbox processor behaves. It can also be forced
to decline everything via ``configure``.
"""

from uuid import uuid4

from payments.gateway.port import ChargeResult, PaymentGateway, RefundResult
from shared.contracts.payments import PaymentMethod

DEFAULT_DECLINE_THRESHOLD = 10000.0


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, decline_threshold: float = DEFAULT_DECLINE_THRESHOLD) -> None:
        self.decline_threshold = decline_threshold
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_charge(
        self,
        amount: float,
        payment_method: PaymentMethod,
        transaction_id: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "create_charge",
                "amount": amount,
                "payment_method": payment_method.value,
                "transaction_id": transaction_id,
            }
        )

        if not self.should_succeed:
            return ChargeResult(success=False, gateway_status="failed", failure_reason=self.failure_reason)
        if not 0 < amount < self.decline_threshold:
            return ChargeResult(success=False, gateway_status="failed", failure_reason="Amount exceeds limit")
        return ChargeResult(success=True, gateway_status="succeeded")

    def create_refund(
        self,
        transaction_id: str,
        amount: float,
    ) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "transaction_id": transaction_id,
                "amount": amount,
            }
        )

        if self.should_succeed:
            return RefundResult(success=True, gateway_refund_id=f"fake_ref_{uuid4().hex[:12]}")
        return RefundResult(success=False, failure_reason=self.failure_reason)
