"""Scriptable fake of the payments service for development and testing.

Answers every payment request with the configured verdict, or raises
``GatewayError`` to simulate an unreachable or timed-out service.
"""

from uuid import uuid4

from ordering.payment_gateway.port import (
    CancellationReceipt,
    GatewayError,
    PaymentAuthorization,
    RemotePaymentGateway,
)
from shared.contracts.payments import APPROVED, PaymentMethod


class FakePaymentGateway(RemotePaymentGateway):
    """Configurable fake remote payment gateway."""

    def __init__(self) -> None:
        self.verdict: str = APPROVED
        self.fail_process: bool = False
        self.fail_cancel: bool = False
        self.cancel_success: bool = True
        self.calls: list[dict] = []

    def configure(
        self,
        verdict: str = APPROVED,
        fail_process: bool = False,
        fail_cancel: bool = False,
        cancel_success: bool = True,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.verdict = verdict
        self.fail_process = fail_process
        self.fail_cancel = fail_cancel
        self.cancel_success = cancel_success

    def process_payment(
        self,
        order_id: str,
        amount: float,
        payment_method: PaymentMethod,
        customer_email: str,
        customer_name: str,
    ) -> PaymentAuthorization:
        self.calls.append(
            {
                "method": "process_payment",
                "order_id": order_id,
                "amount": amount,
                "payment_method": payment_method.value,
                "customer_email": customer_email,
                "customer_name": customer_name,
            }
        )
        if self.fail_process:
            raise GatewayError("Payments service timed out")

        return PaymentAuthorization(
            payment_id=f"fake_pay_{uuid4().hex[:12]}",
            status=self.verdict,
            transaction_id=str(uuid4()),
            message=f"Payment {self.verdict}",
        )

    def cancel_payment(self, payment_id: str, reason: str) -> CancellationReceipt:
        self.calls.append({"method": "cancel_payment", "payment_id": payment_id, "reason": reason})
        if self.fail_cancel:
            raise GatewayError("Payments service unavailable")

        if self.cancel_success:
            return CancellationReceipt(success=True, message="Payment canceled successfully")
        return CancellationReceipt(success=False, message="Payment cannot be canceled")
