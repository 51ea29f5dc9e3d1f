"""In-process adapter that sends commands to the payments domain.

Used when both contexts run in the same process (no payment service URL
configured). Errors the payments domain raises become ``GatewayError``,
exactly as a 4xx/5xx answer would over HTTP.
"""

from protean.exceptions import ProteanException

from ordering.payment_gateway.port import (
    CancellationReceipt,
    GatewayError,
    PaymentAuthorization,
    RemotePaymentGateway,
)
from payments.domain import payments
from payments.payment.cancellation import CancelPayment
from payments.payment.processing import ProcessPayment
from shared.contracts.payments import PaymentMethod


class LocalPaymentGateway(RemotePaymentGateway):
    def process_payment(
        self,
        order_id: str,
        amount: float,
        payment_method: PaymentMethod,
        customer_email: str,
        customer_name: str,
    ) -> PaymentAuthorization:
        with payments.domain_context():
            try:
                result = payments.process(
                    ProcessPayment(
                        order_id=order_id,
                        amount=amount,
                        payment_method=payment_method.value,
                        customer_email=customer_email,
                        customer_name=customer_name,
                    ),
                    asynchronous=False,
                )
            except ProteanException as exc:
                raise GatewayError(str(exc)) from exc

        return PaymentAuthorization(
            payment_id=result.payment_id,
            status=result.status,
            transaction_id=result.transaction_id,
            message=result.message,
        )

    def cancel_payment(self, payment_id: str, reason: str) -> CancellationReceipt:
        with payments.domain_context():
            try:
                result = payments.process(CancelPayment(payment_id=payment_id, reason=reason), asynchronous=False)
            except ProteanException as exc:
                raise GatewayError(str(exc)) from exc

        return CancellationReceipt(success=result.success, message=result.message)
