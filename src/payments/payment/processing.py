"""Payment processing — command and handler.

Creates the payment, hands it to the gateway under a fresh transaction id and
records the verdict. A declined charge is a normal outcome, not an error:
the caller receives ``status="declined"`` and the payment is stored as such.
"""

from dataclasses import dataclass
from uuid import uuid4

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from payments.domain import logger, payments
from payments.gateway import get_gateway
from payments.payment.payment import Payment, PaymentMethod

APPROVED_MESSAGE = "Payment processed successfully"
DECLINED_MESSAGE = "Payment was declined by the payment gateway"


@payments.command(part_of="Payment")
class ProcessPayment:
    """Charge the full total of an order."""

    order_id = Identifier(required=True)
    amount = Float(required=True)
    payment_method = String(required=True, max_length=20)
    customer_email = String(required=True, max_length=255)
    customer_name = String(max_length=255)


@dataclass(frozen=True)
class ProcessingResult:
    payment_id: str
    order_id: str
    status: str
    message: str
    transaction_id: str | None


@payments.command_handler(part_of=Payment)
class ProcessPaymentHandler:
    @handle(ProcessPayment)
    def process_payment(self, command):
        gateway = get_gateway()

        payment = Payment.create(
            order_id=command.order_id,
            amount=command.amount,
            payment_method=command.payment_method,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
        )
        payment.mark_processing(transaction_id=str(uuid4()))

        charge = gateway.create_charge(
            amount=payment.amount,
            payment_method=PaymentMethod(payment.payment_method),
            transaction_id=payment.transaction_id,
        )
        if charge.success:
            payment.approve()
            message = APPROVED_MESSAGE
        else:
            payment.decline()
            message = DECLINED_MESSAGE

        current_domain.repository_for(Payment).add(payment)
        logger.info(
            "payment.processed",
            payment_id=str(payment.id),
            order_id=str(payment.order_id),
            amount=payment.amount,
            status=payment.status,
            failure_reason=charge.failure_reason,
        )
        return ProcessingResult(
            payment_id=str(payment.id),
            order_id=str(payment.order_id),
            status=payment.status,
            message=message,
            transaction_id=payment.transaction_id,
        )
