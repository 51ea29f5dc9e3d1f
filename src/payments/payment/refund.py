"""Payment refund — command and handler."""

from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from payments.domain import logger, payments
from payments.gateway import get_gateway
from payments.payment.payment import Payment


@payments.command(part_of="Payment")
class RefundPayment:
    payment_id = Identifier(required=True)


@payments.command_handler(part_of=Payment)
class RefundHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)
        payment.refund()

        result = get_gateway().create_refund(transaction_id=payment.transaction_id, amount=payment.amount)
        if not result.success:
            raise InvalidOperationError(result.failure_reason or "Refund rejected by gateway")

        repo.add(payment)
        logger.info("payment.refunded", payment_id=str(payment.id), gateway_refund_id=result.gateway_refund_id)
        return str(payment.id)
