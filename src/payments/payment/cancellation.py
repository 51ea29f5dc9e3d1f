"""Payment cancellation — command and handler.

Cancellation answers with a receipt instead of raising for expected
failures: an unknown payment or one that can no longer be canceled yields
``success=False`` with the reason, so remote callers can tell "refused" from
"unreachable". An empty payment id is still a caller error.
"""

from dataclasses import dataclass

from protean import handle
from protean.exceptions import InvalidStateError, ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from payments.domain import logger, payments
from payments.payment.payment import Payment

CANCELED_MESSAGE = "Payment canceled successfully"
DEFAULT_REASON = "Canceled by request"


@payments.command(part_of="Payment")
class CancelPayment:
    payment_id = Identifier(required=True)
    reason = String(max_length=500, default=DEFAULT_REASON)


@dataclass(frozen=True)
class CancellationResult:
    success: bool
    message: str


@payments.command_handler(part_of=Payment)
class CancelPaymentHandler:
    @handle(CancelPayment)
    def cancel_payment(self, command):
        repo = current_domain.repository_for(Payment)
        try:
            payment = repo.get(command.payment_id)
            payment.cancel(reason=command.reason or DEFAULT_REASON)
        except (ObjectNotFoundError, InvalidStateError) as exc:
            logger.warning("payment.cancel_refused", payment_id=command.payment_id, reason=str(exc))
            return CancellationResult(success=False, message=str(exc))

        repo.add(payment)
        logger.info("payment.canceled", payment_id=str(payment.id), order_id=str(payment.order_id))
        return CancellationResult(success=True, message=CANCELED_MESSAGE)
