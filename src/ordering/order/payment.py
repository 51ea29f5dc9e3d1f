"""Payment reconciliation — commands and handler.

The fulfillment saga writes the outcome of a remote payment call through
these commands. Each handler re-reads the order inside its own unit of
work, so a change stored while the remote call was in flight is kept, and
a conflicting concurrent write is retried by the command processor rather
than failing after the payment has already been taken.
"""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from shared.contracts.payments import APPROVED, DECLINED

# Anything else the payments service answers (processing, unknown) leaves the
# order pending.
_VERDICT_TO_STATUS = {
    APPROVED: OrderStatus.PAID,
    DECLINED: OrderStatus.CANCELED,
}


@ordering.command(part_of="Order")
class RecordPaymentOutcome:
    order_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    verdict = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class RecordPaymentFailure:
    """The payment request never produced a verdict."""

    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class FinalizeCancellation:
    order_id = Identifier(required=True)
    payment_cancel_pending = Boolean(default=False)


def status_for_verdict(verdict):
    return _VERDICT_TO_STATUS.get(verdict, OrderStatus.PENDING)


@ordering.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(RecordPaymentOutcome)
    def record_outcome(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.attach_payment(command.payment_id)
        order.transition_status(status_for_verdict(command.verdict))
        repo.add(order)
        return order.status

    @handle(RecordPaymentFailure)
    def record_failure(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.transition_status(OrderStatus.PAYMENT_FAILED)
        repo.add(order)
        return order.status

    @handle(FinalizeCancellation)
    def finalize_cancellation(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.transition_status(OrderStatus.CANCELED)
        order.payment_cancel_pending = bool(command.payment_cancel_pending)
        repo.add(order)
        return order.status
