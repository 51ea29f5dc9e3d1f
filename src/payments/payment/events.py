"""Domain events for the Payment aggregate.

Raised when a payment reaches a verdict or is reversed. They are written to
the event store when the unit of work commits.
"""

from protean.fields import DateTime, Float, Identifier, String

from payments.domain import payments


@payments.event(part_of="Payment")
class PaymentApproved:
    """The processor authorized the charge."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    payment_method = String(required=True)
    transaction_id = String()
    approved_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentDeclined:
    """The processor refused the charge."""

    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    declined_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentCanceled:
    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    reason = String(max_length=500)
    canceled_at = DateTime(required=True)


@payments.event(part_of="Payment")
class PaymentRefunded:
    __version__ = 1

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    refunded_at = DateTime(required=True)
