"""Payment aggregate (CQRS) — the core of the payments domain.

A Payment is created for exactly one order and carries the full order total;
there are no split or partial payments.

State Machine:
    PENDING → PROCESSING → APPROVED → REFUNDED
    PROCESSING → DECLINED
    PENDING/PROCESSING/DECLINED → CANCELED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import DateTime, Float, Identifier, String

from payments.domain import payments
from payments.payment.events import (
    PaymentApproved,
    PaymentCanceled,
    PaymentDeclined,
    PaymentRefunded,
)
from shared.contracts.payments import PaymentMethod


class PaymentStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    APPROVED = "approved"
    DECLINED = "declined"
    CANCELED = "canceled"
    REFUNDED = "refunded"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PROCESSING, PaymentStatus.CANCELED},
    PaymentStatus.PROCESSING: {PaymentStatus.APPROVED, PaymentStatus.DECLINED, PaymentStatus.CANCELED},
    PaymentStatus.DECLINED: {PaymentStatus.CANCELED},
    PaymentStatus.APPROVED: {PaymentStatus.REFUNDED},
    PaymentStatus.CANCELED: set(),  # Terminal
    PaymentStatus.REFUNDED: set(),  # Terminal
}

_CANCELABLE_STATES = {PaymentStatus.PENDING, PaymentStatus.PROCESSING, PaymentStatus.DECLINED}

_FINAL_STATES = {
    PaymentStatus.APPROVED,
    PaymentStatus.DECLINED,
    PaymentStatus.CANCELED,
    PaymentStatus.REFUNDED,
}


class PaymentCannotBeCanceledError(InvalidStateError):
    """Cancellation requested for an approved, canceled or refunded payment."""


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@payments.aggregate
class Payment:
    order_id = Identifier(required=True)
    amount = Float(required=True)
    payment_method = String(required=True, max_length=20, choices=PaymentMethod)
    status = String(
        max_length=20,
        choices=PaymentStatus,
        default=PaymentStatus.PENDING.value,
    )
    transaction_id = String(max_length=64)
    customer_email = String(required=True, max_length=255)
    customer_name = String(max_length=255, default="")
    cancel_reason = String(max_length=500)
    canceled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id, amount, payment_method, customer_email, customer_name=""):
        """Create a pending payment for an order.

        ``payment_method`` may be the enum member or its string value; any
        other value is rejected.
        """
        if not order_id:
            raise ValidationError({"order_id": ["Order ID cannot be empty"]})
        if amount is None or amount <= 0:
            raise ValidationError({"amount": ["Amount must be greater than zero"]})
        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError({"payment_method": [f"Invalid payment method: {payment_method}"]}) from None
        if not customer_email:
            raise ValidationError({"customer_email": ["Customer email cannot be empty"]})

        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            amount=amount,
            payment_method=method.value,
            customer_email=customer_email,
            customer_name=customer_name or "",
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = PaymentStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidStateError(f"Cannot transition from {current.value} to {target_status.value}")

    def _move_to(self, status):
        self.status = status.value
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Payment lifecycle
    # -------------------------------------------------------------------
    def mark_processing(self, transaction_id):
        """Hand the payment to the gateway under ``transaction_id``."""
        self._assert_can_transition(PaymentStatus.PROCESSING)
        self.transaction_id = transaction_id
        self._move_to(PaymentStatus.PROCESSING)

    def approve(self):
        self._assert_can_transition(PaymentStatus.APPROVED)
        self._move_to(PaymentStatus.APPROVED)
        self.raise_(
            PaymentApproved(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                payment_method=self.payment_method,
                transaction_id=self.transaction_id,
                approved_at=self.updated_at,
            )
        )

    def decline(self):
        self._assert_can_transition(PaymentStatus.DECLINED)
        self._move_to(PaymentStatus.DECLINED)
        self.raise_(
            PaymentDeclined(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                declined_at=self.updated_at,
            )
        )

    def cancel(self, reason):
        """Cancel a payment that has not been approved."""
        if not self.can_be_canceled():
            raise PaymentCannotBeCanceledError(f"Payment cannot be canceled in {self.status} state")
        self.cancel_reason = reason
        self._move_to(PaymentStatus.CANCELED)
        self.canceled_at = self.updated_at
        self.raise_(
            PaymentCanceled(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                reason=reason,
                canceled_at=self.canceled_at,
            )
        )

    def refund(self):
        """Return the funds of an approved payment."""
        self._assert_can_transition(PaymentStatus.REFUNDED)
        self._move_to(PaymentStatus.REFUNDED)
        self.raise_(
            PaymentRefunded(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                refunded_at=self.updated_at,
            )
        )

    def can_be_canceled(self):
        return PaymentStatus(self.status) in _CANCELABLE_STATES

    def is_finalized(self):
        return PaymentStatus(self.status) in _FINAL_STATES
