"""Repository for the Payment aggregate."""

from payments.domain import payments
from payments.payment.payment import Payment


@payments.repository(part_of=Payment)
class PaymentRepository:
    """Payment Store: the standard CRUD operations plus lookup by order."""

    def find_by_order_id(self, order_id: str) -> list[Payment]:
        """Every payment recorded for ``order_id``, oldest first."""
        return self.query.filter(order_id=order_id).order_by("created_at").all().items
