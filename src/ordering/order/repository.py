"""Order repository with listing and cascading removal."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def list_recent(self, limit=100):
        """Newest orders first."""
        return self.query.order_by("-created_at").limit(limit).all().items

    def remove(self, order):
        """Delete ``order`` together with its line items."""
        if order.items:
            order.remove_items(list(order.items))
            self.add(order)
        self._dao.delete(order)
