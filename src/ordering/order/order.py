"""Order aggregate (CQRS) — the core of the ordering domain.

An order owns its line items and a running total. The total is derived: it
is recomputed by the aggregate after every item mutation and always equals
the sum of ``unit_price * quantity`` over the items. Items snapshot the
product's name and price when they are added, and adding a product that is
already on the order merges into the existing line.

Statuses:
    PENDING         created, or payment still being processed
    PAID            payment approved
    CANCELED        payment declined, or order canceled
    COMPLETED       fulfilled
    PAYMENT_FAILED  the payment request itself could not be completed

Status changes are driven by the fulfillment saga, which is why
``transition_status`` only checks that the target is a known status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import (
    ItemAdded,
    ItemQuantityUpdated,
    ItemRemoved,
    OrderCreated,
    OrderStatusChanged,
    PaymentAttached,
)


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELED = "canceled"
    COMPLETED = "completed"
    PAYMENT_FAILED = "payment_failed"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class LineItem:
    """A product and quantity on an order, priced at the time it was added."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255, default="")
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0)
    total = Float(default=0.0)

    def recalculate(self):
        total = self.unit_price * self.quantity
        if self.total != total:
            self.total = total


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    status = String(
        max_length=20,
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(LineItem)
    total = Float(default=0.0)
    payment_id = Identifier()
    payment_cancel_pending = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls):
        """Start an empty pending order."""
        now = datetime.now(UTC)
        order = cls(created_at=now, updated_at=now)
        order.raise_(OrderCreated(order_id=str(order.id), created_at=now))
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _find_item(self, item_id):
        item = next((i for i in (self.items or []) if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Item {item_id} is not on order {self.id}")
        return item

    def _recalculate_total(self):
        for item in self.items or []:
            item.recalculate()
        total = sum(item.total for item in self.items or [])
        if self.total != total:
            self.total = total

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, product, quantity):
        """Add ``quantity`` units of ``product``, merging with an existing line.

        ``product`` is anything with a ``name`` and a ``price``. The line keeps
        the product's current name and price; later catalogue changes do not
        affect it.
        """
        if product is None:
            raise ValidationError({"product_id": [f"Product {product_id} is not available"]})
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})

        existing = next((i for i in (self.items or []) if str(i.product_id) == str(product_id)), None)
        if existing is not None:
            existing.quantity += quantity
            item = existing
        else:
            item = LineItem(
                product_id=product_id,
                product_name=product.name,
                quantity=quantity,
                unit_price=product.price,
            )
            self.add_items(item)

        self._recalculate_total()
        self._touch()
        self.raise_(
            ItemAdded(
                order_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=item.quantity,
                unit_price=item.unit_price,
                new_total=self.total,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)
        self._recalculate_total()
        self._touch()
        self.raise_(ItemRemoved(order_id=str(self.id), item_id=str(item_id), new_total=self.total))

    def update_item_quantity(self, item_id, quantity):
        item = self._find_item(item_id)
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self._recalculate_total()
        self._touch()
        self.raise_(
            ItemQuantityUpdated(
                order_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                new_total=self.total,
            )
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def prepare_for_payment(self):
        """Return the amount to charge. Refuses an order without items."""
        if not self.items:
            raise ValidationError({"items": ["Order has no items"]})
        self._recalculate_total()
        return self.total

    def attach_payment(self, payment_id):
        self.payment_id = payment_id
        self._touch()
        if payment_id:
            self.raise_(PaymentAttached(order_id=str(self.id), payment_id=str(payment_id)))

    def transition_status(self, new_status):
        """Move to ``new_status``. Any member of ``OrderStatus`` is accepted."""
        try:
            status = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Invalid order status: {new_status}"]}) from None

        previous_status = self.status
        self.status = status.value
        self._touch()
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=status.value,
                changed_at=self.updated_at,
            )
        )
