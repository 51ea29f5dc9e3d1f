"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    __version__ = 1

    order_id = Identifier(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class ItemAdded:
    """A product line was added, or merged into an existing line."""

    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class ItemRemoved:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class ItemQuantityUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class PaymentAttached:
    """The remote payments service answered with a payment for this order."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_id = Identifier(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
