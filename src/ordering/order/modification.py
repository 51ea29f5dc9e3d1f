"""Order modification — commands and handler.

Handles item additions, removals and quantity updates, explicit status
changes, and deletion. Products are looked up in the catalogue before an
``AddItem`` is issued; the command carries the name and price to snapshot.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.checkout.catalogue import PricedProduct
from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class AddItem:
    """Add a product to an order (merges with an existing line for it)."""

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(max_length=255, default="")
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True)


@ordering.command(part_of="Order")
class RemoveItem:
    order_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command(part_of="Order")
class UpdateItemQuantity:
    """Change the quantity of an existing order line item."""

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@ordering.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class DeleteOrder:
    """Remove an order and its line items."""

    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class ModifyOrderHandler:
    @handle(AddItem)
    def add_item(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.add_item(
            product_id=command.product_id,
            product=PricedProduct(
                product_id=command.product_id,
                name=command.product_name,
                price=command.unit_price,
            ),
            quantity=command.quantity,
        )
        repo.add(order)
        return str(order.id)

    @handle(RemoveItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.remove_item(item_id=command.item_id)
        repo.add(order)
        return str(order.id)

    @handle(UpdateItemQuantity)
    def update_item_quantity(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_item_quantity(
            item_id=command.item_id,
            quantity=command.new_quantity,
        )
        repo.add(order)
        return str(order.id)

    @handle(ChangeOrderStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.transition_status(command.status)
        repo.add(order)
        logger.info("order.status_changed", order_id=str(order.id), status=order.status)
        return str(order.id)

    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        repo.remove(repo.get(command.order_id))
        logger.info("order.deleted", order_id=command.order_id)
