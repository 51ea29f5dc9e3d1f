"""Order creation — command and handler.

Creates an empty pending order that items are added to afterwards (see
``ordering.order.modification``). Orders created together with their
payment go through the fulfillment saga instead.
"""

from protean import handle
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class CreateOrder:
    pass


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        order = Order.create()
        current_domain.repository_for(Order).add(order)
        logger.info("order.created", order_id=str(order.id))
        return str(order.id)
