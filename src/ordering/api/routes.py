"""FastAPI routes for the Ordering domain — orders and the payment saga.

Routes that reach the payments service are plain ``def`` functions so the
blocking remote call runs in FastAPI's threadpool.
"""

from fastapi import APIRouter, Query, Response
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddItemRequest,
    CancellationResponse,
    CancelOrderRequest,
    ChangeStatusRequest,
    CreateOrderWithPaymentRequest,
    FulfillmentResponse,
    LineItemResponse,
    OrderResponse,
    OrderTotalResponse,
    UpdateItemQuantityRequest,
)
from ordering.checkout.catalogue import CatalogueClient
from ordering.checkout.saga import CreateOrderWithPayment, FulfillmentSaga, OrderLine
from ordering.order.creation import CreateOrder
from ordering.order.modification import AddItem, ChangeOrderStatus, DeleteOrder, RemoveItem, UpdateItemQuantity
from ordering.order.order import Order
from ordering.payment_gateway import get_gateway
from shared.contracts.payments import PaymentMethod


def _to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        status=order.status,
        total=order.total,
        items=[
            LineItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name or "",
                quantity=item.quantity,
                unit_price=item.unit_price,
                total=item.total,
            )
            for item in order.items or []
        ],
        payment_id=order.payment_id,
        payment_cancel_pending=bool(order.payment_cancel_pending),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _order(order_id: str) -> OrderResponse:
    return _to_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/with-payment", status_code=201, response_model=FulfillmentResponse)
def create_order_with_payment(body: CreateOrderWithPaymentRequest) -> FulfillmentResponse:
    """Create an order from its lines and pay for it in one request."""
    command = CreateOrderWithPayment(
        customer_email=body.customer_email,
        customer_name=body.customer_name,
        items=[OrderLine(**line.model_dump()) for line in body.items],
        payment_method=PaymentMethod.from_code(body.payment_method),
    )
    result = FulfillmentSaga(gateway=get_gateway()).create_with_payment(command)
    return FulfillmentResponse(
        order_id=result.order_id,
        total=result.total,
        status=result.status.value,
        payment_id=result.payment_id,
    )


@order_router.post("/{order_id}/cancel", response_model=CancellationResponse)
def cancel_order(order_id: str, body: CancelOrderRequest | None = None) -> CancellationResponse:
    """Cancel an order, reversing its payment when a payment id is given."""
    body = body or CancelOrderRequest()
    outcome = FulfillmentSaga(gateway=get_gateway()).cancel(order_id, payment_id=body.payment_id, reason=body.reason)
    return CancellationResponse(
        order_id=outcome.order_id,
        status=outcome.status.value,
        payment_canceled=outcome.payment_canceled,
        payment_cancel_pending=outcome.payment_canceled is False,
    )


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order() -> OrderResponse:
    """Create an empty order to add items to."""
    order_id = current_domain.process(CreateOrder(), asynchronous=False)
    return _order(order_id)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(limit: int = Query(100, ge=1, le=1000)) -> list[OrderResponse]:
    """Newest orders first."""
    return [_to_response(order) for order in current_domain.repository_for(Order).list_recent(limit)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order(order_id)


@order_router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: str) -> Response:
    """Delete an order together with its items."""
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return Response(status_code=204)


@order_router.get("/{order_id}/calculate", response_model=OrderTotalResponse)
async def calculate_order(order_id: str) -> OrderTotalResponse:
    """Amount that would be charged for the order. Refuses an empty order."""
    order = current_domain.repository_for(Order).get(order_id)
    total = order.prepare_for_payment()
    return OrderTotalResponse(order_id=str(order.id), total=total, item_count=len(order.items))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def change_status(order_id: str, body: ChangeStatusRequest) -> OrderResponse:
    current_domain.process(ChangeOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return _order(order_id)


@order_router.post("/{order_id}/items", status_code=201, response_model=OrderResponse)
async def add_item(order_id: str, body: AddItemRequest) -> OrderResponse:
    """Add a catalogue product to an order."""
    product = CatalogueClient().find_product(body.product_id)
    if product is None:
        raise ValidationError({"product_id": [f"Product {body.product_id} is not available"]})

    command = AddItem(
        order_id=order_id,
        product_id=body.product_id,
        product_name=product.name,
        unit_price=product.price,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _order(order_id)


@order_router.put("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def update_item_quantity(order_id: str, item_id: str, body: UpdateItemQuantityRequest) -> OrderResponse:
    command = UpdateItemQuantity(order_id=order_id, item_id=item_id, new_quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _order(order_id)


@order_router.delete("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def remove_item(order_id: str, item_id: str) -> OrderResponse:
    current_domain.process(RemoveItem(order_id=order_id, item_id=item_id), asynchronous=False)
    return _order(order_id)
