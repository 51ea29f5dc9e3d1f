"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from the
internal commands the handlers and the saga accept.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    price: float = Field(gt=0)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderWithPaymentRequest(BaseModel):
    customer_email: str = Field(min_length=1)
    customer_name: str = Field(min_length=1)
    items: list[OrderLineSchema] = Field(min_length=1)
    payment_method: int = Field(ge=1, le=5, description="1 credit card, 2 debit card, 3 pix, 4 boleto, 5 paypal")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_email": "ana@example.com",
                    "customer_name": "Ana Souza",
                    "items": [
                        {"product_id": "prod-001", "quantity": 2, "price": 10.0},
                        {"product_id": "prod-002", "quantity": 1, "price": 5.5},
                    ],
                    "payment_method": 1,
                }
            ]
        }
    }


class CancelOrderRequest(BaseModel):
    payment_id: str | None = None
    reason: str = Field("Order canceled", max_length=500)


class AddItemRequest(BaseModel):
    product_id: str
    quantity: int


class UpdateItemQuantityRequest(BaseModel):
    quantity: int


class ChangeStatusRequest(BaseModel):
    status: str = Field(description="pending, paid, canceled, completed or payment_failed")


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class FulfillmentResponse(BaseModel):
    order_id: str
    total: float
    status: str
    payment_id: str | None = None


class CancellationResponse(BaseModel):
    order_id: str
    status: str
    payment_canceled: bool | None = None
    payment_cancel_pending: bool


class OrderTotalResponse(BaseModel):
    order_id: str
    total: float
    item_count: int


class LineItemResponse(BaseModel):
    item_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total: float


class OrderResponse(BaseModel):
    order_id: str
    status: str
    total: float
    items: list[LineItemResponse]
    payment_id: str | None = None
    payment_cancel_pending: bool
    created_at: datetime
    updated_at: datetime
