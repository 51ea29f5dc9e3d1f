"""Pydantic request/response schemas for the Payments API.

These are external contracts (anti-corruption layer) — separate from the
internal commands the handlers accept.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Payment Request Schemas
# ---------------------------------------------------------------------------
class ProcessPaymentRequest(BaseModel):
    order_id: str
    amount: float
    payment_method: str
    customer_email: str
    customer_name: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": "ord-001",
                    "amount": 59.99,
                    "payment_method": "credit_card",
                    "customer_email": "ana@example.com",
                    "customer_name": "Ana Souza",
                }
            ]
        }
    }


class CancelPaymentRequest(BaseModel):
    reason: str = Field("Canceled by request", max_length=500)


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Card declined"


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProcessPaymentResponse(BaseModel):
    payment_id: str
    order_id: str
    status: str
    message: str
    transaction_id: str | None = None


class PaymentResponse(BaseModel):
    payment_id: str
    order_id: str
    amount: float
    payment_method: str
    status: str
    transaction_id: str | None = None
    customer_email: str
    customer_name: str
    cancel_reason: str | None = None
    canceled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]


class CancelPaymentResponse(BaseModel):
    success: bool
    message: str


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
