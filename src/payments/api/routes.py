"""FastAPI endpoints for the Payments domain."""

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from payments.api.schemas import (
    CancelPaymentRequest,
    CancelPaymentResponse,
    ConfigureGatewayRequest,
    GatewayConfigResponse,
    PaymentListResponse,
    PaymentResponse,
    ProcessPaymentRequest,
    ProcessPaymentResponse,
)
from payments.gateway import get_gateway
from payments.gateway.fake_adapter import FakeGateway
from payments.payment.cancellation import CancelPayment
from payments.payment.payment import Payment
from payments.payment.processing import ProcessPayment
from payments.payment.refund import RefundPayment
from shared.config import get_settings


def _to_response(payment: Payment) -> PaymentResponse:
    return PaymentResponse(
        payment_id=str(payment.id),
        order_id=str(payment.order_id),
        amount=payment.amount,
        payment_method=payment.payment_method,
        status=payment.status,
        transaction_id=payment.transaction_id,
        customer_email=payment.customer_email,
        customer_name=payment.customer_name or "",
        cancel_reason=payment.cancel_reason,
        canceled_at=payment.canceled_at,
        created_at=payment.created_at,
        updated_at=payment.updated_at,
    )


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("", status_code=201, response_model=ProcessPaymentResponse)
async def process_payment(body: ProcessPaymentRequest) -> ProcessPaymentResponse:
    """Create a payment for an order and run it through the gateway."""
    command = ProcessPayment(
        order_id=body.order_id,
        amount=body.amount,
        payment_method=body.payment_method,
        customer_email=body.customer_email,
        customer_name=body.customer_name,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProcessPaymentResponse(
        payment_id=result.payment_id,
        order_id=result.order_id,
        status=result.status,
        message=result.message,
        transaction_id=result.transaction_id,
    )


@payment_router.get("", response_model=PaymentListResponse)
async def list_payments(order_id: str) -> PaymentListResponse:
    """List every payment recorded for an order."""
    found = current_domain.repository_for(Payment).find_by_order_id(order_id)
    return PaymentListResponse(payments=[_to_response(p) for p in found])


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str) -> PaymentResponse:
    return _to_response(current_domain.repository_for(Payment).get(payment_id))


@payment_router.post("/{payment_id}/cancel", response_model=CancelPaymentResponse)
async def cancel_payment(payment_id: str, body: CancelPaymentRequest | None = None) -> CancelPaymentResponse:
    """Cancel a payment. Refusals are reported in the body, not as HTTP errors."""
    reason = body.reason if body else CancelPaymentRequest().reason
    result = current_domain.process(CancelPayment(payment_id=payment_id, reason=reason), asynchronous=False)
    return CancelPaymentResponse(success=result.success, message=result.message)


@payment_router.post("/{payment_id}/refund", response_model=PaymentResponse)
async def refund_payment(payment_id: str) -> PaymentResponse:
    """Refund an approved payment."""
    current_domain.process(RefundPayment(payment_id=payment_id), asynchronous=False)
    return _to_response(current_domain.repository_for(Payment).get(payment_id))


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only)."""
    if get_settings().env == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
