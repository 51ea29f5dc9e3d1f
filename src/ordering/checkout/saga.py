"""Order-payment fulfillment saga.

Coordinates the Order aggregate (owned here) with a Payment owned by the
remote payments service. There is no distributed transaction: each store
write is atomic on its own and the remote call sits between them, so the
saga settles every failure into a defined order status instead.

Create-with-payment flow:
    1. BUILDING          new order; each line priced from the catalogue, or
                         from a placeholder product for an unknown id
    2. PRICED            order validated (at least one item) and stored
    3. PAYMENT_REQUESTED remote call with the stored total
    4a. RECONCILED       verdict mapped onto the order status and stored
    4b. PAYMENT_FAILED   remote call failed; order marked payment_failed

Cancellation flow:
    1. LOADED                    order read from the store
    2. PAYMENT_CANCEL_REQUESTED  remote cancel, only when a payment id was
                                 given; failures are logged and recorded on
                                 the order as ``payment_cancel_pending``
    3. FINALIZED                 order forced to canceled and stored

Remote calls are made at most once. Writes that follow a remote call go
through ordering commands, which re-read the order and retry on a version
conflict. The saga log is kept in memory and returned with the result; it
is not persisted.

The saga must run with the ordering domain context active and outside any
unit of work.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

import structlog
from protean.exceptions import ProteanException
from protean.utils.globals import current_domain
from pydantic import BaseModel, Field

from ordering.checkout.catalogue import CatalogueClient, PricedProduct
from ordering.order.order import Order, OrderStatus
from ordering.order.payment import FinalizeCancellation, RecordPaymentFailure, RecordPaymentOutcome
from ordering.payment_gateway.port import GatewayError, RemotePaymentGateway
from shared.contracts.payments import PaymentMethod
from shared.errors import RemoteServiceError

DEFAULT_CANCEL_REASON = "Order canceled"


class SagaStep(Enum):
    BUILDING = "building"
    PRICED = "priced"
    PAYMENT_REQUESTED = "payment_requested"
    RECONCILED = "reconciled"
    PAYMENT_FAILED = "payment_failed"
    LOADED = "loaded"
    PAYMENT_CANCEL_REQUESTED = "payment_cancel_requested"
    FINALIZED = "finalized"


class PaymentRequestFailedError(RemoteServiceError):
    """The payments service gave no verdict. The order is kept as payment_failed."""

    def __init__(self, order_id: str, reason: str) -> None:
        self.order_id = order_id
        self.reason = reason
        super().__init__(f"Payment request for order {order_id} failed: {reason}")


# ---------------------------------------------------------------------------
# Commands and results
# ---------------------------------------------------------------------------
class OrderLine(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int
    price: float = Field(description="Expected unit price, used when the product is unknown")


class CreateOrderWithPayment(BaseModel):
    customer_email: str = Field(min_length=1)
    customer_name: str = Field(min_length=1)
    items: list[OrderLine]
    payment_method: PaymentMethod


@dataclass(frozen=True)
class FulfillmentResult:
    order_id: str
    total: float
    status: OrderStatus
    payment_id: str | None
    saga_log: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class CancellationOutcome:
    order_id: str
    status: OrderStatus
    payment_canceled: bool | None
    saga_log: list[dict] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Saga
# ---------------------------------------------------------------------------
class FulfillmentSaga:
    def __init__(
        self,
        gateway: RemotePaymentGateway,
        catalogue: CatalogueClient | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.gateway = gateway
        self.catalogue = catalogue or CatalogueClient()
        self.logger = logger or structlog.get_logger(__name__)

    def _record(self, saga_log: list[dict], step: SagaStep, **details) -> None:
        saga_log.append(
            {
                "step": len(saga_log) + 1,
                "action": step.value,
                "status": "FAILED" if "error" in details else "COMPLETED",
                "timestamp": datetime.now(UTC).isoformat(),
                **details,
            }
        )
        log = self.logger.warning if "error" in details else self.logger.info
        log("saga.step", step=step.value, **details)

    # -------------------------------------------------------------------
    # Create with payment
    # -------------------------------------------------------------------
    def create_with_payment(self, command: CreateOrderWithPayment) -> FulfillmentResult:
        saga_log: list[dict] = []
        repo = current_domain.repository_for(Order)

        # Products are resolved first; placeholders are registered in the
        # catalogue's own unit of work.
        products = [self._resolve_product(line) for line in command.items]

        order = Order.create()
        with structlog.contextvars.bound_contextvars(order_id=str(order.id)):
            for line, product in zip(command.items, products, strict=True):
                order.add_item(line.product_id, product, line.quantity)
            order.prepare_for_payment()
            self._record(saga_log, SagaStep.BUILDING, items=len(order.items))

            repo.add(order)
            amount = repo.get(order.id).total
            self._record(saga_log, SagaStep.PRICED, total=amount)

            try:
                authorization = self.gateway.process_payment(
                    order_id=str(order.id),
                    amount=amount,
                    payment_method=command.payment_method,
                    customer_email=command.customer_email,
                    customer_name=command.customer_name,
                )
            except GatewayError as exc:
                self._record(saga_log, SagaStep.PAYMENT_FAILED, error=str(exc))
                self._mark_payment_failed(str(order.id))
                raise PaymentRequestFailedError(str(order.id), str(exc)) from exc
            self._record(
                saga_log,
                SagaStep.PAYMENT_REQUESTED,
                payment_id=authorization.payment_id,
                verdict=authorization.status,
            )

            current_domain.process(
                RecordPaymentOutcome(
                    order_id=str(order.id),
                    payment_id=authorization.payment_id,
                    verdict=authorization.status,
                ),
                asynchronous=False,
            )
            order = repo.get(order.id)
            self._record(saga_log, SagaStep.RECONCILED, status=order.status)

        return FulfillmentResult(
            order_id=str(order.id),
            total=order.total,
            status=OrderStatus(order.status),
            payment_id=order.payment_id,
            saga_log=saga_log,
        )

    def _resolve_product(self, line: OrderLine) -> PricedProduct:
        product = self.catalogue.find_product(line.product_id)
        if product is not None:
            return product

        product = self.catalogue.register_placeholder(line.product_id, line.price)
        self.logger.info("catalogue.placeholder_used", product_id=line.product_id, price=product.price)
        return product

    def _mark_payment_failed(self, order_id: str) -> None:
        try:
            current_domain.process(RecordPaymentFailure(order_id=order_id), asynchronous=False)
        except ProteanException as exc:
            self.logger.error("saga.payment_failed_not_recorded", error=str(exc))

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(
        self,
        order_id: str,
        payment_id: str | None = None,
        reason: str = DEFAULT_CANCEL_REASON,
    ) -> CancellationOutcome:
        saga_log: list[dict] = []
        repo = current_domain.repository_for(Order)

        with structlog.contextvars.bound_contextvars(order_id=order_id):
            order = repo.get(order_id)
            self._record(saga_log, SagaStep.LOADED, status=order.status)

            payment_canceled = None
            if payment_id:
                payment_canceled = self._cancel_payment(saga_log, payment_id, reason)

            current_domain.process(
                FinalizeCancellation(order_id=order_id, payment_cancel_pending=payment_canceled is False),
                asynchronous=False,
            )
            order = repo.get(order_id)
            self._record(saga_log, SagaStep.FINALIZED, payment_cancel_pending=order.payment_cancel_pending)

        return CancellationOutcome(
            order_id=str(order.id),
            status=OrderStatus(order.status),
            payment_canceled=payment_canceled,
            saga_log=saga_log,
        )

    def _cancel_payment(self, saga_log: list[dict], payment_id: str, reason: str) -> bool:
        try:
            receipt = self.gateway.cancel_payment(payment_id, reason)
        except GatewayError as exc:
            self._record(saga_log, SagaStep.PAYMENT_CANCEL_REQUESTED, payment_id=payment_id, error=str(exc))
            return False

        if not receipt.success:
            self._record(saga_log, SagaStep.PAYMENT_CANCEL_REQUESTED, payment_id=payment_id, error=receipt.message)
            return False

        self._record(saga_log, SagaStep.PAYMENT_CANCEL_REQUESTED, payment_id=payment_id)
        return True
