"""Shared BDD fixtures and step definitions for order fulfillment."""

import pytest
from catalogue.domain import catalogue
from catalogue.product.creation import CreateProduct
from ordering.checkout.saga import OrderLine
from ordering.order.order import Order
from ordering.payment_gateway.fake_adapter import FakePaymentGateway
from ordering.payment_gateway.local_adapter import LocalPaymentGateway
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------
@pytest.fixture()
def lines():
    """Order lines collected by Given steps, submitted by a When step."""
    return []


@pytest.fixture()
def run():
    """What the saga returned or raised."""
    return {"result": None, "cancellation": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue has product "{product_id}" priced {price:f}'))
def _(product_id, price):
    with catalogue.domain_context():
        catalogue.process(
            CreateProduct(product_id=product_id, name=f"Catalogue {product_id}", price=price),
            asynchronous=False,
        )


@given("the payments service runs in-process", target_fixture="payments_service")
def _():
    return LocalPaymentGateway()


@given("the payments service approves payments but cannot be reached to cancel", target_fixture="payments_service")
def _():
    gateway = FakePaymentGateway()
    gateway.configure(fail_cancel=True)
    return gateway


@given("the payments service times out", target_fixture="payments_service")
def _():
    gateway = FakePaymentGateway()
    gateway.configure(fail_process=True)
    return gateway


@given(parsers.cfparse('an order line of {quantity:d} "{product_id}" at {price:f}'))
def _(lines, quantity, product_id, price):
    lines.append(OrderLine(product_id=product_id, quantity=quantity, price=price))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse("the order total is {total:f}"))
def _(order_id, total):
    assert current_domain.repository_for(Order).get(order_id).total == pytest.approx(total)


@then("the order is rejected with a validation error")
def _(run):
    assert isinstance(run["exc"], ValidationError)


@then("no order is stored")
def _():
    assert current_domain.repository_for(Order).list_recent() == []
