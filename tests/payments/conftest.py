import pytest
from payments.gateway import set_gateway
from payments.gateway.fake_adapter import FakeGateway


@pytest.fixture(autouse=True)
def _ctx(payments_bed):
    with payments_bed.domain_context():
        yield


@pytest.fixture()
def gateway():
    """Processor used by the payment handlers for the duration of a test."""
    gateway = FakeGateway(decline_threshold=10000.0)
    set_gateway(gateway)
    return gateway
