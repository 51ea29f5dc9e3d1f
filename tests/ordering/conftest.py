import pytest
from catalogue.domain import catalogue
from catalogue.product.creation import CreateProduct
from ordering.checkout.catalogue import CatalogueClient
from ordering.checkout.saga import FulfillmentSaga
from ordering.payment_gateway import set_gateway
from ordering.payment_gateway.fake_adapter import FakePaymentGateway


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, payments_bed, ordering_bed):
    """Ordering runs on top; catalogue and payments are reachable beneath it."""
    with catalogue_bed.domain_context(), payments_bed.domain_context(), ordering_bed.domain_context():
        yield


def add_product(**fields):
    """Store a catalogue product and return its id."""
    with catalogue.domain_context():
        return catalogue.process(CreateProduct(**fields), asynchronous=False)


@pytest.fixture()
def products():
    return CatalogueClient()


@pytest.fixture()
def remote_gateway():
    """Scripted payments service, also installed for the order routes."""
    gateway = FakePaymentGateway()
    set_gateway(gateway)
    return gateway


@pytest.fixture()
def saga(remote_gateway, products):
    return FulfillmentSaga(gateway=remote_gateway, catalogue=products)


@pytest.fixture()
def widget():
    return add_product(product_id="prod-x", name="Widget", price=100.0)


@pytest.fixture()
def gadget():
    return add_product(product_id="prod-y", name="Gadget", price=50.0)
