"""Tests for the remote payment gateway adapters and factory."""

import pytest
from ordering.payment_gateway import build_gateway, get_gateway, reset_gateway, set_gateway
from ordering.payment_gateway.fake_adapter import FakePaymentGateway
from ordering.payment_gateway.http_adapter import HttpPaymentGateway
from ordering.payment_gateway.local_adapter import LocalPaymentGateway
from ordering.payment_gateway.port import GatewayError
from payments.domain import payments
from payments.payment.payment import Payment, PaymentStatus
from protean.utils.globals import current_domain
from shared.config import Settings
from shared.contracts.payments import APPROVED, DECLINED, PaymentMethod


@pytest.fixture()
def local():
    return LocalPaymentGateway()


def _process(gateway, amount=100.0, order_id="ord-001"):
    return gateway.process_payment(
        order_id=order_id,
        amount=amount,
        payment_method=PaymentMethod.PIX,
        customer_email="ana@example.com",
        customer_name="Ana",
    )


def _stored_payment(payment_id):
    with payments.domain_context():
        return current_domain.repository_for(Payment).get(payment_id)


class TestFakePaymentGateway:
    def test_default_verdict_is_approved(self):
        gateway = FakePaymentGateway()
        authorization = _process(gateway)
        assert authorization.status == APPROVED
        assert authorization.payment_id.startswith("fake_pay_")
        assert gateway.calls[0]["payment_method"] == "pix"

    def test_fail_process_raises(self):
        gateway = FakePaymentGateway()
        gateway.configure(fail_process=True)
        with pytest.raises(GatewayError):
            _process(gateway)

    def test_cancel_success_flag(self):
        gateway = FakePaymentGateway()
        gateway.configure(cancel_success=False)
        assert gateway.cancel_payment("pay-1", "reason").success is False


class TestLocalPaymentGateway:
    def test_approved_payment_is_stored(self, local):
        authorization = _process(local)

        assert authorization.status == APPROVED
        assert authorization.transaction_id
        stored = _stored_payment(authorization.payment_id)
        assert stored.order_id == "ord-001"
        assert stored.payment_method == PaymentMethod.PIX.value

    def test_amount_at_threshold_is_declined(self, local):
        assert _process(local, amount=10000.0).status == DECLINED

    def test_invalid_request_becomes_gateway_error(self, local):
        with pytest.raises(GatewayError):
            _process(local, amount=0.0)

    def test_cancel_declined_payment(self, local):
        payment_id = _process(local, amount=15000.0).payment_id

        receipt = local.cancel_payment(payment_id, "Order canceled")

        assert receipt.success is True
        stored = _stored_payment(payment_id)
        assert stored.status == PaymentStatus.CANCELED.value
        assert stored.cancel_reason == "Order canceled"

    def test_cancel_unknown_payment_is_refused(self, local):
        assert local.cancel_payment("pay-404", "Order canceled").success is False


class TestGatewayFactory:
    def test_http_adapter_when_url_configured(self):
        settings = Settings(
            payment_service_url="http://payments.internal",
            payment_process_timeout=3.0,
            payment_cancel_timeout=1.5,
        )
        gateway = build_gateway(settings)
        try:
            assert isinstance(gateway, HttpPaymentGateway)
            assert gateway.base_url == "http://payments.internal"
            assert gateway.process_timeout == 3.0
            assert gateway.cancel_timeout == 1.5
        finally:
            gateway.close()

    def test_local_adapter_without_url(self):
        assert isinstance(build_gateway(Settings(payment_service_url="")), LocalPaymentGateway)

    def test_set_and_reset(self):
        fake = FakePaymentGateway()
        set_gateway(fake)
        assert get_gateway() is fake

        reset_gateway()
        assert get_gateway() is not fake
