"""Remote payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- HttpPaymentGateway when a payment service URL is configured
- LocalPaymentGateway (in-process payments context) otherwise
- FakePaymentGateway for tests
"""

from ordering.payment_gateway.port import RemotePaymentGateway
from shared.config import Settings, get_settings

_current_gateway: RemotePaymentGateway | None = None


def build_gateway(settings: Settings | None = None) -> RemotePaymentGateway:
    settings = settings or get_settings()
    if settings.payment_service_url:
        from ordering.payment_gateway.http_adapter import HttpPaymentGateway

        return HttpPaymentGateway(
            base_url=settings.payment_service_url,
            process_timeout=settings.payment_process_timeout,
            cancel_timeout=settings.payment_cancel_timeout,
        )

    from ordering.payment_gateway.local_adapter import LocalPaymentGateway

    return LocalPaymentGateway()


def get_gateway() -> RemotePaymentGateway:
    """Return the current remote payment gateway, building it on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway()
    return _current_gateway


def set_gateway(gateway: RemotePaymentGateway) -> None:
    """Override the active remote payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to the configured gateway."""
    global _current_gateway
    _current_gateway = None
