"""Payment vocabulary shared between the Ordering and Payments contexts.

The Order aggregate never imports the Payments domain model; both sides agree on these
values instead. Callers identify a payment method by a numeric code (1-5),
the wire format and the stores use the string value.
"""

from enum import Enum


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PIX = "pix"
    BOLETO = "boleto"
    PAYPAL = "paypal"

    @classmethod
    def from_code(cls, code: int) -> "PaymentMethod":
        try:
            return _BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown payment method code: {code}") from None

    @property
    def code(self) -> int:
        return next(code for code, method in _BY_CODE.items() if method is self)


_BY_CODE = {
    1: PaymentMethod.CREDIT_CARD,
    2: PaymentMethod.DEBIT_CARD,
    3: PaymentMethod.PIX,
    4: PaymentMethod.BOLETO,
    5: PaymentMethod.PAYPAL,
}


# Verdicts returned by the payments service when a payment is processed
APPROVED = "approved"
DECLINED = "declined"
PROCESSING = "processing"
