from .payment_link import (
    PaymentLinkCreate,
    PaymentLinkIssued,
    PaymentLinkRecord,
    PaymentLinkValidationResponse,
)

__all__ = [
    "PaymentLinkCreate",
    "PaymentLinkIssued",
    "PaymentLinkRecord",
    "PaymentLinkValidationResponse",
]
