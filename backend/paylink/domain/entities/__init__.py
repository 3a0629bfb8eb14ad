from .payment_link import (
    InvalidReason,
    IssuedLink,
    LinkState,
    LinkValidation,
    PaymentLink,
    now_ms,
)

__all__ = [
    "InvalidReason",
    "IssuedLink",
    "LinkState",
    "LinkValidation",
    "PaymentLink",
    "now_ms",
]
