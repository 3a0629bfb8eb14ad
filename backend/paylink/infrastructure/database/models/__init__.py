from .payment_link import PaymentLinkModel

__all__ = [
    "PaymentLinkModel",
]
