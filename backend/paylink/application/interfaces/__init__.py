from .payment_link_repository import PaymentLinkRepository

__all__ = [
    "PaymentLinkRepository",
]
