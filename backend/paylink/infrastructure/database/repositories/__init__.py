from .payment_link_repository import SQLAlchemyPaymentLinkRepository

__all__ = [
    "SQLAlchemyPaymentLinkRepository",
]
