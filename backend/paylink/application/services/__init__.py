from .link_policy import LinkPolicy
from .payment_link_service import PaymentLinkService

__all__ = [
    "LinkPolicy",
    "PaymentLinkService",
]
