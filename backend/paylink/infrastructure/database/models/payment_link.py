"""SQLAlchemy ORM model for the PaymentLink entity."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from paylink.infrastructure.database.base import Base


class PaymentLinkModel(Base):
    """ORM model — maps to the 'payment_links' table."""

    __tablename__ = "payment_links"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    amount: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    def __repr__(self) -> str:
        return f"<PaymentLinkModel(id={self.id}, amount='{self.amount}')>"
