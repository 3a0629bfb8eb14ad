"""Concrete repository implementation for PaymentLink backed by SQLAlchemy."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from paylink.application.interfaces import PaymentLinkRepository
from paylink.domain.entities import PaymentLink
from paylink.domain.exceptions import DuplicateEntityError, StorageError
from paylink.infrastructure.database.models import PaymentLinkModel

logger = logging.getLogger(__name__)


class SQLAlchemyPaymentLinkRepository(PaymentLinkRepository):
    """Implements the PaymentLinkRepository port on an embedded SQL database.

    Each call runs in its own short transaction, so a successful ``create``
    is committed before it returns. Uniqueness is enforced by the primary key.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], location: str = "database"):
        self._session_factory = session_factory
        self._location = location

    def _to_entity(self, model: PaymentLinkModel) -> PaymentLink:
        """Map ORM model → domain entity."""
        return PaymentLink(
            id=model.id,
            amount=model.amount,
            created_at=model.created_at,
            expires_at=model.expires_at,
        )

    def _to_model(self, entity: PaymentLink) -> PaymentLinkModel:
        """Map domain entity → ORM model (for creation)."""
        return PaymentLinkModel(
            id=entity.id,
            amount=entity.amount,
            created_at=entity.created_at,
            expires_at=entity.expires_at,
        )

    async def get_by_id(self, link_id: str) -> PaymentLink | None:
        try:
            async with self._session_factory() as session:
                result = await session.get(PaymentLinkModel, link_id)
                return self._to_entity(result) if result else None
        except SQLAlchemyError as exc:
            raise StorageError(self._location, str(exc)) from exc

    async def get_all(self) -> dict[str, PaymentLink]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(PaymentLinkModel).order_by(PaymentLinkModel.created_at)
                )
                return {row.id: self._to_entity(row) for row in result.scalars().all()}
        except SQLAlchemyError as exc:
            raise StorageError(self._location, str(exc)) from exc

    async def create(self, link: PaymentLink) -> PaymentLink:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if await session.get(PaymentLinkModel, link.id) is not None:
                        raise DuplicateEntityError("PaymentLink", "id", link.id)
                    session.add(self._to_model(link))
        except IntegrityError as exc:
            # Lost the race to a concurrent insert of the same id
            raise DuplicateEntityError("PaymentLink", "id", link.id) from exc
        except SQLAlchemyError as exc:
            logger.error("Could not store payment link %s: %s", link.id, exc)
            raise StorageError(self._location, str(exc)) from exc
        logger.info("Stored payment link %s in %s", link.id, self._location)
        return link
