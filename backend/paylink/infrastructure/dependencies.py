"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends

from paylink.config import get_settings
from paylink.application.interfaces import PaymentLinkRepository
from paylink.application.services import LinkPolicy, PaymentLinkService
from paylink.infrastructure.storage.json_link_store import JsonFileLinkStore

logger = logging.getLogger(__name__)


@lru_cache
def get_link_policy() -> LinkPolicy:
    """Issuing policy, built once from settings and shared by every request."""
    return LinkPolicy.from_settings(get_settings())


@lru_cache
def get_payment_link_repository() -> PaymentLinkRepository:
    """Process-wide store instance.

    The JSON store must be a singleton: its lock only serializes callers
    that share the same instance.
    """
    settings = get_settings()
    if settings.storage_backend == "sqlite":
        from paylink.infrastructure.database import async_session_factory
        from paylink.infrastructure.database.repositories import SQLAlchemyPaymentLinkRepository

        logger.info("Using SQLite payment link store at %s", settings.database_url)
        return SQLAlchemyPaymentLinkRepository(async_session_factory, location=settings.database_url)

    logger.info("Using JSON payment link store at %s", settings.storage_path)
    return JsonFileLinkStore(settings.storage_path)


async def get_payment_link_service(
    repository: PaymentLinkRepository = Depends(get_payment_link_repository),
    policy: LinkPolicy = Depends(get_link_policy),
) -> AsyncGenerator[PaymentLinkService, None]:
    """Provides a PaymentLinkService instance with its store wired up."""
    yield PaymentLinkService(repository, policy)
