"""Application service (use case) for issuing and validating payment links."""

import logging
import secrets
from collections.abc import Callable

from paylink.application.interfaces import PaymentLinkRepository
from paylink.application.services.link_policy import (
    LinkPolicy,
    build_redemption_link,
    expiry_timestamp,
    normalize_amount,
    resolve_expiry_minutes,
)
from paylink.domain.entities import (
    InvalidReason,
    IssuedLink,
    LinkState,
    LinkValidation,
    PaymentLink,
    now_ms,
)
from paylink.domain.exceptions import DuplicateEntityError, IdentifierExhaustedError

logger = logging.getLogger(__name__)


class PaymentLinkService:
    """Orchestrates link generation and validation. Depends on the repository port (DI).

    ``clock`` returns epoch milliseconds and ``id_factory`` turns a byte count
    into a random identifier; both are injectable so tests can control time
    and force collisions.
    """

    def __init__(
        self,
        repository: PaymentLinkRepository,
        policy: LinkPolicy,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[int], str] = secrets.token_hex,
    ):
        self._repository = repository
        self._policy = policy
        self._clock = clock
        self._id_factory = id_factory

    async def generate(
        self,
        amount: str | None,
        expiry_minutes: object = None,
        requested_id: str | None = None,
    ) -> IssuedLink:
        """Issue a new link and return its identifier, URL and expiry.

        Raises InvalidInputError for a missing/malformed amount,
        DuplicateEntityError when ``requested_id`` is taken and
        IdentifierExhaustedError when no random identifier was free.
        """
        amount_text = normalize_amount(amount)
        minutes = resolve_expiry_minutes(expiry_minutes, self._policy.default_expiry_minutes)
        created_at = self._clock()
        expires_at = expiry_timestamp(created_at, minutes)

        link_id = (requested_id or "").strip()
        if link_id:
            stored = await self._repository.create(
                PaymentLink(id=link_id, amount=amount_text, created_at=created_at, expires_at=expires_at)
            )
        else:
            stored = await self._create_with_random_id(amount_text, created_at, expires_at)

        logger.info(
            "Issued payment link id=%s amount=%s expires_at=%d (%.2f min)",
            stored.id, stored.amount, expires_at, minutes,
        )
        return IssuedLink(
            id=stored.id,
            link=build_redemption_link(self._policy.base_url, stored.amount, stored.id),
            expires_at=expires_at,
        )

    async def _create_with_random_id(
        self, amount: str, created_at: int, expires_at: int
    ) -> PaymentLink:
        attempts = self._policy.max_id_attempts
        for attempt in range(1, attempts + 1):
            candidate = self._id_factory(self._policy.id_bytes)
            try:
                return await self._repository.create(
                    PaymentLink(id=candidate, amount=amount, created_at=created_at, expires_at=expires_at)
                )
            except DuplicateEntityError:
                logger.warning("Identifier collision on %s (attempt %d/%d)", candidate, attempt, attempts)
        raise IdentifierExhaustedError(attempts)

    async def validate(self, link_id: str | None) -> LinkValidation:
        """Check whether ``link_id`` names an unexpired link. Side-effect free."""
        key = (link_id or "").strip()
        if not key:
            return LinkValidation.rejected(InvalidReason.MISSING_ID)

        link = await self._repository.get_by_id(key)
        if link is None:
            logger.debug("Validation miss for id=%s", key)
            return LinkValidation.rejected(InvalidReason.NOT_FOUND)

        if link.state_at(self._clock()) is LinkState.EXPIRED:
            logger.debug("Validation of expired id=%s (expired at %s)", key, link.expires_at)
            return LinkValidation.rejected(InvalidReason.EXPIRED)

        return LinkValidation.accepted(link)

    async def list_links(self) -> dict[str, PaymentLink]:
        return await self._repository.get_all()
