"""Abstract repository interface (port) for PaymentLink persistence."""

from abc import ABC, abstractmethod

from paylink.domain.entities import PaymentLink


class PaymentLinkRepository(ABC):
    """Port for payment link persistence — implemented in the infrastructure layer.

    Implementations own the identifier → link mapping and must make
    ``create`` an atomic check-and-insert with respect to other callers.
    """

    @abstractmethod
    async def get_by_id(self, link_id: str) -> PaymentLink | None:
        """Retrieve a single link by its identifier, or None if unknown."""
        ...

    @abstractmethod
    async def get_all(self) -> dict[str, PaymentLink]:
        """Return a copy of the full identifier → link mapping."""
        ...

    @abstractmethod
    async def create(self, link: PaymentLink) -> PaymentLink:
        """Persist a new link. Raises DuplicateEntityError if the id is taken."""
        ...
