"""In-memory test doubles shared by the unit and integration tests."""

from paylink.application.interfaces import PaymentLinkRepository
from paylink.domain.entities import PaymentLink
from paylink.domain.exceptions import DuplicateEntityError

START_MS = 1_700_000_000_000


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


class FakePaymentLinkRepository(PaymentLinkRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self, links: dict[str, PaymentLink] | None = None):
        self._links: dict[str, PaymentLink] = dict(links or {})
        self.create_calls = 0

    async def get_by_id(self, link_id: str) -> PaymentLink | None:
        return self._links.get(link_id)

    async def get_all(self) -> dict[str, PaymentLink]:
        return dict(self._links)

    async def create(self, link: PaymentLink) -> PaymentLink:
        self.create_calls += 1
        if link.id in self._links:
            raise DuplicateEntityError("PaymentLink", "id", link.id)
        self._links[link.id] = link
        return link
