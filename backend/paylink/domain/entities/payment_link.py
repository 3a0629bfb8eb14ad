"""Domain entities for issued payment links and their validation outcome."""

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def _timestamp(field: str, value: Any) -> int:
    """Coerce a persisted epoch-millisecond value, rejecting non-integral numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field} must be a number, got {type(value).__name__}")
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise ValueError(f"{field} must be a whole number of milliseconds, got {value!r}")
    return int(value)


class LinkState(str, Enum):
    """Computed validity of a link, never stored."""

    ACTIVE = "active"
    EXPIRED = "expired"


class InvalidReason(str, Enum):
    """Why a validation came back negative."""

    MISSING_ID = "missing id"
    NOT_FOUND = "not found"
    EXPIRED = "expired"
    SERVER_ERROR = "server error"


@dataclass(frozen=True)
class PaymentLink:
    """One issued payment record.

    Immutable after creation. Expiry is a function of wall-clock time at
    query time; an expired link is still a valid stored entity.
    """

    id: str
    amount: str
    created_at: int
    expires_at: int | None

    def state_at(self, now: int) -> LinkState:
        """Active while ``now <= expires_at``; a link without expiry never expires."""
        if self.expires_at is not None and now > self.expires_at:
            return LinkState.EXPIRED
        return LinkState.ACTIVE

    def to_document(self) -> dict[str, Any]:
        """Serialize to the persisted record object (identifier is the mapping key)."""
        return {
            "amount": self.amount,
            "createdAt": self.created_at,
            "expiresAt": self.expires_at,
        }

    @classmethod
    def from_document(cls, link_id: str, document: dict[str, Any]) -> "PaymentLink":
        """Build an entity from a persisted record object.

        Raises ValueError/TypeError/KeyError on a malformed document; callers
        in the storage layer translate those into StorageError.
        """
        amount = document["amount"]
        if not isinstance(amount, str):
            raise TypeError(f"amount must be a string, got {type(amount).__name__}")
        created_at = document.get("createdAt")
        expires_at = document.get("expiresAt")
        return cls(
            id=link_id,
            amount=amount,
            created_at=_timestamp("createdAt", created_at) if created_at is not None else 0,
            expires_at=_timestamp("expiresAt", expires_at) if expires_at is not None else None,
        )


@dataclass(frozen=True)
class IssuedLink:
    """Result of a successful generate call."""

    id: str
    link: str
    expires_at: int


@dataclass(frozen=True)
class LinkValidation:
    """Outcome of validating an identifier."""

    valid: bool
    amount: str | None = None
    expires_at: int | None = None
    reason: InvalidReason | None = None

    @classmethod
    def accepted(cls, link: PaymentLink) -> "LinkValidation":
        return cls(valid=True, amount=link.amount, expires_at=link.expires_at)

    @classmethod
    def rejected(cls, reason: InvalidReason) -> "LinkValidation":
        return cls(valid=False, reason=reason)
