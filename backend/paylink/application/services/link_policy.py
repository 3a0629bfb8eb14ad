"""Issuing policy for payment links: amount, expiry and link construction.

All helpers are pure functions.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any
from urllib.parse import quote

from paylink.config import Settings
from paylink.domain.exceptions import InvalidInputError

DEFAULT_EXPIRY_MINUTES = 30.0
DEFAULT_MAX_ID_ATTEMPTS = 10
DEFAULT_ID_BYTES = 6

# 100 years; longer requested durations are clamped to it
MAX_EXPIRY_MINUTES = 100 * 365 * 24 * 60

# encodeURIComponent keeps these on top of the RFC 3986 unreserved set
_COMPONENT_SAFE = "!~*'()"


@dataclass(frozen=True)
class LinkPolicy:
    """Immutable issuing configuration, built once at startup and injected."""

    base_url: str
    default_expiry_minutes: float = DEFAULT_EXPIRY_MINUTES
    max_id_attempts: int = DEFAULT_MAX_ID_ATTEMPTS
    id_bytes: int = DEFAULT_ID_BYTES

    def __post_init__(self) -> None:
        if not math.isfinite(self.default_expiry_minutes) or self.default_expiry_minutes <= 0:
            raise ValueError("default_expiry_minutes must be a positive number")
        if self.default_expiry_minutes > MAX_EXPIRY_MINUTES:
            raise ValueError(f"default_expiry_minutes must not exceed {MAX_EXPIRY_MINUTES}")
        if self.max_id_attempts < 1:
            raise ValueError("max_id_attempts must be at least 1")
        if self.id_bytes < 6:
            # ids must span at least 2**48 values
            raise ValueError("id_bytes must be at least 6")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LinkPolicy":
        return cls(
            base_url=settings.base_url,
            default_expiry_minutes=settings.default_expiry_minutes,
            max_id_attempts=settings.max_id_attempts,
            id_bytes=settings.id_bytes,
        )


def normalize_amount(raw: str | None) -> str:
    """Return the trimmed amount text, or raise InvalidInputError.

    The text is kept verbatim (no float round-trip); it only has to parse as
    a finite, strictly positive decimal.
    """
    text = (raw or "").strip()
    if not text:
        raise InvalidInputError("amount", "missing amount")
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidInputError("amount", f"'{text}' is not a decimal number")
    if not value.is_finite() or value <= 0:
        raise InvalidInputError("amount", "amount must be a positive number")
    return text


def resolve_expiry_minutes(raw: Any, default: float = DEFAULT_EXPIRY_MINUTES) -> float:
    """Parse an expiry duration in minutes, falling back to ``default``.

    Missing, unparsable, non-finite, zero and negative values all resolve to
    the default. Durations above MAX_EXPIRY_MINUTES are clamped to it.
    Fractional minutes are kept.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if not isinstance(raw, (int, float, str)):
        return default
    try:
        minutes = float(raw.strip() if isinstance(raw, str) else raw)
    except (ValueError, OverflowError):
        return default
    if not math.isfinite(minutes) or minutes <= 0:
        return default
    return min(minutes, float(MAX_EXPIRY_MINUTES))


def expiry_timestamp(created_at: int, minutes: float) -> int:
    """Epoch milliseconds at which a link created at ``created_at`` expires."""
    return created_at + int(round(minutes * 60_000))


def build_redemption_link(base_url: str, amount: str, link_id: str) -> str:
    """Embed amount and identifier as query parameters of the payment page URL."""
    return (
        f"{base_url.rstrip('/')}/"
        f"?amount={quote(amount, safe=_COMPONENT_SAFE)}"
        f"&id={quote(link_id, safe=_COMPONENT_SAFE)}"
    )
