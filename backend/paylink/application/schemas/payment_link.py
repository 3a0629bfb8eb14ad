"""Pydantic DTOs (Data Transfer Objects) for the PaymentLink feature."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentLinkCreate(BaseModel):
    """Schema for issuing a new payment link."""

    model_config = ConfigDict(populate_by_name=True)

    amount: str | None = Field(None, max_length=64, examples=["10.00"])
    expiry_minutes: Any = Field(None, alias="expiryMinutes", examples=[30])
    id: str | None = Field(None, max_length=255, examples=["promo1"])

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, value: Any) -> Any:
        """Accept JSON numbers and keep them as plain decimal text (10 → "10", 1.5e-07 → "0.00000015")."""
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if value.is_integer():
                return str(int(value))
            return format(Decimal(repr(value)), "f")
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class PaymentLinkIssued(BaseModel):
    """Schema returned after a link was issued."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    link: str
    expires_at: int = Field(..., alias="expiresAt")


class PaymentLinkValidationResponse(BaseModel):
    """Validation outcome. Carries ``amount``/``expiresAt`` when valid, ``reason`` otherwise."""

    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    amount: str | None = None
    expires_at: int | None = Field(None, alias="expiresAt")
    reason: str | None = None


class PaymentLinkRecord(BaseModel):
    """One entry of the admin dump, in the persisted record shape."""

    model_config = ConfigDict(populate_by_name=True)

    amount: str
    created_at: int = Field(..., alias="createdAt")
    expires_at: int | None = Field(None, alias="expiresAt")
