"""Payment link endpoints: issue, validate and optionally dump links."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from paylink.config import Settings, get_settings
from paylink.application.schemas import (
    PaymentLinkCreate,
    PaymentLinkIssued,
    PaymentLinkRecord,
    PaymentLinkValidationResponse,
)
from paylink.application.services import PaymentLinkService
from paylink.domain.entities import InvalidReason
from paylink.domain.exceptions import (
    DuplicateEntityError,
    IdentifierExhaustedError,
    InvalidInputError,
    StorageError,
)
from paylink.infrastructure.dependencies import get_payment_link_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payment Links"])

_REASON_STATUS = {
    InvalidReason.MISSING_ID: status.HTTP_400_BAD_REQUEST,
    InvalidReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    InvalidReason.EXPIRED: status.HTTP_410_GONE,
    InvalidReason.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    "/payment-links",
    response_model=PaymentLinkIssued,
    status_code=status.HTTP_201_CREATED,
)
async def create_payment_link(
    data: PaymentLinkCreate,
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> PaymentLinkIssued:
    """Issue a new payment link and return its id, URL and expiry."""
    try:
        issued = await service.generate(
            amount=data.amount,
            expiry_minutes=data.expiry_minutes,
            requested_id=data.id,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DuplicateEntityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="id exists")
    except (StorageError, IdentifierExhaustedError):
        logger.exception("Failed to issue payment link")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="server error"
        )
    return PaymentLinkIssued(id=issued.id, link=issued.link, expires_at=issued.expires_at)


@router.get(
    "/payment-links/validate",
    response_model=PaymentLinkValidationResponse,
    response_model_exclude_none=True,
)
async def validate_payment_link(
    response: Response,
    link_id: str | None = Query(None, alias="id", description="Identifier embedded in the link"),
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> PaymentLinkValidationResponse:
    """Check whether a link id is known and unexpired."""
    try:
        result = await service.validate(link_id)
    except StorageError:
        logger.exception("Failed to validate payment link %s", link_id)
        response.status_code = _REASON_STATUS[InvalidReason.SERVER_ERROR]
        return PaymentLinkValidationResponse(valid=False, reason=InvalidReason.SERVER_ERROR.value)

    if not result.valid:
        response.status_code = _REASON_STATUS[result.reason]
        return PaymentLinkValidationResponse(valid=False, reason=result.reason.value)
    return PaymentLinkValidationResponse(
        valid=True, amount=result.amount, expires_at=result.expires_at
    )


@router.get("/admin/payment-links", response_model=dict[str, PaymentLinkRecord])
async def list_payment_links(
    service: PaymentLinkService = Depends(get_payment_link_service),
    settings: Settings = Depends(get_settings),
) -> dict[str, PaymentLinkRecord]:
    """Dump every stored link. Disabled unless ``admin_list_enabled`` is set."""
    if not settings.admin_list_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    try:
        links = await service.list_links()
    except StorageError:
        logger.exception("Failed to list payment links")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="server error"
        )
    return {
        link_id: PaymentLinkRecord(
            amount=link.amount, created_at=link.created_at, expires_at=link.expires_at
        )
        for link_id, link in links.items()
    }
