"""
API v1 routes.

Defines REST endpoints for the proof-of-existence claim registry.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from poe_registry.adapters.events import MemoryEventSink
from poe_registry.api.dependencies import (
    get_authenticated_account,
    get_event_history,
    get_path_fingerprint,
    get_registry,
    get_settings_from_app,
    parse_claim,
)
from poe_registry.api.models import (
    ClaimResponse,
    CreateClaimRequest,
    ErrorResponse,
    EventResponse,
    TransferClaimRequest,
)
from poe_registry.config.settings import Settings
from poe_registry.domain.exceptions import (
    CannotTransferToSelf,
    ClaimError,
    NotProofOwner,
    ProofAlreadyExists,
    ProofAlreadyRevoked,
    ProofNotExist,
)
from poe_registry.domain.registry import ClaimRegistry

router = APIRouter(tags=["v1"])

# Domain error -> HTTP status. The detail is always the error name.
_ERROR_STATUS: dict[type[ClaimError], int] = {
    ProofAlreadyExists: status.HTTP_409_CONFLICT,
    ProofNotExist: status.HTTP_404_NOT_FOUND,
    NotProofOwner: status.HTTP_403_FORBIDDEN,
    ProofAlreadyRevoked: status.HTTP_409_CONFLICT,
    CannotTransferToSelf: status.HTTP_400_BAD_REQUEST,
}


def _claim_http_error(error: ClaimError) -> HTTPException:
    return HTTPException(
        status_code=_ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail=type(error).__name__,
    )


@router.post(
    "/claims",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        409: {"model": ErrorResponse, "description": "ProofAlreadyExists"},
        422: {"description": "Validation error or fingerprint too long"},
    },
    summary="Create a claim",
    description="Register a hex-encoded fingerprint as owned by the authenticated account.",
)
async def create_claim(
    request_data: CreateClaimRequest,
    account: str = Depends(get_authenticated_account),
    settings: Settings = Depends(get_settings_from_app),
    registry: ClaimRegistry = Depends(get_registry),
) -> EventResponse:
    """
    Create a claim.

    - **claim**: Hex-encoded fingerprint, at most `max_claim_length` bytes

    Returns the emitted ClaimCreated event.
    """
    fingerprint = parse_claim(request_data.claim, settings)
    try:
        event = registry.create(fingerprint, account)
    except ClaimError as e:
        raise _claim_http_error(e) from None
    return EventResponse.from_event(event)


@router.post(
    "/claims/{claim}/revoke",
    response_model=EventResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "NotProofOwner"},
        404: {"model": ErrorResponse, "description": "ProofNotExist"},
        409: {"model": ErrorResponse, "description": "ProofAlreadyRevoked"},
        422: {"description": "Fingerprint malformed or too long"},
    },
    summary="Revoke a claim",
    description="Mark a claim owned by the authenticated account as inactive.",
)
async def revoke_claim(
    fingerprint: bytes = Depends(get_path_fingerprint),
    account: str = Depends(get_authenticated_account),
    registry: ClaimRegistry = Depends(get_registry),
) -> EventResponse:
    """Revoke a claim. Returns the emitted ClaimRevoked event."""
    try:
        event = registry.revoke(fingerprint, account)
    except ClaimError as e:
        raise _claim_http_error(e) from None
    return EventResponse.from_event(event)


@router.post(
    "/claims/{claim}/transfer",
    response_model=EventResponse,
    responses={
        400: {"model": ErrorResponse, "description": "CannotTransferToSelf"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "NotProofOwner"},
        404: {"model": ErrorResponse, "description": "ProofNotExist"},
        422: {"description": "Validation error or fingerprint too long"},
    },
    summary="Transfer a claim",
    description="Hand a claim owned by the authenticated account over to another account. "
    "Transferring a revoked claim reactivates it.",
)
async def transfer_claim(
    request_data: TransferClaimRequest,
    fingerprint: bytes = Depends(get_path_fingerprint),
    account: str = Depends(get_authenticated_account),
    registry: ClaimRegistry = Depends(get_registry),
) -> EventResponse:
    """
    Transfer a claim.

    - **new_owner**: Account id receiving the claim

    Returns the emitted ClaimTransferred event.
    """
    try:
        event = registry.transfer(fingerprint, account, request_data.new_owner)
    except ClaimError as e:
        raise _claim_http_error(e) from None
    return EventResponse.from_event(event)


@router.get(
    "/claims/{claim}",
    response_model=ClaimResponse,
    responses={
        404: {"model": ErrorResponse, "description": "ProofNotExist"},
        422: {"description": "Fingerprint malformed or too long"},
    },
    summary="Look up a claim",
)
async def get_claim(
    fingerprint: bytes = Depends(get_path_fingerprint),
    registry: ClaimRegistry = Depends(get_registry),
) -> ClaimResponse:
    """Return the stored record, including revoked claims."""
    record = registry.get(fingerprint)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ProofNotExist.__name__,
        )
    return ClaimResponse.from_record(fingerprint, record)


@router.get(
    "/events",
    response_model=list[EventResponse],
    summary="List recent claim events",
)
async def list_events(
    limit: int = Query(default=100, ge=1, le=1000),
    history: MemoryEventSink = Depends(get_event_history),
) -> list[EventResponse]:
    """Most recent events, oldest first."""
    return [EventResponse.from_event(event) for event in history.recent(limit)]
