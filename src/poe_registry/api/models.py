"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field

from poe_registry.domain.events import (
    ClaimCreated,
    ClaimEvent,
    ClaimRevoked,
    ClaimTransferred,
)
from poe_registry.domain.fingerprint import format_fingerprint
from poe_registry.domain.ports import ClaimRecord

HEX_FINGERPRINT_PATTERN = r"^(0x|0X)?([0-9a-fA-F]{2})+$"


class CreateClaimRequest(BaseModel):
    """Request model for claim creation."""

    claim: str = Field(
        ...,
        pattern=HEX_FINGERPRINT_PATTERN,
        description="Hex-encoded fingerprint (optional 0x prefix)",
    )


class TransferClaimRequest(BaseModel):
    """Request model for claim transfer."""

    new_owner: str = Field(..., min_length=1, description="Account id of the new owner")


class ClaimResponse(BaseModel):
    """Response model for a stored claim record."""

    claim: str
    owner: str
    registered_at: int
    active: bool

    @classmethod
    def from_record(cls, fingerprint: bytes, record: ClaimRecord) -> "ClaimResponse":
        return cls(
            claim=format_fingerprint(fingerprint),
            owner=record.owner,
            registered_at=record.registered_at,
            active=record.active,
        )


class EventResponse(BaseModel):
    """Response model for an emitted claim event."""

    event: str
    claim: str
    owner: str | None = None
    old_owner: str | None = None
    new_owner: str | None = None

    @classmethod
    def from_event(cls, event: ClaimEvent) -> "EventResponse":
        if not isinstance(event, (ClaimCreated, ClaimRevoked, ClaimTransferred)):
            raise TypeError(f"Unknown event type: {type(event).__name__}")

        claim = format_fingerprint(event.claim)
        if isinstance(event, ClaimTransferred):
            return cls(
                event="ClaimTransferred",
                claim=claim,
                old_owner=event.old_owner,
                new_owner=event.new_owner,
            )
        if isinstance(event, ClaimRevoked):
            return cls(event="ClaimRevoked", claim=claim, owner=event.owner)
        return cls(event="ClaimCreated", claim=claim, owner=event.owner)


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
