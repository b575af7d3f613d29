"""
Domain events - Records emitted after a successful claim mutation.

Events are handed to the EventSink port once the write has been applied.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClaimCreated:
    """A fingerprint was registered by its first owner."""

    owner: str
    claim: bytes


@dataclass(frozen=True)
class ClaimRevoked:
    """An owner marked its claim inactive."""

    owner: str
    claim: bytes


@dataclass(frozen=True)
class ClaimTransferred:
    """Ownership moved from old_owner to new_owner."""

    old_owner: str
    new_owner: str
    claim: bytes


ClaimEvent = ClaimCreated | ClaimRevoked | ClaimTransferred
