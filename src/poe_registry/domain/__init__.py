"""
Domain layer - Pure business logic with zero framework imports.

This package contains the proof-of-existence claim registry. It defines
its own port interfaces for storage, time, events and identity, keeping
the registry decoupled from any host environment.
"""

from .events import ClaimCreated, ClaimEvent, ClaimRevoked, ClaimTransferred
from .exceptions import (
    AuthenticationFailed,
    CannotTransferToSelf,
    ClaimError,
    NotProofOwner,
    ProofAlreadyExists,
    ProofAlreadyRevoked,
    ProofNotExist,
)
from .fingerprint import FingerprintTooLong, InvalidFingerprint, bound_fingerprint
from .ports import (
    ClaimRecord,
    ClaimRepository,
    ClaimSlot,
    EventSink,
    IdentityProvider,
    LogicalClock,
)
from .registry import ClaimRegistry

__all__ = [
    "AuthenticationFailed",
    "CannotTransferToSelf",
    "ClaimCreated",
    "ClaimError",
    "ClaimEvent",
    "ClaimRecord",
    "ClaimRegistry",
    "ClaimRepository",
    "ClaimRevoked",
    "ClaimSlot",
    "ClaimTransferred",
    "EventSink",
    "FingerprintTooLong",
    "IdentityProvider",
    "InvalidFingerprint",
    "LogicalClock",
    "NotProofOwner",
    "ProofAlreadyExists",
    "ProofAlreadyRevoked",
    "ProofNotExist",
    "bound_fingerprint",
]
