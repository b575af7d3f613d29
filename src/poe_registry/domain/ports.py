"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the record type the registry stores and the
interfaces (ports) the domain requires from its host environment.
Adapters implement these protocols.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol

from .events import ClaimEvent

AccountId = str
TimePoint = int


@dataclass(frozen=True)
class ClaimRecord:
    """
    Value stored for a registered fingerprint.

    Attributes:
        owner: Account currently authorized to revoke or transfer the claim
        registered_at: Logical time point of the last create/revoke write
            (transfers keep the previous value)
        active: False once the claim has been revoked
    """

    owner: AccountId
    registered_at: TimePoint
    active: bool


class ClaimSlot(Protocol):
    """
    Locked view of a single fingerprint's entry.

    Handed out by ClaimRepository.lock(). The write is applied only when
    the surrounding block exits without raising.
    """

    record: ClaimRecord | None

    def write(self, record: ClaimRecord) -> None:
        """Stage a replacement record for the locked fingerprint."""
        ...

    def after_commit(self, callback: Callable[[], None]) -> None:
        """
        Run callback once the staged write is committed.

        Callbacks run in registration order before the fingerprint is
        unlocked, and never run if the block raises.
        """
        ...


class ClaimRepository(Protocol):
    """Port interface for claim persistence."""

    def lock(self, fingerprint: bytes) -> AbstractContextManager[ClaimSlot]:
        """
        Serialize access to one fingerprint for a read-check-write cycle.

        Mutations to the same fingerprint are totally ordered, and so are
        their after-commit callbacks. If the block raises, the
        staged write is discarded and storage is left untouched.

        Args:
            fingerprint: Bounded claim fingerprint

        Returns:
            Context manager yielding the ClaimSlot for the fingerprint
        """
        ...

    def get(self, fingerprint: bytes) -> ClaimRecord | None:
        """
        Read the committed record for a fingerprint.

        Args:
            fingerprint: Bounded claim fingerprint

        Returns:
            The stored ClaimRecord, or None if never created
        """
        ...


class LogicalClock(Protocol):
    """Port interface for the monotonic logical clock."""

    def now(self) -> TimePoint:
        """Return the current, totally-ordered time point."""
        ...


class EventSink(Protocol):
    """Port interface for surfacing events to external observers."""

    def emit(self, event: ClaimEvent) -> None:
        """
        Deliver an event. Fire-and-forget: no acknowledgment, no retry.

        Args:
            event: ClaimCreated, ClaimRevoked or ClaimTransferred
        """
        ...


class IdentityProvider(Protocol):
    """Port interface for actor authentication."""

    def authenticate(self, account: str, secret: str) -> AccountId:
        """
        Resolve credentials to an authenticated account id.

        Args:
            account: Claimed account id
            secret: Account secret

        Returns:
            The authenticated account id

        Raises:
            AuthenticationFailed: If the credentials are not valid
        """
        ...
