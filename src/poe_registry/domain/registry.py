"""
Claim registry domain service - Proof-of-existence state machine.

This module contains the core business logic for registering, revoking
and transferring claims on byte fingerprints.

Claim State Machine (per fingerprint)
=====================================

States:
- Absent: No claim was ever created (initial, never re-entered)
- Active(owner): Claim is valid; owner is the only actor allowed to mutate it
- Revoked(owner): Claim was revoked by its owner; the entry is kept

Valid Transitions:
    Absent        -> Active(o)   create by o
    Active(o)     -> Revoked(o)  revoke by o
    Active(o)     -> Active(x)   transfer by o to x != o
    Revoked(o)    -> Active(x)   transfer by o to x != o

Rejected:
    create on Active/Revoked     -> ProofAlreadyExists
    revoke/transfer on Absent    -> ProofNotExist
    revoke/transfer by non-owner -> NotProofOwner
    revoke on Revoked            -> ProofAlreadyRevoked
    transfer to self             -> CannotTransferToSelf

Every operation runs inside ClaimRepository.lock(), so checks and write
are one atomic step per fingerprint. A raised ClaimError discards the
staged write. Events are emitted after the write is committed but before
the fingerprint is unlocked, so events for one fingerprint reach the sink
in the same order as the writes. Sink failures are logged, never raised:
the write has already happened.
"""

import logging
from dataclasses import dataclass

from .events import ClaimCreated, ClaimEvent, ClaimRevoked, ClaimTransferred
from .exceptions import (
    CannotTransferToSelf,
    NotProofOwner,
    ProofAlreadyExists,
    ProofAlreadyRevoked,
    ProofNotExist,
)
from .ports import AccountId, ClaimRecord, ClaimRepository, EventSink, LogicalClock

logger = logging.getLogger(__name__)


@dataclass
class ClaimRegistry:
    """
    Domain service for proof-of-existence claims.

    Fingerprints are expected to be bounded already (see
    domain.fingerprint); requesters are expected to be authenticated.
    """

    repository: ClaimRepository
    clock: LogicalClock
    event_sink: EventSink

    def create(self, fingerprint: bytes, requester: AccountId) -> ClaimCreated:
        """
        Register a new claim owned by the requester.

        Args:
            fingerprint: Bounded claim fingerprint
            requester: Authenticated account id

        Returns:
            The emitted ClaimCreated event

        Raises:
            ProofAlreadyExists: If the fingerprint was ever registered,
                including when the existing claim is revoked
        """
        with self.repository.lock(fingerprint) as slot:
            if slot.record is not None:
                logger.debug("Create rejected, claim exists: 0x%s", fingerprint.hex())
                raise ProofAlreadyExists(fingerprint)
            slot.write(ClaimRecord(owner=requester, registered_at=self.clock.now(), active=True))
            event = ClaimCreated(owner=requester, claim=fingerprint)
            slot.after_commit(lambda: self._emit(event))

        return event

    def revoke(self, fingerprint: bytes, requester: AccountId) -> ClaimRevoked:
        """
        Mark an active claim as revoked.

        Checks run in order: existence, ownership, active flag.
        The revoke stamps registered_at with the current time point,
        replacing the original registration time.

        Raises:
            ProofNotExist: If the fingerprint was never registered
            NotProofOwner: If the requester is not the owner
            ProofAlreadyRevoked: If the claim is already inactive
        """
        with self.repository.lock(fingerprint) as slot:
            record = self._owned_record(fingerprint, slot.record, requester, "Revoke")
            if not record.active:
                logger.debug("Revoke rejected, already revoked: 0x%s", fingerprint.hex())
                raise ProofAlreadyRevoked(fingerprint)
            slot.write(ClaimRecord(owner=record.owner, registered_at=self.clock.now(), active=False))
            event = ClaimRevoked(owner=requester, claim=fingerprint)
            slot.after_commit(lambda: self._emit(event))

        return event

    def transfer(
        self, fingerprint: bytes, requester: AccountId, new_owner: AccountId
    ) -> ClaimTransferred:
        """
        Hand a claim over to another account.

        Checks run in order: existence, ownership, self-transfer.
        The active flag is not checked, and the new record is always
        active: transferring a revoked claim reactivates it.
        registered_at is carried over unchanged.

        Raises:
            ProofNotExist: If the fingerprint was never registered
            NotProofOwner: If the requester is not the owner
            CannotTransferToSelf: If new_owner is the requester
        """
        with self.repository.lock(fingerprint) as slot:
            record = self._owned_record(fingerprint, slot.record, requester, "Transfer")
            if new_owner == requester:
                logger.debug("Transfer rejected, self-transfer: 0x%s", fingerprint.hex())
                raise CannotTransferToSelf(fingerprint)
            slot.write(ClaimRecord(owner=new_owner, registered_at=record.registered_at, active=True))
            event = ClaimTransferred(old_owner=requester, new_owner=new_owner, claim=fingerprint)
            slot.after_commit(lambda: self._emit(event))

        return event

    def exists(self, fingerprint: bytes) -> bool:
        """Return True if a claim was ever created for the fingerprint."""
        return self.repository.get(fingerprint) is not None

    def get(self, fingerprint: bytes) -> ClaimRecord | None:
        """Return the stored record, or None if never created."""
        return self.repository.get(fingerprint)

    def _emit(self, event: ClaimEvent) -> None:
        """Hand an event to the sink; fire-and-forget, failures are logged."""
        try:
            self.event_sink.emit(event)
        except Exception:
            logger.exception("Event sink failed for %s", type(event).__name__)

    def _owned_record(
        self,
        fingerprint: bytes,
        record: ClaimRecord | None,
        requester: AccountId,
        operation: str,
    ) -> ClaimRecord:
        """Shared existence and ownership checks for revoke/transfer."""
        if record is None:
            logger.debug("%s rejected, no claim: 0x%s", operation, fingerprint.hex())
            raise ProofNotExist(fingerprint)
        if record.owner != requester:
            logger.debug("%s rejected, not owner: 0x%s", operation, fingerprint.hex())
            raise NotProofOwner(fingerprint)
        return record
