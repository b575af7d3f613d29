"""
In-memory repository adapter - Implements ClaimRepository protocol.

Keeps the registry mapping in a process-local dict. Fingerprints are
guarded by a fixed pool of striped locks, so operations on the same key
are totally ordered and lock memory does not grow with traffic.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from poe_registry.domain.ports import ClaimRecord

from .locks import StripedLocks
from .slot import PendingSlot


class InMemoryClaimRepository:
    """
    Implements ClaimRepository protocol with a dict and striped locks.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Entries are never removed.
    """

    def __init__(self, lock_stripes: int = 64) -> None:
        self._records: dict[bytes, ClaimRecord] = {}
        self._locks = StripedLocks(lock_stripes)

    @contextmanager
    def lock(self, fingerprint: bytes) -> Iterator[PendingSlot]:
        """
        Lock one fingerprint and yield its slot.

        The staged record replaces the stored one only when the block
        exits cleanly; an exception leaves the mapping untouched.
        After-commit callbacks run before the lock is released.
        """
        with self._locks.for_key(fingerprint):
            slot = PendingSlot(self._records.get(fingerprint))
            yield slot
            if slot.pending is not None:
                self._records[fingerprint] = slot.pending
            slot.run_after_commit()

    def get(self, fingerprint: bytes) -> ClaimRecord | None:
        return self._records.get(fingerprint)

    def __len__(self) -> int:
        return len(self._records)
