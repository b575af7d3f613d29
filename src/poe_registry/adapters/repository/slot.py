"""Staged-write slot shared by the repository adapters."""

from collections.abc import Callable

from poe_registry.domain.ports import ClaimRecord


class PendingSlot:
    """
    Implements ClaimSlot protocol for a locked fingerprint.

    Holds the record read under the lock, at most one staged replacement,
    and callbacks to run once that replacement is committed. Adapters
    apply `pending` only on a clean exit, then call run_after_commit()
    while the fingerprint is still locked.
    """

    def __init__(self, record: ClaimRecord | None) -> None:
        self.record = record
        self.pending: ClaimRecord | None = None
        self._after_commit: list[Callable[[], None]] = []

    def write(self, record: ClaimRecord) -> None:
        self.pending = record

    def after_commit(self, callback: Callable[[], None]) -> None:
        self._after_commit.append(callback)

    def run_after_commit(self) -> None:
        for callback in self._after_commit:
            callback()
