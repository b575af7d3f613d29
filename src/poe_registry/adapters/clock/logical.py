"""
Logical clock adapters - Implement LogicalClock protocol.

The registry treats time points as opaque integers; these adapters
decide what the integers mean.
"""

import threading
import time


class BlockClock:
    """
    Block-number style counter.

    Time only moves when advance() is called, so every operation within
    one "block" shares a time point. Deterministic, which makes it the
    clock of choice for tests and embedded use.
    """

    def __init__(self, start: int = 0) -> None:
        self._block = start
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._block

    def advance(self, blocks: int = 1) -> int:
        """
        Move the clock forward.

        Args:
            blocks: Number of blocks to advance (must be >= 0)

        Returns:
            The new current block number
        """
        if blocks < 0:
            raise ValueError("BlockClock cannot move backwards")
        with self._lock:
            self._block += blocks
            return self._block


class SystemClock:
    """
    Integer Unix seconds from the system clock.

    Clamped to the last returned value so wall-clock adjustments never
    produce a time point earlier than one already handed out.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(time.time()))
            return self._last
