"""Fixed pool of striped locks keyed by fingerprint."""

import threading
import zlib


class StripedLocks:
    """
    Maps every fingerprint onto one of a fixed number of locks.

    Memory stays constant no matter how many fingerprints are touched.
    Two fingerprints on the same stripe serialize against each other;
    fingerprints on different stripes proceed in parallel. Each caller
    holds at most one stripe at a time, so stripes cannot deadlock.
    """

    def __init__(self, stripes: int = 64) -> None:
        if stripes < 1:
            raise ValueError("stripes must be at least 1")
        self._locks = tuple(threading.Lock() for _ in range(stripes))

    def index(self, fingerprint: bytes) -> int:
        # crc32 rather than hash(): stable across processes and PYTHONHASHSEED
        return zlib.crc32(fingerprint) % len(self._locks)

    def for_key(self, fingerprint: bytes) -> threading.Lock:
        return self._locks[self.index(fingerprint)]

    def __len__(self) -> int:
        return len(self._locks)
