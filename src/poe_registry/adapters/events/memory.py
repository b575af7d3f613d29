"""
In-memory event sink adapters - Implement EventSink protocol.

MemoryEventSink keeps a bounded history that external observers can
read back; FanoutEventSink delivers to several sinks at once.
"""

import threading
from collections import deque

from poe_registry.domain.events import ClaimEvent
from poe_registry.domain.ports import EventSink


class MemoryEventSink:
    """Bounded, thread-safe event history (oldest events drop first)."""

    def __init__(self, max_events: int = 1000) -> None:
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._events: deque[ClaimEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def emit(self, event: ClaimEvent) -> None:
        with self._lock:
            self._events.append(event)

    def recent(self, limit: int | None = None) -> list[ClaimEvent]:
        """
        Return the most recent events, oldest first.

        Args:
            limit: Maximum number of events; None returns the whole history
        """
        with self._lock:
            events = list(self._events)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class FanoutEventSink:
    """Deliver each event to every wrapped sink, in order."""

    def __init__(self, *sinks: EventSink) -> None:
        self._sinks = sinks

    def emit(self, event: ClaimEvent) -> None:
        for sink in self._sinks:
            sink.emit(event)
