"""Event sink adapters - EventSink implementations."""

from .logging_sink import LoggingEventSink
from .memory import FanoutEventSink, MemoryEventSink

__all__ = ["FanoutEventSink", "LoggingEventSink", "MemoryEventSink"]
