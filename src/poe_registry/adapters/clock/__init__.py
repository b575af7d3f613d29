"""Clock adapters - LogicalClock implementations."""

from .logical import BlockClock, SystemClock

__all__ = ["BlockClock", "SystemClock"]
