"""
Shared fixtures for adversarial tests.

Provides a registry on in-memory storage for race condition and
unauthorized-mutation tests.
"""

import pytest

from poe_registry.adapters.clock import BlockClock
from poe_registry.adapters.events import MemoryEventSink
from poe_registry.adapters.repository import InMemoryClaimRepository
from poe_registry.domain.registry import ClaimRegistry

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def history() -> MemoryEventSink:
    return MemoryEventSink(max_events=10_000)


@pytest.fixture
def shared_registry(history: MemoryEventSink) -> ClaimRegistry:
    """One registry shared by every simulated attacker thread."""
    return ClaimRegistry(
        repository=InMemoryClaimRepository(),
        clock=BlockClock(start=1),
        event_sink=history,
    )
