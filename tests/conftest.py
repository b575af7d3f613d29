"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A registry wired to in-memory adapters and a deterministic block clock
- Pre-hashed test accounts
- Test application and client setup
"""

from collections.abc import Callable, Generator

import bcrypt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from poe_registry.adapters.clock import BlockClock
from poe_registry.adapters.events import MemoryEventSink
from poe_registry.adapters.repository import InMemoryClaimRepository
from poe_registry.api.main import create_app
from poe_registry.config.settings import Settings
from poe_registry.domain.registry import ClaimRegistry

# Low bcrypt cost keeps the suite fast; production hashes use cost >= 10
TEST_SECRETS = {
    "alice": "alice-secret",
    "bob": "bob-secret",
    "carol": "carol-secret",
    "dave": "dave-secret",
}


def _hash(secret: str) -> str:
    return bcrypt.hashpw(secret.encode(), bcrypt.gensalt(rounds=4)).decode()


@pytest.fixture(scope="session")
def account_hashes() -> dict[str, str]:
    """Account id -> bcrypt hash for the test accounts."""
    return {account: _hash(secret) for account, secret in TEST_SECRETS.items()}


@pytest.fixture
def repository() -> InMemoryClaimRepository:
    return InMemoryClaimRepository()


@pytest.fixture
def clock() -> BlockClock:
    return BlockClock(start=1)


@pytest.fixture
def event_sink() -> MemoryEventSink:
    return MemoryEventSink()


@pytest.fixture
def registry(
    repository: InMemoryClaimRepository, clock: BlockClock, event_sink: MemoryEventSink
) -> ClaimRegistry:
    """Registry wired to in-memory storage, block clock and event history."""
    return ClaimRegistry(repository=repository, clock=clock, event_sink=event_sink)


@pytest.fixture
def settings(account_hashes: dict[str, str]) -> Settings:
    """Settings for a fully in-memory application."""
    return Settings(
        storage_backend="memory",
        clock_backend="block",
        genesis_block=1,
        max_claim_length=8,
        accounts=account_hashes,
        _env_file=None,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with lifespan startup/shutdown applied."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth() -> Callable[[str], tuple[str, str]]:
    """Build the HTTP BASIC AUTH tuple for a test account."""

    def _auth(account: str) -> tuple[str, str]:
        return account, TEST_SECRETS[account]

    return _auth
