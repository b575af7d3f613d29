"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance, wires the claim
registry to its adapters, and manages lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from poe_registry import __version__
from poe_registry.adapters.clock import BlockClock, SystemClock
from poe_registry.adapters.events import FanoutEventSink, LoggingEventSink, MemoryEventSink
from poe_registry.adapters.identity import BcryptAccountDirectory
from poe_registry.adapters.repository import (
    InMemoryClaimRepository,
    PostgresClaimRepository,
    run_migrations,
)
from poe_registry.api.v1 import router as v1_router
from poe_registry.config.settings import Settings, get_settings
from poe_registry.domain.ports import ClaimRepository, LogicalClock
from poe_registry.domain.registry import ClaimRegistry

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Proof-of-Existence Claim Registry API v1 - Create, revoke and transfer claims",
    },
]


def build_clock(settings: Settings) -> LogicalClock:
    """Select the logical clock adapter from settings."""
    if settings.clock_backend == "block":
        return BlockClock(start=settings.genesis_block)
    return SystemClock()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings; defaults to the cached environment settings
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        FastAPI lifespan context manager.

        Manages application startup and shutdown:
        - Creates the claim repository (and database pool for postgres)
        - Runs migrations on startup
        - Wires clock, event sinks and identity into the registry
        - Closes connection pool on shutdown
        """
        logging.getLogger("poe_registry").setLevel(settings.log_level.upper())
        logger.info("Starting application...")

        pool: ConnectionPool | None = None
        repository: ClaimRepository
        if settings.storage_backend == "postgres":
            logger.info("Connecting to database...")
            pool = ConnectionPool(
                conninfo=settings.database_url,
                min_size=settings.pool_min_size,
                max_size=settings.pool_max_size,
            )

            logger.info("Running database migrations...")
            run_migrations(pool)
            repository = PostgresClaimRepository(pool)
        else:
            logger.info("Using in-memory claim storage")
            repository = InMemoryClaimRepository()

        event_history = MemoryEventSink(max_events=settings.event_history_size)

        # Store collaborators in app state for dependency injection
        app.state.pool = pool
        app.state.event_history = event_history
        app.state.identity_provider = BcryptAccountDirectory(settings.accounts)
        app.state.registry = ClaimRegistry(
            repository=repository,
            clock=build_clock(settings),
            event_sink=FanoutEventSink(LoggingEventSink(), event_history),
        )

        logger.info(
            "Application startup complete (%d account(s), max claim length %d)",
            len(settings.accounts),
            settings.max_claim_length,
        )

        yield

        # Shutdown
        logger.info("Shutting down application...")
        if pool is not None:
            pool.close()
            logger.info("Database connection pool closed")

    app = FastAPI(
        title="poe-registry",
        description="Proof-of-Existence Claim Registry API - Register, revoke and transfer "
        "ownership of data fingerprints",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Include v1 API routes
    app.include_router(v1_router, prefix="/v1")

    @app.get("/health")
    async def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application (and database, when configured) are healthy.
        Raises exception if database connection fails.
        """
        pool = request.app.state.pool
        if pool is not None:
            with pool.connection() as conn:
                conn.execute("SELECT 1")

        return {"status": "healthy"}

    return app


app = create_app()
