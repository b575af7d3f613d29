"""
PostgreSQL repository adapter - Implements ClaimRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Concurrency Design
------------------
Each lock() call owns one transaction on one pooled connection:

1. **pg_advisory_xact_lock()**: Serializes all operations on a fingerprint,
   including the window where no row exists yet. Without it two concurrent
   creates could both observe "absent". The lock key is derived from the
   fingerprint via hashtextextended(); collisions only over-serialize.

2. **SELECT ... FOR UPDATE**: Reads the current row under a row lock.

3. **Upsert on clean exit**: The staged record is written with
   INSERT ... ON CONFLICT DO UPDATE and committed. Any exception raised
   inside the block rolls the whole transaction back, so a rejected
   operation never leaves a partial write.

4. **In-process stripe**: The advisory lock ends at COMMIT, so lock() also
   holds a StripedLocks stripe from checkout until after-commit callbacks
   have run. Events for one fingerprint are therefore emitted in commit
   order within this process.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from psycopg_pool import ConnectionPool

from poe_registry.domain.ports import ClaimRecord

from .locks import StripedLocks
from .slot import PendingSlot

logger = logging.getLogger(__name__)

# Structure: src/poe_registry/adapters/repository/postgres.py -> migrations/
DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parents[4] / "migrations"


class PostgresClaimRepository:
    """
    Implements ClaimRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries; fingerprints are stored as BYTEA.
    """

    def __init__(self, pool: ConnectionPool, lock_stripes: int = 64) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            lock_stripes: Size of the in-process lock pool
        """
        self._pool = pool
        self._locks = StripedLocks(lock_stripes)

    @contextmanager
    def lock(self, fingerprint: bytes) -> Iterator[PendingSlot]:
        """
        Open a transaction holding the fingerprint's advisory lock.

        Yields the slot populated from the locked row. The staged record
        is upserted and committed on clean exit, then after-commit
        callbacks run while the stripe is still held. On exception the
        connection context rolls back and no callback runs.
        """
        advisory_sql = "SELECT pg_advisory_xact_lock(hashtextextended(encode(%s, 'hex'), 0))"

        select_sql = """
            SELECT owner, registered_at, active
            FROM claims
            WHERE fingerprint = %s
            FOR UPDATE
        """

        upsert_sql = """
            INSERT INTO claims (fingerprint, owner, registered_at, active)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (fingerprint) DO UPDATE
            SET owner = EXCLUDED.owner,
                registered_at = EXCLUDED.registered_at,
                active = EXCLUDED.active
        """

        with (
            self._locks.for_key(fingerprint),
            self._pool.connection() as conn,
            conn.cursor() as cursor,
        ):
            cursor.execute(advisory_sql, (fingerprint,))
            cursor.execute(select_sql, (fingerprint,))
            row = cursor.fetchone()

            record = None
            if row is not None:
                record = ClaimRecord(owner=row[0], registered_at=row[1], active=row[2])

            slot = PendingSlot(record)
            yield slot

            if slot.pending is not None:
                cursor.execute(
                    upsert_sql,
                    (
                        fingerprint,
                        slot.pending.owner,
                        slot.pending.registered_at,
                        slot.pending.active,
                    ),
                )
            conn.commit()
            slot.run_after_commit()

    def get(self, fingerprint: bytes) -> ClaimRecord | None:
        """
        Read the committed record for a fingerprint (no locking).

        Args:
            fingerprint: Bounded claim fingerprint

        Returns:
            ClaimRecord if the fingerprint was ever registered, else None
        """
        sql = "SELECT owner, registered_at, active FROM claims WHERE fingerprint = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (fingerprint,))
            row = cursor.fetchone()

        if row is None:
            return None
        return ClaimRecord(owner=row[0], registered_at=row[1], active=row[2])


def run_migrations(pool: ConnectionPool, migrations_dir: Path = DEFAULT_MIGRATIONS_DIR) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding *.sql files
    """
    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
