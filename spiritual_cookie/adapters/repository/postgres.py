"""
PostgreSQL repository adapter - Implements PrayerRequestRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL. The `prayer_requests` table
plays the role of the document collection: one row per accepted request,
insert-only.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from spiritual_cookie.domain.exceptions import StorageError
from spiritual_cookie.domain.ports import PrayerRequest

logger = logging.getLogger(__name__)

# Shipped as package data: spiritual_cookie/migrations/*.sql
MIGRATIONS_DIR = Path(__file__).parent.parent.parent / "migrations"


class PostgresPrayerRequestRepository:
    """
    Implements PrayerRequestRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def add(self, record: PrayerRequest) -> None:
        """
        Insert one prayer request.

        Borrows a connection from the pool for the duration of the insert.
        Any driver or pool error (including pool checkout timeouts, which
        psycopg_pool raises as OperationalError) is reported as StorageError.

        Args:
            record: Validated prayer request from the domain layer

        Raises:
            StorageError: If the insert could not be committed
        """
        sql = """
            INSERT INTO prayer_requests (name, email, prayer, date, user_email)
            VALUES (%s, %s, %s, %s, %s)
        """

        try:
            with self._pool.connection() as conn:
                conn.execute(
                    sql,
                    (record.name, record.email, record.prayer, record.date, record.user),
                )
                conn.commit()
        except psycopg.Error as e:
            logger.error("Failed to insert prayer request for %s: %s", record.user, e)
            raise StorageError("Prayer request could not be stored") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    migrations_dir = MIGRATIONS_DIR

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
