"""
Shared fixtures for integration tests.

Provides a connection pool against DATABASE_URL with migrations applied.
Tests using it are skipped when PostgreSQL is not reachable.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from spiritual_cookie.adapters.repository.postgres import run_migrations
from spiritual_cookie.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=4,
        open=True,
    )
    try:
        pool.wait(timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean prayer_requests table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM prayer_requests")
        conn.commit()
    yield
