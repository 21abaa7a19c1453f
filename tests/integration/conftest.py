"""
Shared fixtures for integration tests.

Integration tests need a running PostgreSQL (see DATABASE_URL); they are
skipped when it cannot be reached.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import PostgresUserRepository, run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests, skipping if the DB is down."""
    settings = get_settings()
    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=False)
    try:
        pool.open(wait=True, timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean users table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
    yield
