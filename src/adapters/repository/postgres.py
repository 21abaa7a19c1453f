"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Error translation:
-----------------
- UniqueViolation on the email column -> UserAlreadyExists, the same error
  the in-memory repository raises. A registration that loses a race after
  the orchestrator's duplicate check fails through this path.
- Any other psycopg.Error -> RepositoryError("Database error: ...").

Timestamps come from the database (DEFAULT NOW()), so created_at and
updated_at are equal for a fresh row.
"""

import logging
from pathlib import Path

import psycopg
from psycopg.errors import UniqueViolation
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import RepositoryError, UserAlreadyExists, ValidationError
from src.domain.models import CreateUserData, User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, name, password_hash, created_at, updated_at"


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool, owns_pool: bool = False) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            owns_pool: Close the pool when close() is called
        """
        self._pool = pool
        self._owns_pool = owns_pool

    @classmethod
    def connect(cls, conninfo: str, min_size: int = 1, max_size: int = 10) -> "PostgresUserRepository":
        """Create a repository with its own pool, released by close()."""
        pool = ConnectionPool(conninfo=conninfo, min_size=min_size, max_size=max_size, open=True)
        return cls(pool, owns_pool=True)

    @property
    def pool(self) -> ConnectionPool:
        return self._pool

    def find_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"

        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
                cursor.execute(sql, (email,))
                return cursor.fetchone()
        except psycopg.Error as e:
            raise RepositoryError(f"Database error: {e}") from e

    def create_user(self, data: CreateUserData) -> User:
        """
        Insert a new user and return the stored row.

        Args:
            data: Email, name and already-derived password hash

        Returns:
            The inserted User, with database-assigned id and timestamps

        Raises:
            ValidationError: A required field is empty (checked before SQL)
            UserAlreadyExists: Unique constraint on email violated
            RepositoryError: Any other database failure
        """
        if not data.email or not data.name or not data.password_hash:
            raise ValidationError("Database error: Missing required fields")

        sql = f"""
            INSERT INTO users (email, name, password_hash)
            VALUES (%s, %s, %s)
            RETURNING {_USER_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
                cursor.execute(sql, (data.email, data.name, data.password_hash))
                user = cursor.fetchone()
                conn.commit()
        except UniqueViolation:
            raise UserAlreadyExists() from None
        except psycopg.Error as e:
            raise RepositoryError(f"Database error: {e}") from e

        logger.info("User created: %s (id=%s)", user.email, user.id)
        return user

    def get_all_users(self) -> list[User]:
        sql = f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at DESC, id DESC"

        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=class_row(User)) as cursor:
                cursor.execute(sql)
                return cursor.fetchall()
        except psycopg.Error as e:
            raise RepositoryError(f"Database error: {e}") from e

    def delete_user(self, email: str) -> bool:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute("DELETE FROM users WHERE email = %s", (email,))
                conn.commit()
                deleted = cursor.rowcount > 0
        except psycopg.Error as e:
            raise RepositoryError(f"Database error: {e}") from e

        if deleted:
            logger.info("User deleted: %s", email)
        return deleted

    def ping(self) -> None:
        """Run a trivial query; raises RepositoryError if the database is down."""
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as e:
            raise RepositoryError(f"Database error: {e}") from e

    def close(self) -> None:
        """Close the pool if this repository created it."""
        if self._owns_pool and not self._pool.closed:
            self._pool.close()
            logger.info("Database connection pool closed")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
