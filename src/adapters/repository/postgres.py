"""
PostgreSQL repository adapter - Implements RegistrantRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness is enforced by the UNIQUE constraint on registrants.email.
The service's find_by_email pre-check only produces a friendly error;
a concurrent insert that slips past it fails here with UniqueViolation
and is reported as DuplicateEmail.
"""

import logging
from pathlib import Path

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateEmail
from src.domain.ports import Registrant

logger = logging.getLogger(__name__)


class PostgresRegistrantRepository:
    """
    Implements RegistrantRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Registrant | None:
        """Exact-match lookup by email."""
        sql = """
            SELECT name, email, phone, created_at
            FROM registrants
            WHERE email = %s
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()

        if row is None:
            return None
        return Registrant(name=row[0], email=row[1], phone=row[2], created_at=row[3])

    def insert(self, name: str, email: str, phone: str) -> Registrant:
        """
        Insert a registrant, letting the database assign created_at.

        Raises:
            DuplicateEmail: If the email already exists (unique constraint)
        """
        sql = """
            INSERT INTO registrants (name, email, phone, created_at)
            VALUES (%s, %s, %s, NOW())
            RETURNING created_at
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            try:
                cursor.execute(sql, (name, email, phone))
            except errors.UniqueViolation:
                conn.rollback()
                raise DuplicateEmail(email) from None
            created_at = cursor.fetchone()[0]
            conn.commit()

        return Registrant(name=name, email=email, phone=phone, created_at=created_at)


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
