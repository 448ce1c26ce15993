"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Settings isolated from the developer's environment and .env file
- A static directory with a landing page
- PostgreSQL connection pool and a clean registrants table
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresRegistrantRepository, run_migrations
from src.config.settings import Settings


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Static directory with a landing page and one asset."""
    (tmp_path / "assets").mkdir()
    (tmp_path / "index.html").write_text("<html><body>landing</body></html>")
    (tmp_path / "assets" / "main.js").write_text("console.log('signup');")
    return tmp_path


@pytest.fixture
def settings(static_dir: Path) -> Settings:
    """Settings with every optional integration switched off."""
    return Settings(
        _env_file=None,
        database_url=None,
        notifier_backend="console",
        email_user=None,
        email_pass=None,
        admin_email=None,
        recaptcha_secret=None,
        static_dir=static_dir,
    )


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool on DATABASE_URL with migrations applied."""
    pool = ConnectionPool(
        conninfo=os.environ["DATABASE_URL"],
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def postgres_repository(pool: ConnectionPool) -> PostgresRegistrantRepository:
    """Repository on a clean registrants table."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM registrants")
    return PostgresRegistrantRepository(pool)
