"""Repository adapters - Database and in-process implementations."""

from .memory import InMemoryRegistrantRepository
from .postgres import PostgresRegistrantRepository, run_migrations

__all__ = ["InMemoryRegistrantRepository", "PostgresRegistrantRepository", "run_migrations"]
