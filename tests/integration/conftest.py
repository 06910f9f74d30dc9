"""
Integration test fixtures — PostgreSQL testcontainer.

Provides a real PostgreSQL instance for the test session via testcontainers.
Each test starts with the key-value table dropped, so PsycopgStorage has to
create it through ensure_schema().
"""

from __future__ import annotations

import psycopg
import pytest
from testcontainers.postgres import PostgresContainer

TABLE = "pki_storage"


@pytest.fixture(scope="session")
def postgres_container() -> PostgresContainer:
    """Start a PostgreSQL container for the entire test session."""
    with PostgresContainer("postgres:16-alpine") as pg:
        yield pg


@pytest.fixture()
def dsn(postgres_container: PostgresContainer) -> str:
    """Return a psycopg-compatible DSN and drop the storage table before each test."""
    connection_url = postgres_container.get_connection_url().replace(
        "postgresql+psycopg2", "postgresql"
    )
    with psycopg.connect(connection_url) as conn:
        conn.execute(f"DROP TABLE IF EXISTS {TABLE}")
        conn.commit()
    return connection_url
