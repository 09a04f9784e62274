"""Shared test fixtures: SQLite engines and testcontainers for PostgreSQL / MySQL.

Unit tests run on a file-backed SQLite database in ``tmp_path``.  Integration
tests use real PostgreSQL and MySQL containers managed by testcontainers-python.
Containers are session-scoped (started once per test run); each test gets a
freshly created schema that is dropped afterwards.

Tests needing containers are marked with ``@pytest.mark.integration`` and
are skipped when Docker is not reachable.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine

from boardstore.server.db.engine import create_engine


def _docker_available() -> bool:
    try:
        import docker

        docker.from_env().ping()
    except Exception:  # noqa: BLE001
        return False
    return True


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    integration = [item for item in items if "integration" in item.keywords]
    if not integration or _docker_available():
        return
    skip = pytest.mark.skip(reason="Docker is not available")
    for item in integration:
        item.add_marker(skip)


# ---------------------------------------------------------------------------
# Function-scoped: SQLite
# ---------------------------------------------------------------------------


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'boardstore.db'}"


@pytest.fixture
def sqlite_engine(sqlite_url: str) -> Iterator[Engine]:
    engine = create_engine(sqlite_url)
    yield engine
    engine.dispose()


# ---------------------------------------------------------------------------
# Session-scoped: containers (started once, shared across all tests)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_url() -> Iterator[str]:
    """Start a PostgreSQL 17 container; yield its psycopg3 URL."""
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(
        image="postgres:17",
        username="test",
        password="test",
        dbname="boardstore_test",
        driver="psycopg",
    ) as pg:
        yield pg.get_connection_url()


@pytest.fixture(scope="session")
def mysql_url() -> Iterator[str]:
    """Start a MySQL 8 container; yield its PyMySQL URL."""
    from testcontainers.mysql import MySqlContainer

    with MySqlContainer(
        image="mysql:8.0",
        username="test",
        password="test",
        dbname="boardstore_test",
        dialect="pymysql",
    ) as my:
        yield my.get_connection_url()
