"""Shared fixtures for workspace store and API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import Engine

from boardstore.server.app import app
from boardstore.server.managers.workspaces import WorkspaceStore


@pytest.fixture
def store(sqlite_engine: Engine) -> WorkspaceStore:
    """SQLite-backed store with its tables created."""
    workspace_store = WorkspaceStore(sqlite_engine, db_type="sqlite3")
    workspace_store.tables.metadata.create_all(sqlite_engine)
    return workspace_store


@pytest.fixture
async def client(store: WorkspaceStore) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with the SQLite store.

    The app lifespan does NOT run under ``ASGITransport``, so state fields
    are pre-set here.
    """
    app.state.db_engine = None
    app.state.workspace_store = store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.workspace_store = None
