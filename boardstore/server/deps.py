"""FastAPI dependency injection for the workspace store and caller identity.

Usage in route handlers::

    @router.get("/things/{thing_id}")
    def get_thing(thing_id: str, store: Store, user_id: CurrentUser) -> Thing:
        ...

``get_store`` raises HTTP 503 if the database was not configured
(BOARDSTORE_DATABASE_URL unset).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from boardstore.server.managers.workspaces import WorkspaceStore


def get_store(request: Request) -> WorkspaceStore:
    """Return the shared workspace store.

    The store checks connections out of the engine pool per call, so no
    per-request lifecycle is needed.
    """
    store: WorkspaceStore | None = request.app.state.workspace_store
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not configured (BOARDSTORE_DATABASE_URL is unset).",
        )
    return store


def get_user_id(x_user_id: Annotated[str, Header()]) -> str:
    """Caller identity, set by the authenticating proxy in front of the service."""
    return x_user_id


# -- Annotated type aliases for concise route signatures ---------------------

Store = Annotated[WorkspaceStore, Depends(get_store)]
"""Annotated dependency: shared workspace store."""

CurrentUser = Annotated[str, Depends(get_user_id)]
"""Annotated dependency: id of the calling user (``X-User-ID`` header)."""
