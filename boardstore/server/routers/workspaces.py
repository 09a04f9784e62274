"""Workspace endpoints (RPC-style).

All write operations use POST; reads use GET.  Handlers are plain ``def``
functions: the store is synchronous, so FastAPI runs them in its threadpool.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from boardstore.server.deps import CurrentUser, Store
from boardstore.server.errors import SerializationError, UnsupportedDatabaseError, WorkspaceNotFoundError
from boardstore.server.managers.workspaces import WorkspaceStore
from boardstore.server.models.api import SignupTokenResponse, WorkspaceCountResponse, WorkspaceSettingsUpdate
from boardstore.server.models.workspace import UserWorkspace, Workspace

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


def _require_access(store: WorkspaceStore, user_id: str, workspace_id: str) -> None:
    if not store.has_access(user_id, workspace_id):
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=f"No access to workspace '{workspace_id}'.")


@router.get("/count", response_model=WorkspaceCountResponse)
def workspace_count(store: Store) -> WorkspaceCountResponse:
    """Number of workspaces in the store."""
    return WorkspaceCountResponse(count=store.get_workspace_count())


@router.get("/list", response_model=list[UserWorkspace])
def list_user_workspaces(store: Store, user_id: CurrentUser) -> list[UserWorkspace]:
    """Workspaces the caller belongs to, with their board counts."""
    try:
        return store.get_user_workspaces(user_id)
    except UnsupportedDatabaseError as exc:
        raise HTTPException(status.HTTP_501_NOT_IMPLEMENTED, detail=str(exc)) from None


@router.get("/{workspace_id}/get", response_model=Workspace)
def get_workspace(workspace_id: str, store: Store, user_id: CurrentUser) -> Workspace:
    """Get a single workspace by ID."""
    _require_access(store, user_id, workspace_id)
    try:
        return store.get_workspace(workspace_id)
    except WorkspaceNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{workspace_id}' not found.") from None


@router.post("/{workspace_id}/settings", response_model=Workspace)
def update_settings(workspace_id: str, body: WorkspaceSettingsUpdate, store: Store, user_id: CurrentUser) -> Workspace:
    """Replace the workspace's settings, creating the workspace if needed."""
    _require_access(store, user_id, workspace_id)
    try:
        store.upsert_settings(Workspace(id=workspace_id, settings=body.settings, modified_by=user_id))
    except SerializationError as exc:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from None
    return store.get_workspace(workspace_id)


@router.post("/{workspace_id}/regenerate_signup_token", response_model=SignupTokenResponse)
def regenerate_signup_token(workspace_id: str, store: Store, user_id: CurrentUser) -> SignupTokenResponse:
    """Replace the workspace's signup token with a fresh one."""
    _require_access(store, user_id, workspace_id)
    token = store.regenerate_signup_token(workspace_id, modified_by=user_id)
    return SignupTokenResponse(workspace_id=workspace_id, signup_token=token)
