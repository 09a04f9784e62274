"""Data models for the workspace store."""

from boardstore.server.models.api import SignupTokenResponse, WorkspaceCountResponse, WorkspaceSettingsUpdate
from boardstore.server.models.workspace import UserWorkspace, Workspace

__all__ = [
    "SignupTokenResponse",
    "UserWorkspace",
    "Workspace",
    "WorkspaceCountResponse",
    "WorkspaceSettingsUpdate",
]
