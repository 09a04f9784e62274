"""API request / response schemas for the workspace endpoints.

These thin schemas sit between HTTP and the store.  Responses reuse the
domain models in ``workspace.py`` directly; only inputs and small envelopes
live here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class WorkspaceSettingsUpdate(BaseModel):
    """Replace a workspace's settings document."""

    settings: Any = Field(default_factory=dict)


class SignupTokenResponse(BaseModel):
    workspace_id: str
    signup_token: str


class WorkspaceCountResponse(BaseModel):
    count: int
