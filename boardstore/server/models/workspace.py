"""Workspace data models.

A workspace is the tenant scope that owns boards.  Its settings are a
free-form JSON document the store never interprets.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Workspace(BaseModel):
    """Workspace row."""

    id: str
    signup_token: str = ""
    settings: Any = Field(default_factory=dict, description="Free-form JSON value, '{}' when unset")
    modified_by: str = ""
    update_at: int = Field(default=0, description="Unix seconds of the last write")


class UserWorkspace(BaseModel):
    """A workspace the user belongs to, with its count of non-template boards."""

    id: str
    title: str
    board_count: int = 0
