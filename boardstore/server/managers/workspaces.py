"""Workspace store -- data access for the ``workspaces`` table.

Encapsulates signup-token and settings upserts, workspace lookup and count,
and the per-user workspace listing derived from chat channel membership.

Every method checks out its own connection from the engine and returns it
before leaving, so a single ``WorkspaceStore`` can be shared across threads.
SQL that differs per database type is delegated to a
:class:`~boardstore.server.db.dialects.Dialect` variant.
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterable, Sequence
from contextlib import closing
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError

from boardstore.server.db.dialects import Dialect, get_dialect
from boardstore.server.db.tables import StoreTables, build_tables
from boardstore.server.errors import (
    DecodingError,
    DeserializationError,
    SerializationError,
    WorkspaceNotFoundError,
)
from boardstore.server.models.workspace import UserWorkspace, Workspace
from boardstore.server.utils import new_id

if TYPE_CHECKING:
    from loguru import Logger
    from sqlalchemy import Engine, Select

    from boardstore.server.settings import BoardstoreSettings


def _encode_settings(settings: Any) -> str:
    try:
        return json.dumps(settings, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        msg = f"Workspace settings are not JSON serializable: {exc}"
        raise SerializationError(msg) from exc


def _user_workspaces_from_rows(rows: Iterable[Sequence[Any]], log: Logger = logger) -> list[UserWorkspace]:
    """Decode ``(id, title, board_count)`` rows.  Any bad row fails the whole call."""
    user_workspaces: list[UserWorkspace] = []
    for row in rows:
        try:
            workspace_id, title, board_count = row
            user_workspaces.append(UserWorkspace(id=workspace_id, title=title, board_count=board_count))
        except (TypeError, ValueError) as exc:
            log.opt(exception=exc).error("ERROR decoding user workspace row")
            msg = f"Unexpected user workspace row: {tuple(row)!r}"
            raise DecodingError(msg) from exc
    return user_workspaces


class WorkspaceStore:
    """Reads and writes workspace records.

    Stateless beyond its references to the engine, the dialect variant and
    the prefixed tables.
    """

    def __init__(self, engine: Engine, *, db_type: str, table_prefix: str = "") -> None:
        self._engine = engine
        self._dialect: Dialect = get_dialect(db_type)
        self._tables: StoreTables = build_tables(table_prefix)
        self._log = logger.bind(db_type=self._dialect.name)

    @classmethod
    def from_settings(cls, engine: Engine, settings: BoardstoreSettings) -> WorkspaceStore:
        return cls(engine, db_type=settings.db_type, table_prefix=settings.table_prefix)

    @property
    def tables(self) -> StoreTables:
        return self._tables

    # -- Upserts ---------------------------------------------------------------

    def upsert_signup_token(self, workspace: Workspace) -> None:
        """Insert the workspace with its signup token, or replace the token if it exists."""
        now = int(time.time())
        stmt = self._dialect.upsert(
            self._tables.workspaces,
            {
                "id": workspace.id,
                "signup_token": workspace.signup_token,
                "modified_by": workspace.modified_by,
                "update_at": now,
            },
            update_columns=("signup_token", "modified_by", "update_at"),
        )
        with self._engine.begin() as conn:
            conn.execute(stmt)

    def upsert_settings(self, workspace: Workspace) -> None:
        """Insert the workspace with its settings, or replace the settings if it exists.

        A new signup token is minted for the insert only; an existing
        workspace keeps its token.  Raises ``SerializationError`` if the
        settings cannot be encoded.
        """
        now = int(time.time())
        settings_json = _encode_settings(workspace.settings)
        stmt = self._dialect.upsert(
            self._tables.workspaces,
            {
                "id": workspace.id,
                "signup_token": new_id(),
                "settings": settings_json,
                "modified_by": workspace.modified_by,
                "update_at": now,
            },
            update_columns=("settings", "modified_by", "update_at"),
        )
        with self._engine.begin() as conn:
            conn.execute(stmt)

    def regenerate_signup_token(self, workspace_id: str, modified_by: str) -> str:
        """Mint and store a fresh signup token; return it."""
        token = new_id()
        self.upsert_signup_token(Workspace(id=workspace_id, signup_token=token, modified_by=modified_by))
        self._log.bind(workspace_id=workspace_id).info("Signup token regenerated by {}", modified_by)
        return token

    # -- Reads -----------------------------------------------------------------

    def get_workspace(self, workspace_id: str) -> Workspace:
        """Get a workspace by ID.  Raises ``WorkspaceNotFoundError`` if missing."""
        ws = self._tables.workspaces
        stmt = select(
            ws.c.id,
            ws.c.signup_token,
            func.coalesce(ws.c.settings, "{}"),
            ws.c.modified_by,
            ws.c.update_at,
        ).where(ws.c.id == workspace_id)

        with self._engine.connect() as conn:
            row = conn.execute(stmt).one_or_none()
        if row is None:
            raise WorkspaceNotFoundError(workspace_id)

        ws_id, signup_token, settings_json, modified_by, update_at = row
        try:
            settings = json.loads(settings_json)
        except json.JSONDecodeError as exc:
            self._log.bind(workspace_id=ws_id).opt(exception=exc).error("ERROR get_workspace settings json decode")
            msg = f"Stored settings for workspace '{ws_id}' are not valid JSON: {exc}"
            raise DeserializationError(msg) from exc

        return Workspace(
            id=ws_id,
            signup_token=signup_token,
            settings=settings,
            modified_by=modified_by or "",
            update_at=update_at or 0,
        )

    def has_access(self, user_id: str, workspace_id: str) -> bool:
        """Return whether *user_id* may use *workspace_id*.

        Always ``True`` for now; membership checks are not implemented.
        """
        return True

    def get_workspace_count(self) -> int:
        """Return the number of workspace rows."""
        stmt = select(func.count().label("count")).select_from(self._tables.workspaces)
        try:
            with self._engine.connect() as conn, closing(conn.execute(stmt)) as rows:
                return int(rows.scalar_one())
        except SQLAlchemyError:
            self._log.exception("ERROR get_workspace_count")
            raise

    def get_user_workspaces(self, user_id: str) -> list[UserWorkspace]:
        """List the channels *user_id* belongs to, with their non-template board counts.

        Channels without boards are included with ``board_count == 0``.
        Raises ``UnsupportedDatabaseError`` on databases without a JSON
        predicate for the template flag, before any query is issued.
        """
        stmt = self.user_workspaces_query(user_id)

        with self._engine.connect() as conn:
            try:
                rows = conn.execute(stmt)
            except SQLAlchemyError:
                self._log.exception("ERROR get_user_workspaces (user={})", user_id)
                raise
            with closing(rows):
                return _user_workspaces_from_rows(rows, self._log)

    def user_workspaces_query(self, user_id: str) -> Select[Any]:
        """Build the channel membership / board count query for *user_id*.

        Blocks are left-joined so channels without boards still yield a row.
        """
        t = self._tables
        non_template = self._dialect.non_template_filter(t.blocks.c.fields)

        return (
            select(t.channels.c.Id, t.channels.c.DisplayName, func.count(t.blocks.c.id))
            .select_from(
                t.channel_members.outerjoin(
                    t.blocks,
                    and_(
                        t.blocks.c.workspace_id == t.channel_members.c.ChannelId,
                        t.blocks.c.type == "board",
                        non_template,
                    ),
                ).join(t.channels, t.channel_members.c.ChannelId == t.channels.c.Id)
            )
            .where(t.channel_members.c.UserId == user_id)
            .group_by(t.channels.c.Id, t.channels.c.DisplayName)
        )
