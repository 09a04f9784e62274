"""SQLAlchemy Core table definitions.

The workspaces table carries a configurable name prefix, so the schema is
built per prefix by :func:`build_tables` rather than declared once at import
time.  The content-block table is always ``focalboard_blocks``, and
``ChannelMembers`` / ``Channels`` belong to the host chat server; none of
them take the prefix.

Uses SQLAlchemy 2.0 Core ``Table`` objects.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import BigInteger, Column, MetaData, String, Table, Text

# Deterministic constraint names.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

BLOCKS_TABLE = "focalboard_blocks"


@dataclass(frozen=True)
class StoreTables:
    """Tables the workspace store reads from or writes to."""

    metadata: MetaData
    workspaces: Table
    blocks: Table
    channel_members: Table
    channels: Table


def build_tables(prefix: str = "") -> StoreTables:
    """Return table objects for *prefix* on a fresh ``MetaData``."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    workspaces = Table(
        f"{prefix}workspaces",
        metadata,
        Column("id", String(36), primary_key=True),
        Column("signup_token", String(100), nullable=False),
        # JSON document stored as text; NULL reads back as '{}'.
        Column("settings", Text),
        Column("modified_by", String(36)),
        Column("update_at", BigInteger),
    )

    blocks = Table(
        BLOCKS_TABLE,
        metadata,
        Column("id", String(36), primary_key=True),
        Column("workspace_id", String(36), index=True),
        Column("type", Text),
        Column("title", Text),
        Column("fields", Text),
    )

    channel_members = Table(
        "ChannelMembers",
        metadata,
        Column("ChannelId", String(26), primary_key=True),
        Column("UserId", String(26), primary_key=True),
    )

    channels = Table(
        "Channels",
        metadata,
        Column("Id", String(26), primary_key=True),
        Column("DisplayName", String(64)),
    )

    return StoreTables(
        metadata=metadata,
        workspaces=workspaces,
        blocks=blocks,
        channel_members=channel_members,
        channels=channels,
    )
