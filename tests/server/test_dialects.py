"""Compiled-SQL tests for the dialect variants.

No database required -- statements are compiled against SQLAlchemy's
MySQL / PostgreSQL / SQLite dialects and inspected as text.
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.dialects import mysql, postgresql, sqlite

from boardstore.server.db.dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, get_dialect
from boardstore.server.db.tables import build_tables
from boardstore.server.errors import UnsupportedDatabaseError
from boardstore.server.managers.workspaces import WorkspaceStore

TOKEN_VALUES = {"id": "ws-1", "signup_token": "tok", "modified_by": "alice", "update_at": 1}
TOKEN_UPDATES = ("signup_token", "modified_by", "update_at")


def _sql(stmt, dialect) -> str:
    return str(stmt.compile(dialect=dialect)).replace("\n", " ")


def _update_clause(sql: str, marker: str) -> str:
    return sql[sql.upper().index(marker) :]


@pytest.mark.parametrize(
    ("db_type", "variant"),
    [("mysql", MySQLDialect), ("postgres", PostgresDialect), ("sqlite3", SQLiteDialect)],
)
def test_get_dialect(db_type: str, variant: type) -> None:
    assert isinstance(get_dialect(db_type), variant)
    assert get_dialect(db_type).name == db_type


@pytest.mark.parametrize("db_type", ["oracle", "mssql", "", "MySQL"])
def test_get_dialect_unknown(db_type: str) -> None:
    with pytest.raises(UnsupportedDatabaseError):
        get_dialect(db_type)


def test_mysql_upsert_uses_on_duplicate_key_update() -> None:
    tables = build_tables()
    stmt = MySQLDialect().upsert(tables.workspaces, TOKEN_VALUES, TOKEN_UPDATES)
    sql = _sql(stmt, mysql.dialect())

    assert sql.startswith("INSERT INTO workspaces")
    clause = _update_clause(sql, "ON DUPLICATE KEY UPDATE")
    for col in TOKEN_UPDATES:
        assert col in clause
    assert "ON CONFLICT" not in sql


@pytest.mark.parametrize(
    ("variant", "sa_dialect"),
    [(PostgresDialect(), postgresql.dialect()), (SQLiteDialect(), sqlite.dialect())],
)
def test_on_conflict_upsert(variant, sa_dialect) -> None:
    tables = build_tables("focalboard_")
    stmt = variant.upsert(tables.workspaces, TOKEN_VALUES, TOKEN_UPDATES)
    sql = _sql(stmt, sa_dialect)

    assert sql.startswith("INSERT INTO focalboard_workspaces")
    clause = _update_clause(sql, "ON CONFLICT (ID) DO UPDATE SET")
    for col in TOKEN_UPDATES:
        assert f"{col} = excluded.{col}" in clause
    assert "DUPLICATE KEY" not in sql


@pytest.mark.parametrize(
    ("variant", "sa_dialect", "marker"),
    [
        (MySQLDialect(), mysql.dialect(), "ON DUPLICATE KEY UPDATE"),
        (PostgresDialect(), postgresql.dialect(), "ON CONFLICT (ID) DO UPDATE SET"),
    ],
)
def test_settings_upsert_does_not_touch_token_on_update(variant, sa_dialect, marker: str) -> None:
    tables = build_tables()
    values = {"id": "ws-1", "signup_token": "tok", "settings": "{}", "modified_by": "a", "update_at": 1}
    sql = _sql(variant.upsert(tables.workspaces, values, ("settings", "modified_by", "update_at")), sa_dialect)

    clause = _update_clause(sql, marker)
    assert "settings" in clause
    assert "signup_token" not in clause


def test_mysql_non_template_filter() -> None:
    fields = build_tables().blocks.c.fields
    expr = MySQLDialect().non_template_filter(fields)
    compiled = expr.compile(dialect=mysql.dialect())

    assert "LIKE" in str(compiled)
    assert '%"isTemplate":false%' in compiled.params.values()


def test_postgres_non_template_filter() -> None:
    fields = build_tables().blocks.c.fields
    expr = PostgresDialect().non_template_filter(fields)
    compiled = expr.compile(dialect=postgresql.dialect())

    assert "->>" in str(compiled)
    assert "isTemplate" in compiled.params.values()
    assert "false" in compiled.params.values()


def test_sqlite_non_template_filter_unsupported() -> None:
    with pytest.raises(UnsupportedDatabaseError):
        SQLiteDialect().non_template_filter(build_tables().blocks.c.fields)


def test_dialect_requires_upsert() -> None:
    class NoUpsert(Dialect):
        name = "partial"

    with pytest.raises(TypeError, match="upsert"):
        NoUpsert()
    with pytest.raises(TypeError):
        Dialect()


@pytest.mark.parametrize(("db_type", "sa_dialect"), [("mysql", mysql.dialect()), ("postgres", postgresql.dialect())])
@pytest.mark.parametrize("table_prefix", ["", "focalboard_"])
def test_user_workspaces_query_shape(db_type: str, sa_dialect, table_prefix: str) -> None:
    # The engine is never connected; it only carries the store's configuration.
    store = WorkspaceStore(create_engine("sqlite://"), db_type=db_type, table_prefix=table_prefix)
    sql = _sql(store.user_workspaces_query("user-1"), sa_dialect)

    assert "FROM `ChannelMembers`" in sql or 'FROM "ChannelMembers"' in sql
    assert "LEFT OUTER JOIN focalboard_blocks ON" in sql
    assert "JOIN" in sql and "Channels" in sql
    assert "count(focalboard_blocks.id)" in sql
    assert "GROUP BY" in sql
