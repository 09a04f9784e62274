"""Dialect variants for the SQL that differs between database types.

The set is closed: ``mysql``, ``postgres`` and ``sqlite3``.  Each variant
knows how to turn an INSERT into an upsert keyed on the primary key, and how
to express the "block is not a template" predicate over the serialized
``fields`` column.  SQLite has no usable JSON predicate here and refuses the
second capability.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from sqlalchemy import Table, cast
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.expression import Insert

from boardstore.server.errors import UnsupportedDatabaseError


class Dialect(ABC):
    """Base dialect variant.  Subclasses must provide ``upsert``."""

    name: ClassVar[str]

    @abstractmethod
    def upsert(self, table: Table, values: Mapping[str, Any], update_columns: Sequence[str]) -> Insert:
        """INSERT *values* into *table*; on primary-key conflict update *update_columns*."""

    def non_template_filter(self, fields: ColumnElement[Any]) -> ColumnElement[bool]:
        """Predicate matching blocks whose ``isTemplate`` field is ``false``."""
        raise UnsupportedDatabaseError("non_template_filter", self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MySQLDialect(Dialect):
    name = "mysql"

    def upsert(self, table: Table, values: Mapping[str, Any], update_columns: Sequence[str]) -> Insert:
        stmt = mysql.insert(table).values(**values)
        return stmt.on_duplicate_key_update({col: stmt.inserted[col] for col in update_columns})

    def non_template_filter(self, fields: ColumnElement[Any]) -> ColumnElement[bool]:
        # fields is stored as compact JSON text.
        return fields.like('%"isTemplate":false%')


class PostgresDialect(Dialect):
    name = "postgres"

    def upsert(self, table: Table, values: Mapping[str, Any], update_columns: Sequence[str]) -> Insert:
        stmt = postgresql.insert(table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=list(table.primary_key.columns),
            set_={col: stmt.excluded[col] for col in update_columns},
        )

    def non_template_filter(self, fields: ColumnElement[Any]) -> ColumnElement[bool]:
        return cast(fields, postgresql.JSON)["isTemplate"].astext == "false"


class SQLiteDialect(Dialect):
    name = "sqlite3"

    def upsert(self, table: Table, values: Mapping[str, Any], update_columns: Sequence[str]) -> Insert:
        stmt = sqlite.insert(table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=list(table.primary_key.columns),
            set_={col: stmt.excluded[col] for col in update_columns},
        )


_DIALECTS: dict[str, Dialect] = {d.name: d for d in (MySQLDialect(), PostgresDialect(), SQLiteDialect())}


def get_dialect(db_type: str) -> Dialect:
    """Return the variant for *db_type*.  Raises ``UnsupportedDatabaseError`` if unknown."""
    try:
        return _DIALECTS[db_type]
    except KeyError:
        raise UnsupportedDatabaseError("get_dialect", db_type) from None
