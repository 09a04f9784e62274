"""Error taxonomy for the workspace store.

Database failures (connectivity, constraint violations, SQL errors) are not
wrapped: they surface as ``sqlalchemy.exc.SQLAlchemyError`` subclasses.
"""

from __future__ import annotations


class WorkspaceStoreError(Exception):
    """Base class for errors raised by the workspace store."""


class UnsupportedDatabaseError(WorkspaceStoreError):
    """Raised when an operation needs SQL the configured database type does not have."""

    def __init__(self, operation: str, db_type: str) -> None:
        self.operation = operation
        self.db_type = db_type
        super().__init__(
            f"{operation} - method is unsupported on current database ({db_type}). "
            "Supported databases are - MySQL and PostgreSQL"
        )


class WorkspaceNotFoundError(WorkspaceStoreError, LookupError):
    """Raised when no workspace row matches the requested id."""


class SerializationError(WorkspaceStoreError, ValueError):
    """Raised when workspace settings cannot be encoded as JSON."""


class DeserializationError(WorkspaceStoreError, ValueError):
    """Raised when stored workspace settings are not valid JSON."""


class DecodingError(WorkspaceStoreError):
    """Raised when a result row does not have the expected shape."""
