"""Service configuration loaded from BOARDSTORE_* environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

DbType = Literal["sqlite3", "postgres", "mysql"]

# SQLAlchemy backend name -> db_type it must be paired with.
_BACKEND_DB_TYPES: dict[str, DbType] = {
    "sqlite": "sqlite3",
    "postgresql": "postgres",
    "mysql": "mysql",
    "mariadb": "mysql",
}


class BoardstoreSettings(BaseSettings):
    """Boardstore settings.

    All fields are read from environment variables with the ``BOARDSTORE_`` prefix.
    For example, ``BOARDSTORE_DB_TYPE=mysql`` maps to ``db_type``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOARDSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Database --------------------------------------------------------------
    database_url: str | None = None
    """SQLAlchemy connection string, e.g. ``postgresql+psycopg://...`` or
    ``mysql+pymysql://...``.  Required for the HTTP API and CLI."""

    db_type: DbType = "postgres"
    """Dialect discriminator used to pick dialect-specific SQL."""

    table_prefix: str = ""
    """Prepended to the ``workspaces`` table name.

    Set to ``focalboard_`` when running alongside a chat server that shares
    the same schema.  ``focalboard_blocks`` keeps its name either way.
    """

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000

    @model_validator(mode="after")
    def check_db_type_matches_url(self) -> BoardstoreSettings:
        if not self.database_url:
            return self
        try:
            backend = make_url(self.database_url).get_backend_name()
        except ArgumentError as exc:
            msg = f"database_url is not a valid SQLAlchemy URL: {exc}"
            raise ValueError(msg) from exc

        expected = _BACKEND_DB_TYPES.get(backend)
        if expected is None:
            msg = f"database_url backend '{backend}' is not supported"
            raise ValueError(msg)
        if expected != self.db_type:
            msg = f"db_type '{self.db_type}' does not match database_url backend '{backend}' (expected '{expected}')"
            raise ValueError(msg)
        return self


def get_settings() -> BoardstoreSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> BoardstoreSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return BoardstoreSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
