"""SQLAlchemy engine factory.

The store issues plain blocking calls, so a synchronous engine is used.
Drivers: psycopg3 for ``postgresql+psycopg://``, PyMySQL for
``mysql+pymysql://`` and the stdlib driver for ``sqlite://``.
"""

from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import make_url


def create_engine(database_url: str, **kwargs: object) -> Engine:
    """Create a SQLAlchemy engine with production-ready pool settings.

    - **pool_pre_ping=True**: test connections before checkout to handle
      server-side disconnects (restarts, idle timeouts).
    - **pool_recycle=3600**: recycle connections after 1 hour; MySQL drops
      idle connections after ``wait_timeout``.

    SQLite URLs keep SQLAlchemy's own pool choice.  All defaults can be
    overridden via *kwargs*.
    """
    defaults: dict[str, object] = {"echo": False}
    if make_url(database_url).get_backend_name() != "sqlite":
        defaults.update(pool_pre_ping=True, pool_recycle=3600)
    defaults.update(kwargs)
    return sa_create_engine(database_url, **defaults)  # type: ignore[arg-type]
