"""loguru setup for boardstore.

Every record carries two context fields, ``db_type`` and ``workspace_id``,
rendered as ``[postgres ws=abc123]``.  ``WorkspaceStore`` binds them on its
own logger; records from elsewhere show ``-``.  Stdlib records (uvicorn,
sqlalchemy) are forwarded into loguru so one sink sees everything.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>[{extra[db_type]} ws={extra[workspace_id]}]</magenta> "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Stdlib loggers that are too chatty below WARNING.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.pool")

_LOGURU_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


class StdlibToLoguru(logging.Handler):
    """Re-emit stdlib ``logging`` records through loguru, keeping the caller's frame."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int = record.levelname if record.levelname in _LOGURU_LEVELS else record.levelno

        depth = 0
        frame = sys._getframe(0)
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, db_type: str | None = None) -> None:
    """Route all logging to stderr through loguru.

    *db_type* becomes the default ``db_type`` context so process-level
    messages (startup, shutdown, CLI) are tagged with the configured
    database too.
    """
    level = level.upper()

    logger.configure(
        handlers=[{"sink": sys.stderr, "level": level, "format": LOG_FORMAT}],
        extra={"db_type": db_type or "-", "workspace_id": "-"},
    )

    logging.basicConfig(handlers=[StdlibToLoguru()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging ready (level={})", level)
