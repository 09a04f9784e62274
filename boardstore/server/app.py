from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRouter
from loguru import logger
from sqlalchemy.engine import make_url

from boardstore.server.db.engine import create_engine
from boardstore.server.log import setup_logging
from boardstore.server.managers.workspaces import WorkspaceStore
from boardstore.server.settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, db_type=settings.db_type)

    logger.info("Boardstore starting (host={}, port={})", settings.host, settings.port)

    # -- Initialise state fields (always present, possibly None) ----------------
    _app.state.db_engine = None
    _app.state.workspace_store = None

    # -- Database --------------------------------------------------------------
    if settings.database_url:
        engine = create_engine(settings.database_url)
        _app.state.db_engine = engine
        _app.state.workspace_store = WorkspaceStore.from_settings(engine, settings)
        logger.info(
            "Database: {} (db_type={}, table_prefix={!r})",
            make_url(settings.database_url).render_as_string(hide_password=True),
            settings.db_type,
            settings.table_prefix,
        )
    else:
        logger.warning("BOARDSTORE_DATABASE_URL not set -- workspace endpoints disabled")

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Boardstore shutting down")

    # Dispose DB engine (closes all pooled connections).
    if _app.state.db_engine is not None:
        _app.state.db_engine.dispose()
        logger.info("Database: disposed")


app = FastAPI(title="Boardstore", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- all backend endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from boardstore.server.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(workspaces_router)

app.include_router(api)
