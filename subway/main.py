"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from alembic import script
from alembic.config import Config
from alembic.runtime import migration
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from sqlalchemy import text
from sqlalchemy.engine import Connection

from subway import __version__
from subway.api import lines, stations
from subway.api.errors import register_exception_handlers
from subway.core.config import settings
from subway.core.database import dispose_engine, get_engine
from subway.core.logging import configure_logging
from subway.core.telemetry import get_tracer_provider, shutdown_tracer_provider
from subway.middleware import AccessLoggingMiddleware

# Configure logging at module level so Uvicorn startup logs go through structlog pipeline
configure_logging(log_level=settings.LOG_LEVEL)

logger = structlog.get_logger(__name__)


def _check_alembic_migrations(sync_conn: Connection) -> str | None:
    """
    Validate that the database is at the expected Alembic revision.

    Args:
        sync_conn: Synchronous SQLAlchemy connection

    Returns:
        Current revision ID

    Raises:
        RuntimeError: If database is not initialized or migrations are needed
    """
    context = migration.MigrationContext.configure(sync_conn)
    current_rev = context.get_current_revision()

    alembic_ini_path = Path(settings.ALEMBIC_INI_PATH)
    if not alembic_ini_path.exists():
        logger.warning("alembic_ini_not_found", path=settings.ALEMBIC_INI_PATH, action="skipping migration validation")
        return current_rev

    alembic_cfg = Config(str(alembic_ini_path))
    script_dir = script.ScriptDirectory.from_config(alembic_cfg)
    head_rev = script_dir.get_current_head()

    if current_rev is None:
        msg = "Database has not been initialized! Please run: alembic upgrade head"
        raise RuntimeError(msg)
    if current_rev != head_rev:
        msg = (
            f"Database migration required!\n"
            f"  Current revision: {current_rev}\n"
            f"  Expected revision: {head_rev}\n"
            f"Please run: alembic upgrade head"
        )
        raise RuntimeError(msg)

    return current_rev


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - install the tracer provider and validate the database on startup."""
    if settings.OTEL_ENABLED and (provider := get_tracer_provider()):
        trace.set_tracer_provider(provider)
        logger.info("otel_tracer_provider_initialized")

    # Tests run in DEBUG mode against their own databases
    if settings.DEBUG:
        logger.info("debug_mode_startup", message="skipping database validation")
        yield
        if settings.OTEL_ENABLED:
            shutdown_tracer_provider()
        logger.info("shutdown_complete")
        return

    logger.info("startup_initializing", message="validating database")

    try:
        async with get_engine().begin() as conn:
            await conn.execute(text("SELECT 1"))
            logger.info("database_connection_successful")

            current_rev = await conn.run_sync(_check_alembic_migrations)
            logger.info("database_migration_valid", revision=current_rev)

    except RuntimeError as e:
        logger.error("migration_validation_failed", error=str(e))
        raise
    except OSError as e:
        logger.error("startup_filesystem_error", error=str(e))
        raise

    logger.info("startup_complete")

    yield

    logger.info("shutdown_starting")
    if settings.OTEL_ENABLED:
        shutdown_tracer_provider()
    await dispose_engine()
    logger.info("shutdown_complete")


app = FastAPI(
    title="Subway Lines API",
    description="Metro stations, lines and section chains",
    version=__version__,
    lifespan=lifespan,
)

if settings.OTEL_ENABLED:
    FastAPIInstrumentor().instrument_app(
        app,
        excluded_urls=",".join(settings.OTEL_EXCLUDED_URLS),
    )
    logger.info("otel_fastapi_instrumented", excluded_urls=settings.OTEL_EXCLUDED_URLS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(AccessLoggingMiddleware)

register_exception_handlers(app)

app.include_router(stations.router, prefix=settings.API_V1_PREFIX)
app.include_router(lines.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Subway Lines API", "version": __version__}


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint - verify the database answers."""
    try:
        async with get_engine().begin() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("readiness_check_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unavailable",
        ) from None
    return {"status": "ready"}
