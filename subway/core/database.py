"""Database engine and session management."""

import threading
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from subway.core.config import settings

# Built on first use so forked workers never inherit the parent's event loop
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()
_session_factory_lock = threading.Lock()


def _engine_options(database_url: str) -> dict[str, Any]:
    """
    Pool options for the configured backend.

    DEBUG runs use NullPool. SQLite picks its own pool and rejects sizing
    arguments, so only server databases get ``pool_size``/``max_overflow``.
    """
    if settings.DEBUG:
        return {"poolclass": NullPool}
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


def get_engine() -> AsyncEngine:
    """
    Get or create the process-wide database engine.

    Returns:
        AsyncEngine: SQLAlchemy async engine
    """
    global _engine  # noqa: PLW0603
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = create_async_engine(
                    settings.DATABASE_URL,
                    echo=settings.DATABASE_ECHO,
                    **_engine_options(settings.DATABASE_URL),
                )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get or create the session factory bound to ``get_engine()``.

    Sessions keep attributes after commit so services can return the
    objects they just wrote.
    """
    global _session_factory  # noqa: PLW0603
    if _session_factory is None:
        with _session_factory_lock:
            if _session_factory is None:
                _session_factory = async_sessionmaker(
                    get_engine(),
                    class_=AsyncSession,
                    expire_on_commit=False,
                    autoflush=False,
                )
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine and session factory."""
    global _engine, _session_factory  # noqa: PLW0603
    with _engine_lock, _session_factory_lock:
        engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.

    Yields:
        AsyncSession: Database session
    """
    async with get_session_factory()() as session:
        yield session
