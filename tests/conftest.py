"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment must be prepared
# before anything from subway is imported
os.environ["DEBUG"] = "true"
os.environ["OTEL_ENABLED"] = "false"
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("SECRET_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from subway.core.database import get_db
from subway.main import app
from subway.models import Base
from subway.models.network import Line, Station

from tests.helpers.types import DatabaseContext, StationIds

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine() -> AsyncGenerator[DatabaseContext]:
    """
    Create a fresh in-memory database with the full schema.

    StaticPool keeps the single in-memory connection alive for the whole test,
    so every session sees the same database.

    Yields:
        DatabaseContext: Engine and session factory
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield DatabaseContext(engine=engine, session_factory=session_factory)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: DatabaseContext) -> AsyncGenerator[AsyncSession]:
    """
    Database session for one test.

    Yields:
        Async SQLAlchemy session bound to the test database
    """
    async with db_engine.session_factory() as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """
    Async HTTP client whose requests use the test database session.

    Yields:
        Async HTTP client with ASGI transport
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client() -> Generator[TestClient]:
    """
    FastAPI synchronous test client (no database override).

    Yields:
        Synchronous test client with app lifespan running
    """
    with TestClient(app) as test_client:
        yield test_client


# Data fixtures


@pytest.fixture
async def station_ids(db_session: AsyncSession) -> StationIds:
    """
    Four persisted stations.

    Returns plain IDs rather than ORM objects so tests stay valid after a
    service rolls the session back.
    """
    stations = [Station(name=name) for name in ("Gangnam", "Yeoksam", "Seolleung", "Samseong")]
    db_session.add_all(stations)
    await db_session.commit()
    return StationIds(*(station.id for station in stations))


@pytest.fixture
async def line_id(db_session: AsyncSession) -> uuid.UUID:
    """A persisted line with an empty chain."""
    line = Line(name="Line 2", color="green")
    db_session.add(line)
    await db_session.commit()
    return line.id
