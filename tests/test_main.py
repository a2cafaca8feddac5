"""Tests for main API endpoints and startup validation."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient

from subway import __version__
from subway.core.config import settings
from subway.main import _check_alembic_migrations, app, lifespan

ALEMBIC_INI = Path(__file__).resolve().parents[1] / "alembic.ini"
HEAD_REVISION = "4a7c2e91b0d3"


def _mock_engine(conn: AsyncMock) -> Mock:
    """Engine whose begin() yields the given connection."""
    begin_ctx = AsyncMock()
    begin_ctx.__aenter__.return_value = conn
    begin_ctx.__aexit__.return_value = None

    engine = Mock()
    engine.begin.return_value = begin_ctx
    engine.dispose = AsyncMock()
    return engine


def test_root_endpoint(client: TestClient) -> None:
    """Test root endpoint returns correct response."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Subway Lines API"
    assert data["version"] == __version__


def test_health_check(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness_check(client: TestClient) -> None:
    """Test readiness check endpoint - happy path."""
    with patch("subway.main.get_engine") as mock_get_engine:
        mock_conn = AsyncMock()
        mock_get_engine.return_value = _mock_engine(mock_conn)

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        mock_conn.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_readiness_check_database_failure(async_client: AsyncClient) -> None:
    """Test readiness check returns 503 when database is unavailable."""
    with patch("subway.main.get_engine") as mock_get_engine:
        mock_engine = Mock()
        mock_engine.begin.side_effect = Exception("Database connection failed")
        mock_get_engine.return_value = mock_engine

        response = await async_client.get("/ready")

        assert response.status_code == 503
        # Error details are logged but not exposed to clients
        assert response.json()["detail"] == "Service unavailable"


class TestCheckAlembicMigrations:
    """Tests for _check_alembic_migrations."""

    def _patch_current_revision(self, revision: str | None):  # noqa: ANN202
        context = Mock()
        context.get_current_revision.return_value = revision
        return patch("subway.main.migration.MigrationContext.configure", return_value=context)

    def test_database_at_head(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "ALEMBIC_INI_PATH", str(ALEMBIC_INI))

        with self._patch_current_revision(HEAD_REVISION):
            assert _check_alembic_migrations(Mock()) == HEAD_REVISION

    def test_database_not_initialized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "ALEMBIC_INI_PATH", str(ALEMBIC_INI))

        with (
            self._patch_current_revision(None),
            pytest.raises(RuntimeError, match="has not been initialized"),
        ):
            _check_alembic_migrations(Mock())

    def test_database_behind_head(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "ALEMBIC_INI_PATH", str(ALEMBIC_INI))

        with (
            self._patch_current_revision("0000deadbeef"),
            pytest.raises(RuntimeError, match="Database migration required"),
        ):
            _check_alembic_migrations(Mock())

    def test_missing_alembic_ini_skips_validation(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(settings, "ALEMBIC_INI_PATH", str(tmp_path / "missing.ini"))

        with self._patch_current_revision("anything"):
            assert _check_alembic_migrations(Mock()) == "anything"


class TestLifespan:
    """Tests for startup validation outside DEBUG mode."""

    @pytest.mark.asyncio
    async def test_startup_validates_database(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "DEBUG", False)
        monkeypatch.setattr(settings, "OTEL_ENABLED", False)
        mock_conn = AsyncMock()
        mock_conn.run_sync.return_value = HEAD_REVISION
        engine = _mock_engine(mock_conn)

        with (
            patch("subway.main.get_engine", return_value=engine),
            patch("subway.main.dispose_engine", new_callable=AsyncMock) as mock_dispose,
        ):
            async with lifespan(app):
                mock_conn.execute.assert_awaited_once()
                mock_conn.run_sync.assert_awaited_once_with(_check_alembic_migrations)

        mock_dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_startup_fails_when_migrations_pending(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "DEBUG", False)
        monkeypatch.setattr(settings, "OTEL_ENABLED", False)
        mock_conn = AsyncMock()
        mock_conn.run_sync.side_effect = RuntimeError("Database migration required!")

        with (
            patch("subway.main.get_engine", return_value=_mock_engine(mock_conn)),
            pytest.raises(RuntimeError, match="Database migration required"),
        ):
            async with lifespan(app):
                pytest.fail("lifespan should not yield")

    @pytest.mark.asyncio
    async def test_debug_mode_skips_database(self) -> None:
        with patch("subway.main.get_engine") as mock_get_engine:
            async with lifespan(app):
                pass

        mock_get_engine.assert_not_called()
