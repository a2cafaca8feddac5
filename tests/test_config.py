"""Tests for configuration module."""

import pytest
from pydantic import ValidationError

from subway.core.config import Settings, require_config, settings


class TestRequireConfig:
    """Tests for require_config function."""

    def test_require_config_passes_when_all_fields_present(self) -> None:
        require_config("DATABASE_URL", "PROJECT_NAME")

    def test_require_config_raises_when_field_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", None)

        with pytest.raises(ValueError, match="Required configuration missing: OTEL_EXPORTER_OTLP_TRACES_ENDPOINT"):
            require_config("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT")

    def test_require_config_raises_when_field_whitespace_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "PROJECT_NAME", "   ")

        with pytest.raises(ValueError, match="Required configuration missing: PROJECT_NAME"):
            require_config("PROJECT_NAME")

    def test_require_config_lists_every_missing_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", None)

        with pytest.raises(ValueError, match="Required configuration missing:") as exc_info:
            require_config("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "NONEXISTENT_FIELD")

        assert "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT" in str(exc_info.value)
        assert "NONEXISTENT_FIELD" in str(exc_info.value)


class TestValidators:
    """Tests for field validators."""

    def test_parse_cors_strips_whitespace(self) -> None:
        result = Settings.parse_cors("http://localhost:3000, http://example.com ")
        assert result == ["http://localhost:3000", "http://example.com"]

    def test_parse_cors_passes_list_through(self) -> None:
        assert Settings.parse_cors(["http://a"]) == ["http://a"]

    def test_parse_otel_excluded_urls_drops_empty_entries(self) -> None:
        assert Settings.parse_otel_excluded_urls("/health,, /ready ,") == ["/health", "/ready"]

    def test_validate_log_level_normalizes_case(self) -> None:
        assert Settings.validate_log_level("debug") == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")

        with pytest.raises(ValidationError, match="Invalid LOG_LEVEL"):
            Settings()


def test_database_url_read_from_secret_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECRET_DATABASE_URL", "postgresql+asyncpg://u:p@db/subway")

    assert Settings().DATABASE_URL == "postgresql+asyncpg://u:p@db/subway"
