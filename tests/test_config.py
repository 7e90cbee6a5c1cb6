from __future__ import annotations

import pytest
from loguru import logger

from taskboard.config import DEFAULT_CORS_ORIGINS, DEFAULT_DATABASE_URL, Settings
from taskboard.logging_utils import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONNECTION_STRING", "DATABASE_URL", "TASKBOARD_CORS_ORIGINS", "TASKBOARD_LOG_LEVEL", "TASKBOARD_API_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.cors_origins == list(DEFAULT_CORS_ORIGINS)
    assert settings.log_level == "INFO"
    assert settings.api_base_url == "http://localhost:8000"


def test_connection_string_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///fallback.db")
    assert Settings.from_env().database_url == "sqlite:///fallback.db"

    monkeypatch.setenv("CONNECTION_STRING", "postgresql+psycopg://u:p@db/tasks")
    assert Settings.from_env().database_url == "postgresql+psycopg://u:p@db/tasks"


def test_cors_origins_split(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKBOARD_CORS_ORIGINS", "http://a.test, http://b.test,")
    assert Settings.from_env().cors_origins == ["http://a.test", "http://b.test"]


def test_configure_logging_filters_by_level(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("warning")
    logger.info("quiet message")
    logger.warning("loud message")

    err = capsys.readouterr().err
    assert "quiet message" not in err
    assert "loud message" in err
