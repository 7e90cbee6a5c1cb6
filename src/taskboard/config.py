"""Environment-driven settings for the task server and client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_DATABASE_URL = "sqlite:///./taskboard.db"
DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:5175",
    "http://localhost:3000",
)


def _split_origins(raw: str | None) -> list[str]:
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime settings.

    Values come from the environment, falling back to local-development
    defaults. ``CONNECTION_STRING`` wins over ``DATABASE_URL``.
    """

    database_url: str = DEFAULT_DATABASE_URL
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    api_base_url: str = DEFAULT_API_BASE_URL

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=(
                os.getenv("CONNECTION_STRING")
                or os.getenv("DATABASE_URL")
                or DEFAULT_DATABASE_URL
            ),
            cors_origins=_split_origins(os.getenv("TASKBOARD_CORS_ORIGINS")),
            log_level=os.getenv("TASKBOARD_LOG_LEVEL", "INFO"),
            api_base_url=os.getenv("TASKBOARD_API_BASE_URL", DEFAULT_API_BASE_URL),
        )
