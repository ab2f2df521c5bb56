from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VIEWS = {"daily", "weekly", "alltime"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    data_file: Path = Field(
        default=Path("data/activity_data.json"),
        alias="ACTIVITY_DATA_FILE",
    )
    # Unset means the dashboard polls its own /api/data route in-process.
    source_url: str | None = Field(default=None, alias="ACTIVITY_SOURCE_URL")
    poll_interval_seconds: float = Field(default=5.0, alias="POLL_INTERVAL_SECONDS")
    poll_enabled: bool = Field(default=True, alias="POLL_ENABLED")
    request_timeout_seconds: float = Field(default=10.0, alias="REQUEST_TIMEOUT_SECONDS")
    default_view: str = Field(default="daily", alias="DEFAULT_VIEW")
    log_file: Path = Field(default=Path("logs/activity_dashboard.log"), alias="LOG_FILE")

    version: str = Field(default_factory=lambda: Settings._load_version())

    @staticmethod
    def _load_version() -> str:
        version_env = os.getenv("VERSION")
        if version_env:
            return version_env
        version_file = Path("VERSION")
        if version_file.exists():
            return version_file.read_text(encoding="utf-8").strip()
        return "0.0.0"

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Path | str) -> Path:
        path = Path(value)
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("source_url", mode="before")
    @classmethod
    def _validate_source_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = str(value).strip()
        return normalized or None

    @field_validator("poll_interval_seconds", mode="before")
    @classmethod
    def _validate_poll_interval(cls, value: float | str | None) -> float:
        if value is None:
            return 5.0
        interval = float(value)
        return max(interval, 0.5)

    @field_validator("default_view", mode="before")
    @classmethod
    def _validate_default_view(cls, value: str | None) -> str:
        if not value:
            return "daily"
        normalized = str(value).lower()
        if normalized not in _VIEWS:
            return "daily"
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Cached settings accessor."""

    return Settings()
