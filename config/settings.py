"""Configuration for the financial plan application.

Values come from environment variables (and an optional ``.env`` file) via
pydantic-settings. Per-session preferences such as the current wizard step stay
in Streamlit session state and are not configured here.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local snapshot store."""

    model_config = SettingsConfigDict(env_prefix="MAJANDUSKAVA_STORAGE_", extra="ignore")

    path: Path = Field(
        default=Path(".majanduskava") / "snapshots.json",
        description="JSON file holding stored documents by key",
    )
    key: str = Field(
        default="solverelab_majanduskava_v1",
        description="Key the plan snapshot is stored under",
    )
    autosave_delay_ms: int = Field(
        default=350,
        ge=0,
        le=10_000,
        description="Debounce delay before an edit is written",
    )

    @property
    def autosave_delay_seconds(self) -> float:
        return self.autosave_delay_ms / 1000


class RemoteSettings(BaseSettings):
    """Optional remote evaluation service."""

    model_config = SettingsConfigDict(env_prefix="MAJANDUSKAVA_CORE_", extra="ignore")

    enabled: bool = Field(default=False, description="Call the evaluation service at all")
    base_url: str = Field(default="http://api.solvere.ee:8000", description="Service root URL")
    timeout_seconds: float = Field(default=5.0, gt=0, le=60)
    domain: str = Field(default="korteriühistu")
    jurisdiction: str = Field(default="EE")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def evaluate_url(self) -> str:
        return f"{self.base_url}/evaluate"


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAJANDUSKAVA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False, description="Render log lines as JSON")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


class Settings:
    """Root settings container aggregating the sections above."""

    def __init__(self) -> None:
        self.app = AppSettings()
        self.storage = StorageSettings()
        self.remote = RemoteSettings()


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings. Call ``get_settings.cache_clear()`` to reload."""

    return Settings()


__all__ = ["AppSettings", "RemoteSettings", "Settings", "StorageSettings", "get_settings"]
