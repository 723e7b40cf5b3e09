"""
gqlxp Configuration

Settings are loaded from:
1. Environment variables (prefixed with GQLXP_)
2. ~/.gqlxp/.env file

Key settings:
- GQLXP_INDEX_DIR: Directory holding one search index per schema
- GQLXP_VISIBLE_PANELS: Number of panels shown side by side while browsing
- GQLXP_SEARCH_LIMIT: Default maximum number of search results
- GQLXP_LOG_LEVEL: Logging level used by the CLI
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = Path.home() / ".gqlxp"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """gqlxp configuration settings."""

    index_dir: Path = Field(
        default=CONFIG_DIR / "indexes",
        description="Base directory for per-schema search indexes",
    )
    visible_panels: int = Field(default=2, ge=1, description="Panels visible at once")
    search_limit: int = Field(default=30, ge=1, description="Default maximum search results")
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    model_config = SettingsConfigDict(
        env_prefix="GQLXP_",
        env_file=CONFIG_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("index_dir", mode="before")
    @classmethod
    def _normalize_index_dir(cls, value: str | Path) -> Path:
        if value is None or value == "":
            raise ValueError("GQLXP_INDEX_DIR cannot be empty")
        return Path(value).expanduser()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings."""
    return Settings()


def reload_settings() -> Settings:
    """Clear cached settings (useful for tests) and reload."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "get_settings", "reload_settings", "CONFIG_DIR"]
