from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JSON_EXPLORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Search ranking ---
    EXACT_MATCH_PRIORITY: int = 5
    PARTIAL_MATCH_PRIORITY: int = 1
    SEARCH_ARRAY_INDICES: bool = True

    # --- Navigation highlight (seconds) ---
    SCROLL_SETTLE_SECONDS: float = Field(default=0.1, ge=0)
    HIGHLIGHT_DURATION_SECONDS: float = Field(default=2.0, ge=0)

    # --- Terminal rendering ---
    PREVIEW_MAX_STRING_LENGTH: int = Field(default=80, ge=1)

    LOG_LEVEL: str = "WARNING"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()
