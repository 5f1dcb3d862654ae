from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEOCELL_",
        case_sensitive=False,
    )

    # Precision used when a caller does not pass one (~19m cells).
    default_precision: int = 8

    # In-process encode cache
    encode_cache_enabled: bool = True
    encode_cache_max_entries: int = 10_000

    log_level: str = "INFO"

    cors_allow_origin: str = "http://localhost:3000"


@lru_cache
def get_settings() -> Settings:
    return Settings()
