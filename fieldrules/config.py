"""Library configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from ``FIELDRULES_*`` environment variables."""

    # Validation defaults
    STOP_ON_FIRST_FAILURE: bool = False

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"
    LOG_FAILURES: bool = False

    model_config = {"env_prefix": "FIELDRULES_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
