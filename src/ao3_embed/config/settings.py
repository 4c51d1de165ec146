"""Service settings loaded from environment variables.

Sources, highest priority first:
1. OS environment variables
2. the file named by AO3_EMBED_ENV_FILE
3. config/.env.dev - local development
4. config/.env - deployment

Relative env-file paths resolve against the working directory.
"""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VAR = "AO3_EMBED_ENV_FILE"


def env_files() -> tuple[str, ...]:
    """Env files to read, lowest priority first."""
    files = ("config/.env", "config/.env.dev")
    override = os.environ.get(ENV_FILE_VAR)
    return (*files, override) if override else files


class Settings(BaseSettings):
    """Embed service configuration."""

    log_level: str = "INFO"

    # HOST and PORT are unprefixed so the service runs with the usual
    # platform-provided variables.
    host: str = Field(default="http://localhost:3000", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    bind_address: str = "::"

    # The fronted site: redirect target, fetch base and profile links
    origin_url: str = "https://archiveofourown.org"

    cache_max_entries: int = Field(default=100, ge=1)
    single_flight: bool = False

    fetch_timeout: float = 10.0
    fetch_user_agent: str = "ao3-embed/0.1 (+link previews)"

    model_config = SettingsConfigDict(
        env_file=env_files(),
        env_file_encoding="utf-8",
        env_prefix="AO3_EMBED_",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("host", "origin_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
