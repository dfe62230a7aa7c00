"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from anchorscore.fetch.constants import (
    ANILIST_API_URL,
    DEFAULT_LIST_NAME,
    DEFAULT_TIMEOUT_SECONDS,
)


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    anilist_api_url: str = Field(
        default=ANILIST_API_URL, validation_alias="ANILIST_API_URL"
    )
    anilist_list_name: str = Field(
        default=DEFAULT_LIST_NAME, validation_alias="ANILIST_LIST_NAME"
    )
    anilist_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        ge=1.0,
        le=300.0,
        validation_alias="ANILIST_TIMEOUT_SECONDS",
    )
    default_user: str | None = Field(default=None, validation_alias="ANCHORSCORE_USER")


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
