"""Configuration models for the AniList fetch layer."""

from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, ConfigDict, Field

from anchorscore.fetch.constants import (
    ANILIST_API_URL,
    DEFAULT_LIST_NAME,
    DEFAULT_MEDIA_TYPE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from anchorscore.fetch.models import RetryPolicy


if TYPE_CHECKING:
    from anchorscore.settings.app import AppSettings


class FetchConfig(BaseModel):
    """Configuration for list retrieval.

    Selects the endpoint, which of the user's lists to rank, and the
    timeout and retry behaviour of the request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_url: Annotated[str, Field(min_length=1)] = ANILIST_API_URL
    list_name: Annotated[str, Field(min_length=1)] = DEFAULT_LIST_NAME
    media_type: Annotated[str, Field(pattern=r"^(ANIME|MANGA)$")] = DEFAULT_MEDIA_TYPE
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)

    @classmethod
    def from_settings(
        cls, settings: "AppSettings", list_name: str | None = None
    ) -> "FetchConfig":
        """Build a configuration from environment settings.

        Args:
            settings: Loaded application settings.
            list_name: Optional override of the configured list name.

        Returns:
            FetchConfig for the client.
        """
        return cls(
            api_url=settings.anilist_api_url,
            list_name=list_name or settings.anilist_list_name,
            timeout_seconds=settings.anilist_timeout_seconds,
        )
