"""AniList fetch layer.

Retrieves a user's ranked list over GraphQL with:
- Configurable retry policy with exponential backoff
- Retry-After handling for rate limits
- Typed failures for the interaction layer
- Metrics collection for observability
"""

from anchorscore.fetch.client import AniListClient
from anchorscore.fetch.config import FetchConfig
from anchorscore.fetch.metrics import FetchMetrics
from anchorscore.fetch.models import (
    FetchError,
    FetchErrorClass,
    FetchFailedError,
    RetryPolicy,
)
from anchorscore.fetch.parser import parse_media_list


__all__ = [
    "AniListClient",
    "FetchConfig",
    "FetchError",
    "FetchErrorClass",
    "FetchFailedError",
    "FetchMetrics",
    "RetryPolicy",
    "parse_media_list",
]
