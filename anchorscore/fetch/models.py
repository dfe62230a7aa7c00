"""Error and retry models for AniList requests."""

import random
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from anchorscore.fetch.constants import MAX_RETRY_AFTER_SECONDS


class FetchErrorClass(str, Enum):
    """Why a list request failed.

    Transient classes (timeouts, refused connections, 5xx and 429) are worth
    another attempt. The rest describe an answer that will not change:
    an unknown user, a private list, or a payload without the list.
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_4XX = "HTTP_4XX"
    HTTP_5XX = "HTTP_5XX"
    RATE_LIMITED = "RATE_LIMITED"
    GRAPHQL_ERROR = "GRAPHQL_ERROR"
    SCHEMA = "SCHEMA"
    UNKNOWN = "UNKNOWN"

    @property
    def is_transient(self) -> bool:
        """Whether repeating the same request may succeed."""
        return self in _TRANSIENT_CLASSES


_TRANSIENT_CLASSES = frozenset(
    {
        FetchErrorClass.NETWORK_TIMEOUT,
        FetchErrorClass.CONNECTION_ERROR,
        FetchErrorClass.HTTP_5XX,
        FetchErrorClass.RATE_LIMITED,
    }
)


class FetchError(BaseModel):
    """One failed attempt, or the final failure of a list request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    error_class: FetchErrorClass
    message: Annotated[str, Field(min_length=1)]
    status_code: int | None = None
    retry_after: Annotated[int | None, Field(ge=0)] = None


class FetchFailedError(Exception):
    """Raised when a user's list could not be retrieved.

    The typed FetchError is kept on ``error`` for reporting.
    """

    def __init__(self, error: FetchError, user_name: str | None = None) -> None:
        self.error = error
        self.user_name = user_name
        super().__init__(f"Fetch failed ({error.error_class.value}): {error.message}")


class RetryPolicy(BaseModel):
    """How often and how patiently a list request is repeated.

    Backoff doubles from ``base_delay_ms`` (times ``exponential_base`` per
    attempt) up to ``max_delay_ms``, plus up to ``jitter_factor`` of random
    extra. A rate-limited answer waits at least as long as its Retry-After
    header asks, capped at MAX_RETRY_AFTER_SECONDS.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: Annotated[int, Field(ge=0, le=10)] = 3
    base_delay_ms: Annotated[int, Field(ge=0, le=60000)] = 1000
    max_delay_ms: Annotated[int, Field(ge=0, le=300000)] = 30000
    exponential_base: Annotated[float, Field(ge=1.0, le=5.0)] = 2.0
    jitter_factor: Annotated[float, Field(ge=0.0, le=1.0)] = 0.1

    def should_retry(self, error: FetchError, attempt: int) -> bool:
        """Decide whether attempt number ``attempt`` (0-based) gets a successor."""
        return attempt < self.max_retries and error.error_class.is_transient

    def get_delay_ms(self, attempt: int) -> int:
        """Backoff before the retry that follows attempt ``attempt``."""
        delay = min(
            self.base_delay_ms * self.exponential_base**attempt,
            self.max_delay_ms,
        )
        return int(delay * (1 + self.jitter_factor * random.random()))  # noqa: S311

    def wait_seconds(self, error: FetchError, attempt: int) -> float:
        """Total pause before retrying after ``error``.

        Args:
            error: The failure of the previous attempt.
            attempt: Number of that attempt (0-based).

        Returns:
            Seconds to sleep: the backoff, or the server's Retry-After if
            that is longer.
        """
        backoff = self.get_delay_ms(attempt) / 1000.0
        if error.retry_after is None:
            return backoff
        return max(backoff, float(min(error.retry_after, MAX_RETRY_AFTER_SECONDS)))
