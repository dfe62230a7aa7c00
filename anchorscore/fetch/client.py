"""AniList GraphQL client with retries and typed failures."""

import json
import time
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import httpx
import structlog

from anchorscore.fetch.config import FetchConfig
from anchorscore.fetch.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
)
from anchorscore.fetch.metrics import FetchMetrics
from anchorscore.fetch.models import FetchError, FetchErrorClass, FetchFailedError
from anchorscore.fetch.parser import graphql_error, parse_media_list
from anchorscore.fetch.queries import MEDIA_LIST_COLLECTION_QUERY
from anchorscore.store.models import Item


logger = structlog.get_logger()


class AniListClient:
    """Retrieves a user's ranked list from the AniList GraphQL API.

    Network failures, 5xx and 429 responses are retried according to the
    configured RetryPolicy. Anything that does not end in a parsed list
    raises FetchFailedError.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        session_id: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Fetch configuration.
            session_id: Session identifier for logging.
            transport: Optional httpx transport (tests inject a mock).
        """
        self._config = config or FetchConfig()
        self._transport = transport
        self._metrics = FetchMetrics.get_instance()
        self._log = logger.bind(
            component="fetch",
            session_id=session_id,
        )

    @property
    def config(self) -> FetchConfig:
        """Get the fetch configuration."""
        return self._config

    def fetch_list(self, user_name: str) -> list[Item]:
        """Fetch the configured list of a user.

        Args:
            user_name: AniList user name.

        Returns:
            Unpinned items in the order AniList returned them.

        Raises:
            FetchFailedError: If the request or the response is unusable.
        """
        log = self._log.bind(
            user_name=user_name,
            list_name=self._config.list_name,
        )
        start_time_ns = time.perf_counter_ns()

        body = {
            "query": MEDIA_LIST_COLLECTION_QUERY,
            "variables": {"userName": user_name, "type": self._config.media_type},
        }
        outcome = self._execute_with_retry(body, log)
        if isinstance(outcome, FetchError):
            self._fail(outcome, log)
            raise FetchFailedError(outcome, user_name=user_name)

        parsed = parse_media_list(outcome, self._config.list_name)
        if isinstance(parsed, FetchError):
            self._fail(parsed, log)
            raise FetchFailedError(parsed, user_name=user_name)

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_fetch(len(parsed), duration_ms)
        log.info(
            "fetch_complete",
            items=len(parsed),
            duration_ms=round(duration_ms, 2),
        )
        return parsed

    def _fail(self, error: FetchError, log: structlog.stdlib.BoundLogger) -> None:
        self._metrics.record_failed_fetch(error.error_class)
        log.warning(
            "fetch_failed",
            error_class=error.error_class.value,
            status_code=error.status_code,
            message=error.message,
        )

    def _execute_with_retry(
        self,
        body: dict[str, Any],
        log: structlog.stdlib.BoundLogger,
    ) -> Any | FetchError:
        """POST the query until it succeeds or the policy gives up.

        Args:
            body: JSON request body.
            log: Bound logger.

        Returns:
            Decoded response payload, or the last FetchError.
        """
        policy = self._config.retry_policy
        attempt = 0
        outcome = self._execute_single(body, log, attempt)

        while isinstance(outcome, FetchError) and policy.should_retry(outcome, attempt):
            wait = policy.wait_seconds(outcome, attempt)
            attempt += 1
            self._metrics.record_retry()
            log.info(
                "fetch_retry",
                attempt=attempt,
                error_class=outcome.error_class.value,
                wait_seconds=round(wait, 3),
            )
            time.sleep(wait)
            outcome = self._execute_single(body, log, attempt)

        return outcome

    def _execute_single(
        self,
        body: dict[str, Any],
        log: structlog.stdlib.BoundLogger,
        attempt: int,
    ) -> Any | FetchError:
        """Execute a single POST request.

        Args:
            body: JSON request body.
            log: Bound logger.
            attempt: Current attempt number.

        Returns:
            Decoded response payload, or a FetchError.
        """
        headers = {
            "User-Agent": self._config.user_agent,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            with httpx.Client(
                timeout=self._config.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.post(self._config.api_url, json=body, headers=headers)
        except httpx.TimeoutException as e:
            return FetchError(
                error_class=FetchErrorClass.NETWORK_TIMEOUT,
                message=f"Request timed out: {e}",
            )
        except httpx.ConnectError as e:
            return FetchError(
                error_class=FetchErrorClass.CONNECTION_ERROR,
                message=f"Connection failed: {e}",
            )
        except httpx.HTTPError as e:
            return FetchError(
                error_class=FetchErrorClass.UNKNOWN,
                message=f"Unexpected error: {e}",
            )

        self._metrics.record_attempt(response.status_code)
        log.debug(
            "response_received",
            attempt=attempt,
            status_code=response.status_code,
            bytes=len(response.content),
        )

        try:
            payload: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None

        http_error = self._classify_http_error(response.status_code, response.headers)
        if http_error is not None and http_error.error_class in {
            FetchErrorClass.RATE_LIMITED,
            FetchErrorClass.HTTP_5XX,
        }:
            return http_error

        gql_error = graphql_error(payload)
        if gql_error is not None:
            return gql_error
        if http_error is not None:
            return http_error

        if payload is None:
            return FetchError(
                error_class=FetchErrorClass.SCHEMA,
                message="Response body is not valid JSON",
                status_code=response.status_code,
            )
        return payload

    def _classify_http_error(
        self,
        status_code: int,
        headers: httpx.Headers,
    ) -> FetchError | None:
        """Classify HTTP status code as error.

        Args:
            status_code: HTTP status code.
            headers: Response headers.

        Returns:
            FetchError if status indicates error, None otherwise.
        """
        if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
            return None

        if status_code == HTTP_STATUS_TOO_MANY_REQUESTS:
            return FetchError(
                error_class=FetchErrorClass.RATE_LIMITED,
                message="Rate limited (429 Too Many Requests)",
                status_code=status_code,
                retry_after=self._parse_retry_after(headers.get("retry-after")),
            )

        if HTTP_STATUS_BAD_REQUEST <= status_code < HTTP_STATUS_SERVER_ERROR_MIN:
            return FetchError(
                error_class=FetchErrorClass.HTTP_4XX,
                message=f"Client error ({status_code})",
                status_code=status_code,
            )

        if HTTP_STATUS_SERVER_ERROR_MIN <= status_code < HTTP_STATUS_SERVER_ERROR_MAX:
            return FetchError(
                error_class=FetchErrorClass.HTTP_5XX,
                message=f"Server error ({status_code})",
                status_code=status_code,
            )

        return FetchError(
            error_class=FetchErrorClass.UNKNOWN,
            message=f"Unexpected status ({status_code})",
            status_code=status_code,
        )

    def _parse_retry_after(self, value: str | None) -> int | None:
        """Read a Retry-After header given in seconds or as an HTTP date.

        Returns:
            Non-negative seconds to wait, or None if absent or unreadable.
        """
        if not value:
            return None
        if value.strip().lstrip("-").isdigit():
            return max(0, int(value))

        try:
            when = parsedate_to_datetime(value)
        except (ValueError, TypeError):
            return None
        return max(0, int((when - datetime.now(UTC)).total_seconds()))
