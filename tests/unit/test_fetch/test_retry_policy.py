"""Unit tests for retry policy decisions."""

import pytest
from pydantic import ValidationError

from anchorscore.fetch.models import FetchError, FetchErrorClass, RetryPolicy


class TestRetryPolicy:
    """Tests for RetryPolicy model."""

    def test_default_values(self) -> None:
        """Test default retry policy values."""
        policy = RetryPolicy()

        assert policy.max_retries == 3
        assert policy.base_delay_ms == 1000
        assert policy.max_delay_ms == 30000
        assert policy.exponential_base == 2.0
        assert policy.jitter_factor == 0.1

    def test_bounds_enforced(self) -> None:
        """Out-of-range settings are rejected."""
        with pytest.raises(ValidationError):
            RetryPolicy(max_retries=11)


class TestShouldRetry:
    """Tests for retry decision logic."""

    @pytest.fixture
    def policy(self) -> RetryPolicy:
        """Create a standard retry policy."""
        return RetryPolicy(max_retries=3)

    @pytest.mark.parametrize(
        "error_class",
        [
            FetchErrorClass.NETWORK_TIMEOUT,
            FetchErrorClass.CONNECTION_ERROR,
            FetchErrorClass.HTTP_5XX,
            FetchErrorClass.RATE_LIMITED,
        ],
    )
    def test_transient_errors_retried(
        self, policy: RetryPolicy, error_class: FetchErrorClass
    ) -> None:
        """Transient failures are retried until the limit."""
        error = FetchError(error_class=error_class, message="transient")

        assert policy.should_retry(error, attempt=0) is True
        assert policy.should_retry(error, attempt=2) is True
        assert policy.should_retry(error, attempt=3) is False

    @pytest.mark.parametrize(
        "error_class",
        [
            FetchErrorClass.HTTP_4XX,
            FetchErrorClass.GRAPHQL_ERROR,
            FetchErrorClass.SCHEMA,
            FetchErrorClass.UNKNOWN,
        ],
    )
    def test_permanent_errors_not_retried(
        self, policy: RetryPolicy, error_class: FetchErrorClass
    ) -> None:
        """Answers that will not change are not retried."""
        error = FetchError(error_class=error_class, message="permanent")

        assert policy.should_retry(error, attempt=0) is False

    def test_zero_max_retries(self) -> None:
        """Test policy with zero max retries."""
        policy = RetryPolicy(max_retries=0)
        error = FetchError(
            error_class=FetchErrorClass.HTTP_5XX,
            message="Server Error",
            status_code=500,
        )

        assert policy.should_retry(error, attempt=0) is False


class TestGetDelayMs:
    """Tests for retry delay calculation."""

    def test_exponential_backoff(self) -> None:
        """Test that delays increase exponentially."""
        policy = RetryPolicy(base_delay_ms=1000, exponential_base=2.0, jitter_factor=0.0)

        assert [policy.get_delay_ms(n) for n in range(4)] == [1000, 2000, 4000, 8000]

    def test_max_delay_cap(self) -> None:
        """Test that delay is capped at max_delay_ms."""
        policy = RetryPolicy(
            base_delay_ms=1000,
            max_delay_ms=5000,
            exponential_base=2.0,
            jitter_factor=0.0,
        )

        assert policy.get_delay_ms(3) == 5000
        assert policy.get_delay_ms(10) == 5000

    def test_jitter_bounded(self) -> None:
        """Jitter never exceeds the configured fraction."""
        policy = RetryPolicy(base_delay_ms=1000, jitter_factor=0.1)

        for _ in range(10):
            assert 1000 <= policy.get_delay_ms(0) <= 1100


class TestWaitSeconds:
    """Tests for the pause before a retry."""

    @pytest.fixture
    def policy(self) -> RetryPolicy:
        """A policy without jitter."""
        return RetryPolicy(base_delay_ms=2000, jitter_factor=0.0)

    def test_backoff_without_retry_after(self, policy: RetryPolicy) -> None:
        """Plain failures wait the backoff."""
        error = FetchError(error_class=FetchErrorClass.HTTP_5XX, message="busy")

        assert policy.wait_seconds(error, attempt=1) == 4.0

    def test_longer_retry_after_wins(self, policy: RetryPolicy) -> None:
        """A Retry-After longer than the backoff is honoured."""
        error = FetchError(
            error_class=FetchErrorClass.RATE_LIMITED, message="slow down", retry_after=10
        )

        assert policy.wait_seconds(error, attempt=0) == 10.0

    def test_retry_after_capped(self, policy: RetryPolicy) -> None:
        """Retry-After never stalls a fetch for more than a minute."""
        error = FetchError(
            error_class=FetchErrorClass.RATE_LIMITED, message="slow down", retry_after=3600
        )

        assert policy.wait_seconds(error, attempt=0) == 60.0


class TestFetchErrorClass:
    """Tests for transient classification."""

    def test_transient_classes(self) -> None:
        """Only transport failures, 5xx and 429 are transient."""
        transient = {c for c in FetchErrorClass if c.is_transient}

        assert transient == {
            FetchErrorClass.NETWORK_TIMEOUT,
            FetchErrorClass.CONNECTION_ERROR,
            FetchErrorClass.HTTP_5XX,
            FetchErrorClass.RATE_LIMITED,
        }


class TestFetchError:
    """Tests for FetchError model."""

    def test_rate_limited_with_retry_after(self) -> None:
        """Test rate limited error with retry_after."""
        error = FetchError(
            error_class=FetchErrorClass.RATE_LIMITED,
            message="Too Many Requests",
            status_code=429,
            retry_after=120,
        )

        assert error.retry_after == 120

    def test_empty_message_rejected(self) -> None:
        """Errors must say what went wrong."""
        with pytest.raises(ValidationError):
            FetchError(error_class=FetchErrorClass.UNKNOWN, message="")

    def test_error_immutable(self) -> None:
        """Test that error is immutable (frozen)."""
        error = FetchError(
            error_class=FetchErrorClass.HTTP_4XX,
            message="Not Found",
            status_code=404,
        )

        with pytest.raises(ValidationError):
            error.status_code = 500  # type: ignore[misc]
