"""Counters for AniList list requests."""

from collections import Counter
from dataclasses import dataclass, field
from typing import ClassVar

from anchorscore.fetch.models import FetchErrorClass


@dataclass
class FetchMetrics:
    """Process-wide counters for list fetches.

    A fetch is one ``fetch_list`` call; it makes one or more attempts, each
    of which either gets an HTTP status or fails before one arrives.
    """

    fetches_total: int = 0
    fetches_failed: Counter[str] = field(default_factory=Counter)
    attempts_by_status: Counter[int] = field(default_factory=Counter)
    retries_total: int = 0
    entries_fetched_total: int = 0
    fetch_ms_total: float = 0.0

    _instance: ClassVar["FetchMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "FetchMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_attempt(self, status_code: int) -> None:
        """Count an attempt that got an HTTP answer."""
        self.attempts_by_status[status_code] += 1

    def record_retry(self) -> None:
        """Count a repeated attempt."""
        self.retries_total += 1

    def record_fetch(self, entries: int, duration_ms: float) -> None:
        """Count a fetch that produced a list.

        Args:
            entries: Items in the fetched list.
            duration_ms: Wall time including retries.
        """
        self.fetches_total += 1
        self.entries_fetched_total += entries
        self.fetch_ms_total += duration_ms

    def record_failed_fetch(self, error_class: FetchErrorClass) -> None:
        """Count a fetch that gave up."""
        self.fetches_total += 1
        self.fetches_failed[error_class.value] += 1

    def to_dict(self) -> dict[str, object]:
        """Snapshot for the end-of-command summary."""
        return {
            "fetches_total": self.fetches_total,
            "fetches_failed": dict(self.fetches_failed),
            "attempts_by_status": dict(self.attempts_by_status),
            "retries_total": self.retries_total,
            "entries_fetched_total": self.entries_fetched_total,
            "fetch_ms_total": round(self.fetch_ms_total, 2),
        }
