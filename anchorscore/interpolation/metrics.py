"""Metrics collection for the interpolation engine."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class InterpolationMetrics:
    """Metrics for interpolation passes.

    Attributes:
        passes_total: Completed interpolation passes.
        failures_total: Passes rejected by a precondition.
        scores_assigned_total: Generated scores written across all passes.
        anchors_total: Anchors seen across all passes.
        stale_tail_items_total: Items left below the last anchor.
        duration_ms_total: Time spent interpolating.
    """

    passes_total: int = 0
    failures_total: int = 0
    scores_assigned_total: int = 0
    anchors_total: int = 0
    stale_tail_items_total: int = 0
    duration_ms_total: float = 0.0

    _instance: ClassVar["InterpolationMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "InterpolationMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_pass(
        self,
        assigned: int,
        anchors: int,
        stale_tail: int,
        duration_ms: float,
    ) -> None:
        """Record a completed pass.

        Args:
            assigned: Scores generated in the pass.
            anchors: Anchors found in the pass.
            stale_tail: Items below the last anchor.
            duration_ms: Duration in milliseconds.
        """
        self.passes_total += 1
        self.scores_assigned_total += assigned
        self.anchors_total += anchors
        self.stale_tail_items_total += stale_tail
        self.duration_ms_total += duration_ms

    def record_failure(self) -> None:
        """Record a pass rejected by a precondition."""
        self.failures_total += 1

    def to_dict(self) -> dict[str, int | float]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "passes_total": self.passes_total,
            "failures_total": self.failures_total,
            "scores_assigned_total": self.scores_assigned_total,
            "anchors_total": self.anchors_total,
            "stale_tail_items_total": self.stale_tail_items_total,
            "duration_ms_total": self.duration_ms_total,
        }
