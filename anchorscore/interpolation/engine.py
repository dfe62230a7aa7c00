"""Anchor-based score interpolation.

The top item and every pinned item are anchors. Between two consecutive
anchors the unpinned items get evenly spaced scores running from the upper
anchor's score down to the lower one's, rounded to the scoring step. Items
below the last anchor keep whatever score they had (the stale tail); users
pin the last row they care about.
"""

import math
import time
from collections.abc import Iterable, Iterator, Sequence

import structlog

from anchorscore.interpolation.errors import InterpolationPreconditionError
from anchorscore.interpolation.metrics import InterpolationMetrics
from anchorscore.interpolation.models import (
    Anchor,
    AnchorKind,
    InterpolationResult,
    Segment,
)
from anchorscore.store.models import Item


logger = structlog.get_logger()


def _anchor_at(items: Sequence[Item], position: int) -> Anchor | None:
    """Return the anchor at a position, or None if the item is not one.

    Raises:
        InterpolationPreconditionError: If an anchor has no finite score.
    """
    item = items[position]
    if position == 0:
        kind = AnchorKind.HEAD
    elif item.pinned:
        kind = AnchorKind.PINNED
    else:
        return None

    if item.score is None or not math.isfinite(item.score):
        msg = (
            f"Anchor at position {position} (item {item.id}) has no usable score; "
            "set a score before generating"
        )
        raise InterpolationPreconditionError(msg, position=position)
    return Anchor(position=position, score=item.score, kind=kind)


def find_anchors(items: Sequence[Item]) -> list[Anchor]:
    """List the anchors of a sequence, top to bottom.

    Args:
        items: Ordered items.

    Returns:
        The position-0 anchor followed by every pinned item after it.

    Raises:
        InterpolationPreconditionError: If the sequence is empty or an
            anchor has no score.
    """
    if not items:
        msg = "Cannot interpolate an empty list"
        raise InterpolationPreconditionError(msg)

    anchors = []
    for position in range(len(items)):
        anchor = _anchor_at(items, position)
        if anchor is not None:
            anchors.append(anchor)
    return anchors


def _fold_segments(anchors: Iterable[Anchor]) -> Iterator[Segment]:
    # The only state carried through the walk is the last anchor seen.
    previous: Anchor | None = None
    for anchor in anchors:
        if previous is not None:
            yield Segment(upper=previous, lower=anchor)
        previous = anchor


def iter_segments(items: Sequence[Item]) -> Iterator[Segment]:
    """Walk the sequence once, pairing each anchor with the previous one.

    Args:
        items: Ordered items.

    Yields:
        Segments between consecutive anchors, top to bottom.

    Raises:
        InterpolationPreconditionError: If the sequence is empty or an
            anchor has no score.
    """
    return _fold_segments(find_anchors(items))


def _apply_segments(
    items: Sequence[Item], segments: Iterable[Segment]
) -> tuple[list[Item], int]:
    """Write generated scores into a copy of items.

    Returns:
        The new list and the number of scores written.
    """
    result = list(items)
    assigned = 0
    for segment in segments:
        for position, score in segment.assignments():
            result[position] = result[position].with_score(score)
            assigned += 1
    return result, assigned


def interpolate_scores(items: Sequence[Item]) -> list[Item]:
    """Pure function API for one interpolation pass.

    Args:
        items: Ordered items, highest ranked first.

    Returns:
        A new list with the same items in the same order. Items strictly
        between two anchors carry generated scores; anchors and the stale
        tail are unchanged.

    Raises:
        InterpolationPreconditionError: If the sequence is empty or an
            anchor has no score.
    """
    result, _ = _apply_segments(items, iter_segments(items))
    return result


class ScoreInterpolator:
    """Runs interpolation passes with logging and metrics."""

    def __init__(
        self,
        session_id: str,
        metrics: InterpolationMetrics | None = None,
    ) -> None:
        """Initialize the interpolator.

        Args:
            session_id: Session identifier for logging.
            metrics: Optional metrics instance.
        """
        self._metrics = metrics or InterpolationMetrics.get_instance()
        self._log = logger.bind(
            component="interpolation",
            session_id=session_id,
        )

    def run(self, items: Sequence[Item]) -> InterpolationResult:
        """Run one interpolation pass.

        Args:
            items: Ordered items, highest ranked first.

        Returns:
            InterpolationResult with the recomputed sequence.

        Raises:
            InterpolationPreconditionError: If the sequence cannot be
                interpolated.
        """
        self._log.info("interpolation_started", items_in=len(items))
        start = time.perf_counter()

        try:
            anchors = find_anchors(items)
        except InterpolationPreconditionError as e:
            self._metrics.record_failure()
            self._log.warning(
                "interpolation_rejected",
                reason=e.message,
                position=e.position,
            )
            raise

        segments = list(_fold_segments(anchors))
        result, assigned = _apply_segments(items, segments)

        stale_tail = len(items) - anchors[-1].position - 1
        duration_ms = (time.perf_counter() - start) * 1000
        self._metrics.record_pass(
            assigned=assigned,
            anchors=len(anchors),
            stale_tail=stale_tail,
            duration_ms=duration_ms,
        )

        self._log.info(
            "interpolation_complete",
            anchors=len(anchors),
            segments=len(segments),
            assigned=assigned,
            stale_tail=stale_tail,
            duration_ms=round(duration_ms, 2),
        )

        return InterpolationResult(
            items=tuple(result),
            anchors=tuple(anchors),
            assigned_count=assigned,
            stale_tail_count=stale_tail,
        )


def run_interpolation(
    items: Sequence[Item], session_id: str = "pure"
) -> InterpolationResult:
    """Run one pass and return the full result.

    Args:
        items: Ordered items.
        session_id: Session identifier.

    Returns:
        InterpolationResult for the pass.
    """
    return ScoreInterpolator(session_id=session_id).run(items)
