"""Anchor-based score interpolation engine.

Given a ranked list where some items are pinned at fixed scores, assigns
evenly spaced scores to the unpinned items between consecutive anchors so
that scores never increase down the list.
"""

from anchorscore.interpolation.engine import (
    ScoreInterpolator,
    find_anchors,
    interpolate_scores,
    iter_segments,
    run_interpolation,
)
from anchorscore.interpolation.errors import (
    InterpolationError,
    InterpolationPreconditionError,
)
from anchorscore.interpolation.metrics import InterpolationMetrics
from anchorscore.interpolation.models import (
    Anchor,
    AnchorKind,
    InterpolationResult,
    Segment,
)
from anchorscore.interpolation.rounding import (
    evenly_spaced,
    round_to_step,
    spaced_scores,
)


__all__ = [
    "Anchor",
    "AnchorKind",
    "InterpolationError",
    "InterpolationMetrics",
    "InterpolationPreconditionError",
    "InterpolationResult",
    "ScoreInterpolator",
    "Segment",
    "evenly_spaced",
    "find_anchors",
    "interpolate_scores",
    "iter_segments",
    "round_to_step",
    "run_interpolation",
    "spaced_scores",
]
