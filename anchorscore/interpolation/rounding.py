"""Numeric helpers for spacing and rounding scores."""

import math

from anchorscore.interpolation.constants import SCORE_STEP


def round_to_step(value: float, step: float = SCORE_STEP) -> float:
    """Round to the nearest multiple of step, halves rounding up.

    With the default step this is round(value * 2) / 2 where exact halves
    go towards positive infinity (5.25 -> 5.5, 8.85 -> 9.0).

    Args:
        value: Raw value.
        step: Granularity to round to.

    Returns:
        The rounded value.
    """
    return math.floor(value / step + 0.5) * step


def evenly_spaced(ceiling: float, floor: float, count: int) -> list[float]:
    """Generate count evenly spaced values from ceiling down to floor.

    Both endpoints are included. Fewer than two values need no step, so
    count 1 yields just the ceiling and count 0 yields nothing.

    Args:
        ceiling: First value.
        floor: Last value.
        count: Number of values.

    Returns:
        Raw (unrounded) values, ceiling first.
    """
    if count <= 0:
        return []
    if count == 1:
        return [ceiling]

    step = (ceiling - floor) / (count - 1)
    return [ceiling - k * step for k in range(count)]


def spaced_scores(ceiling: float, floor: float, count: int) -> list[float]:
    """Evenly spaced values rounded to the scoring step."""
    return [round_to_step(value) for value in evenly_spaced(ceiling, floor, count)]
