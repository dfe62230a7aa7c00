"""Constants for the interpolation engine."""

# Scoring granularity of the 10-point scale
SCORE_STEP: float = 0.5

# Bounds of the scale (enforced on manual edits only)
SCORE_MIN: float = 0.0
SCORE_MAX: float = 10.0

# Fewest slots a segment needs before it has an interior position
MIN_SLOTS_WITH_INTERIOR: int = 3
