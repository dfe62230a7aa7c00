"""Data models for the interpolation engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from anchorscore.interpolation.constants import MIN_SLOTS_WITH_INTERIOR
from anchorscore.interpolation.rounding import spaced_scores
from anchorscore.store.models import Item


class AnchorKind(str, Enum):
    """Why an item's score is authoritative.

    - HEAD: the item at position 0, an anchor whatever its pin flag
    - PINNED: an item the user pinned
    """

    HEAD = "HEAD"
    PINNED = "PINNED"


@dataclass(frozen=True)
class Anchor:
    """A position whose score is read but never recomputed.

    Attributes:
        position: Index in the ordered sequence.
        score: The anchor's score.
        kind: How the item qualifies as an anchor.
    """

    position: int
    score: float
    kind: AnchorKind


@dataclass(frozen=True)
class Segment:
    """Two consecutive anchors and the slots between them.

    Attributes:
        upper: Anchor nearer the top; its score is the ceiling.
        lower: Anchor further down; its score is the floor.
    """

    upper: Anchor
    lower: Anchor

    @property
    def slot_count(self) -> int:
        """Number of slots, counting both anchors."""
        return self.lower.position - self.upper.position + 1

    @property
    def interior_positions(self) -> range:
        """Positions strictly between the two anchors."""
        return range(self.upper.position + 1, self.lower.position)

    def assignments(self) -> list[tuple[int, float]]:
        """Compute the (position, score) pairs for the interior slots.

        Rounded values stay between the two anchor scores, so anchors that
        are off the half-point grid cannot be overtaken by their interior.

        Returns:
            Pairs ordered top to bottom; empty when there is no interior.
        """
        if self.slot_count < MIN_SLOTS_WITH_INTERIOR:
            return []

        values = spaced_scores(self.upper.score, self.lower.score, self.slot_count)
        low, high = sorted((self.lower.score, self.upper.score))
        return [
            (position, min(high, max(low, value)))
            for position, value in zip(self.interior_positions, values[1:-1], strict=True)
        ]


class InterpolationResult(BaseModel):
    """Outcome of one interpolation pass.

    Attributes:
        items: The full sequence, same order, with recomputed scores.
        anchors: Anchors found, top to bottom.
        assigned_count: Number of items that received a generated score.
        stale_tail_count: Items below the last anchor, left as they were.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    items: tuple[Item, ...]
    anchors: tuple[Anchor, ...]
    assigned_count: Annotated[int, Field(ge=0)]
    stale_tail_count: Annotated[int, Field(ge=0)]
