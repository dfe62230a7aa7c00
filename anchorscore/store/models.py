"""Data models for the ordered item store."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """A ranked list entry.

    Items are immutable values. Field-level edits produce a new Item that
    the store writes back at the same position. The item's position is not
    stored here; it is its index in the ordered sequence.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Annotated[int, Field(description="Media identifier (unique per list)")]
    score: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Score on the 0-10 scale, None if unknown",
    )
    pinned: bool = Field(default=False, description="Whether the score is fixed")
    repeat_count: Annotated[int, Field(ge=0, description="Times re-read")] = 0
    title_romaji: str | None = None
    title_english: str | None = None
    cover_image_url: str | None = None
    mean_score: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Community mean score from the source",
    )

    @property
    def display_title(self) -> str:
        """Title shown in the ranked list: romaji, then English, then the id."""
        return self.title_romaji or self.title_english or f"#{self.id}"

    def with_score(self, score: float | None) -> "Item":
        """Return a copy carrying a new score."""
        return self.model_copy(update={"score": score})

    def with_pinned(self, pinned: bool) -> "Item":
        """Return a copy with the pin flag set."""
        return self.model_copy(update={"pinned": pinned})

    def toggled(self) -> "Item":
        """Return a copy with the pin flag flipped."""
        return self.with_pinned(not self.pinned)
