"""Parsing of AniList MediaListCollection responses into items."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from anchorscore.fetch.models import FetchError, FetchErrorClass
from anchorscore.interpolation.rounding import round_to_step
from anchorscore.store.models import Item


class _Title(BaseModel):
    model_config = ConfigDict(extra="ignore")

    romaji: str | None = None
    english: str | None = None


class _CoverImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    medium: str | None = None


class _Media(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    title: _Title = Field(default_factory=_Title)
    cover_image: _CoverImage | None = Field(default=None, alias="coverImage")
    mean_score: float | None = Field(default=None, alias="meanScore")


class _Entry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    repeat: int | None = None
    score: float | None = None
    media: _Media


class _MediaList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    entries: list[_Entry] = Field(default_factory=list)


class _Collection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lists: list[_MediaList] = Field(default_factory=list)


def graphql_error(payload: Any) -> FetchError | None:
    """Extract a GraphQL ``errors`` payload, if present.

    Args:
        payload: Decoded response body.

    Returns:
        FetchError describing the first error, or None.
    """
    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if not errors:
        return None

    first = errors[0] if isinstance(errors, list) else errors
    message = first.get("message") if isinstance(first, dict) else None
    status = first.get("status") if isinstance(first, dict) else None
    return FetchError(
        error_class=FetchErrorClass.GRAPHQL_ERROR,
        message=str(message or "GraphQL error"),
        status_code=status if isinstance(status, int) else None,
    )


def _to_item(entry: _Entry) -> Item:
    # Decimal scores are snapped to the half-point grid the list is ranked on.
    media = entry.media
    return Item(
        id=media.id,
        score=None if entry.score is None else round_to_step(entry.score),
        pinned=False,
        repeat_count=entry.repeat or 0,
        title_romaji=media.title.romaji,
        title_english=media.title.english,
        cover_image_url=media.cover_image.medium if media.cover_image else None,
        mean_score=media.mean_score,
    )


def parse_media_list(payload: Any, list_name: str) -> list[Item] | FetchError:
    """Map one named list of a MediaListCollection response to items.

    Args:
        payload: Decoded response body.
        list_name: Name of the list to extract (e.g. "Completed").

    Returns:
        Items in response order, or a SCHEMA FetchError if the payload does
        not have the expected shape or lacks the list.
    """
    try:
        raw = payload["data"]["MediaListCollection"]
        collection = _Collection.model_validate(raw)
    except (KeyError, TypeError, ValidationError) as e:
        return FetchError(
            error_class=FetchErrorClass.SCHEMA,
            message=f"Unexpected response shape: {e}",
        )

    for media_list in collection.lists:
        if media_list.name == list_name:
            return [_to_item(entry) for entry in media_list.entries]

    names = ", ".join(sorted(m.name for m in collection.lists)) or "none"
    return FetchError(
        error_class=FetchErrorClass.SCHEMA,
        message=f"List '{list_name}' not found (available: {names})",
    )
