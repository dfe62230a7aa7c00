"""Factories for building item lists in tests."""

from anchorscore.store.models import Item


def make_item(
    item_id: int,
    score: float | None = None,
    pinned: bool = False,
    repeat_count: int = 0,
    title: str | None = None,
) -> Item:
    """Create a test Item."""
    return Item(
        id=item_id,
        score=score,
        pinned=pinned,
        repeat_count=repeat_count,
        title_romaji=title or f"Title {item_id}",
    )


def make_items(*specs: tuple[float | None, bool]) -> list[Item]:
    """Create a list from (score, pinned) pairs; ids are 1, 2, 3, ..."""
    return [
        make_item(item_id=index + 1, score=score, pinned=pinned)
        for index, (score, pinned) in enumerate(specs)
    ]


def scores_of(items: list[Item] | tuple[Item, ...]) -> list[float | None]:
    """Scores in list order."""
    return [item.score for item in items]
