"""Canned AniList responses for fetch tests."""

from typing import Any


def entry(
    media_id: int,
    score: float,
    repeat: int = 0,
    romaji: str | None = None,
    english: str | None = None,
) -> dict[str, Any]:
    """Build one MediaList entry as AniList returns it."""
    return {
        "repeat": repeat,
        "score": score,
        "media": {
            "id": media_id,
            "title": {"romaji": romaji or f"Title {media_id}", "english": english},
            "coverImage": {"medium": f"https://img.example/{media_id}.jpg"},
            "meanScore": 70,
        },
    }


def collection(**lists: list[dict[str, Any]]) -> dict[str, Any]:
    """Build a MediaListCollection response with the given named lists."""
    return {
        "data": {
            "MediaListCollection": {
                "lists": [
                    {"name": name, "entries": entries} for name, entries in lists.items()
                ]
            }
        }
    }


COMPLETED_RESPONSE = collection(
    Completed=[
        entry(30013, 8.0, romaji="One Punch-Man"),
        entry(30002, 9.5, repeat=2, romaji="Berserk"),
        entry(30104, 8.0, romaji="Yotsuba to!", english="Yotsuba&!"),
        entry(30001, 6.5, romaji="Monster"),
    ],
    Reading=[entry(31706, 7.0)],
)

NOT_FOUND_RESPONSE = {
    "errors": [{"message": "User not found", "status": 404}],
    "data": {"MediaListCollection": None},
}
