"""Domain exceptions for the ordered item store.

Every store mutation either applies completely or raises one of these
before touching the sequence.
"""


class StoreError(Exception):
    """Base exception for all item store errors."""


class ItemNotFoundError(StoreError):
    """Raised when a mutation references an id that is not in the list."""

    def __init__(self, item_id: int) -> None:
        """Initialize the error with the missing item ID.

        Args:
            item_id: The item ID that was not found.
        """
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class PositionOutOfRangeError(StoreError):
    """Raised when a reorder references a position outside the list."""

    def __init__(self, position: int, size: int) -> None:
        """Initialize the error.

        Args:
            position: The offending position.
            size: Number of items in the list.
        """
        self.position = position
        self.size = size
        super().__init__(
            f"Position {position} out of range for list of {size} item(s)"
        )


class ItemFileError(StoreError):
    """Raised when an item file cannot be read or does not validate."""

    def __init__(self, path: str, errors: list[str]) -> None:
        """Initialize the error.

        Args:
            path: Path of the offending file.
            errors: Human-readable error details.
        """
        self.path = path
        self.errors = errors
        super().__init__(f"Invalid item file {path}: {'; '.join(errors)}")
