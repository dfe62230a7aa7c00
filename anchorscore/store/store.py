"""In-memory ordered item store."""

import uuid
from collections.abc import Callable, Iterable, Iterator, Sequence

import structlog

from anchorscore.store.errors import (
    ItemNotFoundError,
    PositionOutOfRangeError,
    StoreError,
)
from anchorscore.store.models import Item


logger = structlog.get_logger()

Listener = Callable[[tuple[Item, ...]], None]


class ItemStore:
    """Ordered sequence of items for one session.

    The order is the user's ranking, highest first. It changes only through
    replace_all and move_item; field edits write back in place. Subscribed
    listeners receive the new snapshot after each successful mutation.
    """

    def __init__(
        self,
        items: Iterable[Item] | None = None,
        session_id: str | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            items: Optional initial contents.
            session_id: Optional session ID for logging context.
        """
        self._items: list[Item] = list(items or [])
        self._listeners: list[Listener] = []
        self._session_id = session_id or str(uuid.uuid4())
        self._log = logger.bind(
            component="store",
            session_id=self._session_id,
        )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.snapshot())

    def subscribe(self, listener: Listener) -> None:
        """Register a callable notified with each new snapshot.

        Args:
            listener: Callable receiving the snapshot.
        """
        self._listeners.append(listener)

    def snapshot(self) -> tuple[Item, ...]:
        """Return the current ordered sequence as an immutable view."""
        return tuple(self._items)

    def get(self, item_id: int) -> Item:
        """Get an item by id.

        Raises:
            ItemNotFoundError: If no item has this id.
        """
        return self._items[self.position_of(item_id)]

    def position_of(self, item_id: int) -> int:
        """Get the current position of an item.

        Raises:
            ItemNotFoundError: If no item has this id.
        """
        for position, item in enumerate(self._items):
            if item.id == item_id:
                return position
        raise ItemNotFoundError(item_id)

    def replace_all(self, items: Sequence[Item]) -> None:
        """Discard the current contents and install items as given.

        Args:
            items: The new ordered sequence.
        """
        previous = len(self._items)
        self._items = list(items)
        self._log.info(
            "store_replaced",
            items_before=previous,
            items_after=len(self._items),
        )
        self._notify()

    def update_at(self, item_id: int, mutator: Callable[[Item], Item]) -> Item:
        """Apply a field-level mutation to one item in place.

        Args:
            item_id: ID of the item to update.
            mutator: Returns the updated copy of the item.

        Returns:
            The updated item.

        Raises:
            ItemNotFoundError: If no item has this id.
            StoreError: If the mutator changed the item id.
        """
        position = self.position_of(item_id)
        updated = mutator(self._items[position])
        if updated.id != item_id:
            msg = f"Mutator changed item id {item_id} to {updated.id}"
            raise StoreError(msg)

        self._items[position] = updated
        self._log.debug(
            "store_item_updated",
            item_id=item_id,
            position=position,
            score=updated.score,
            pinned=updated.pinned,
        )
        self._notify()
        return updated

    def toggle_pin(self, item_id: int) -> Item:
        """Flip the pin flag of an item."""
        return self.update_at(item_id, lambda item: item.toggled())

    def set_score(self, item_id: int, score: float | None) -> Item:
        """Set the score of an item without moving it."""
        return self.update_at(item_id, lambda item: item.with_score(score))

    def move_item(self, from_position: int, to_position: int) -> None:
        """Move an item, shifting the ones in between.

        Args:
            from_position: Current position of the item.
            to_position: Position the item ends up at.

        Raises:
            PositionOutOfRangeError: If either position is outside the list.
        """
        size = len(self._items)
        for position in (from_position, to_position):
            if not 0 <= position < size:
                raise PositionOutOfRangeError(position, size)

        item = self._items.pop(from_position)
        self._items.insert(to_position, item)
        self._log.info(
            "store_item_moved",
            item_id=item.id,
            from_position=from_position,
            to_position=to_position,
        )
        self._notify()

    def _notify(self) -> None:
        """Send the current snapshot to every listener."""
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)
