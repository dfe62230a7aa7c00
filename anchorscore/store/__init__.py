"""Ordered item store holding the session's working list."""

from anchorscore.store.errors import (
    ItemFileError,
    ItemNotFoundError,
    PositionOutOfRangeError,
    StoreError,
)
from anchorscore.store.io import dump_items, load_items
from anchorscore.store.models import Item
from anchorscore.store.store import ItemStore


__all__ = [
    "Item",
    "ItemFileError",
    "ItemNotFoundError",
    "ItemStore",
    "PositionOutOfRangeError",
    "StoreError",
    "dump_items",
    "load_items",
]
