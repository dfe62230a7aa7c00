"""Reading and writing item files (YAML or JSON)."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import TypeAdapter, ValidationError

from anchorscore.store.errors import ItemFileError
from anchorscore.store.models import Item


logger = structlog.get_logger()

YAML_SUFFIXES = frozenset({".yaml", ".yml"})

_ITEMS_ADAPTER = TypeAdapter(list[Item])


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def load_items(path: Path) -> list[Item]:
    """Load an ordered item list from a file.

    The document is either a list of item mappings or a mapping with an
    ``items`` key holding that list. File order is list order.

    Args:
        path: Path to a .yaml, .yml or .json file.

    Returns:
        Items in file order.

    Raises:
        ItemFileError: If the file is unreadable, malformed, or invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
        data: Any = yaml.safe_load(text) if _is_yaml(path) else json.loads(text)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ItemFileError(str(path), [str(e)]) from e

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ItemFileError(str(path), ["expected a list of items"])

    try:
        items = _ITEMS_ADAPTER.validate_python(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ItemFileError(str(path), errors) from e

    logger.debug("items_loaded", path=str(path), count=len(items))
    return items


def dump_items(items: Sequence[Item], path: Path) -> None:
    """Write items to a file in the format chosen by its suffix.

    Args:
        items: Ordered items to write.
        path: Destination file.
    """
    payload = {"items": [item.model_dump(exclude_none=True) for item in items]}
    path.parent.mkdir(parents=True, exist_ok=True)
    if _is_yaml(path):
        text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")
    logger.debug("items_written", path=str(path), count=len(items))
