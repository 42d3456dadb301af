"""Compendium content storage: compound keys, additive merge, search.

Each content type is one JSON object on disk mapping "name::SOURCE" to a
record. Records always carry `name` and `source` once imported.

Merge rule on import: a field from the incoming item is copied onto an
existing record only when the record lacks it (or holds None / "") and the
incoming value is itself non-blank. Filled-in fields are never overwritten,
so re-importing a dataset or importing a sparse custom entry before a richer
official one never loses detail.
"""

import logging
import threading
from typing import Any

from .core import content_path, read_json, write_json

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "::"

_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(content_type: str) -> threading.Lock:
    with _locks_guard:
        if content_type not in _locks:
            _locks[content_type] = threading.Lock()
        return _locks[content_type]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def make_key(name: str, source: str) -> str:
    """Build a compound key: "Fireball", "phb" → "Fireball::PHB"."""
    if not name or not source:
        raise ValueError("Name and source are required for compound key")
    return f"{name}{KEY_SEPARATOR}{str(source).upper()}"


def parse_key(key: str) -> dict[str, str]:
    """Split a compound key into {"name", "source"}."""
    parts = key.split(KEY_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(f"Invalid compound key format: {key}")
    return {"name": parts[0], "source": parts[1]}


def get_all(content_type: str) -> dict[str, dict[str, Any]]:
    """Load a content type's full collection. Returns {} if nothing is stored."""
    data = read_json(content_path(content_type))
    return data or {}


def _merge(existing: dict[str, Any], item: dict[str, Any]) -> dict[str, Any]:
    merged = dict(existing)
    for field, value in item.items():
        if field not in merged or _is_blank(merged[field]):
            if not _is_blank(value):
                merged[field] = value
    return merged


def import_items(
    content_type: str, items: list[dict[str, Any]], source: str
) -> int:
    """Merge items into a content type's collection. Returns the number imported.

    `source` is applied to items that do not carry their own. Items without
    a name are skipped.
    """
    if not isinstance(items, list):
        raise ValueError("Items must be a list")
    if not source:
        raise ValueError("source is required")
    path = content_path(content_type)

    with _lock_for(content_type):
        existing = get_all(content_type)
        imported = 0
        for item in items:
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object item in {content_type}: {item!r}")
                continue
            name = item.get("name")
            if not name:
                logger.warning(f"Skipping item without name in {content_type}: {item!r}")
                continue
            item_source = item.get("source") or source
            key = make_key(name, item_source)

            if key in existing:
                existing[key] = _merge(existing[key], item)
            else:
                existing[key] = {**item, "source": item_source}
            imported += 1

        write_json(path, existing)

    logger.info(f"Imported {imported} {content_type} (fallback source {source})")
    return imported


def search(content_type: str, query: str | None) -> dict[str, dict[str, Any]]:
    """Filter a collection by case-insensitive substring on name or description.

    A blank query returns the whole collection.
    """
    all_items = get_all(content_type)
    if not query or not query.strip():
        return all_items

    needle = query.lower()
    results: dict[str, dict[str, Any]] = {}
    for key, item in all_items.items():
        name = parse_key(key)["name"]
        description = item.get("description") or item.get("desc") or ""
        if not isinstance(description, str):
            description = ""
        if needle in name.lower() or needle in description.lower():
            results[key] = item
    return results


def get_item(content_type: str, name: str, source: str) -> dict[str, Any] | None:
    """Find a single record by name and source. Returns None if not found."""
    key = make_key(name, source)
    return get_all(content_type).get(key)


def delete_item(content_type: str, name: str, source: str) -> bool:
    """Remove a record. Returns False (and writes nothing) if it was absent."""
    key = make_key(name, source)
    with _lock_for(content_type):
        all_items = get_all(content_type)
        if key not in all_items:
            return False
        del all_items[key]
        write_json(content_path(content_type), all_items)
    return True
