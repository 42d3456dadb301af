"""Character sheet storage: one JSON document per character, keyed by id.

No merge semantics; a save replaces the whole document.
"""

import logging
from typing import Any

from .core import (
    character_path,
    delete_file,
    exists,
    list_character_ids,
    read_json,
    write_json,
)

logger = logging.getLogger(__name__)


def list_characters() -> list[dict[str, Any]]:
    """Load every stored character. Unreadable documents are skipped."""
    characters = []
    for character_id in list_character_ids():
        try:
            character = read_json(character_path(character_id))
        except ValueError as e:
            logger.warning(f"Skipping unreadable character {character_id}: {e}")
            continue
        if not isinstance(character, dict):
            logger.warning(f"Skipping character {character_id}: not a JSON object")
            continue
        characters.append(character)
    return characters


def get_character(character_id: str) -> dict[str, Any] | None:
    """Load a single character. Returns None if not found."""
    return read_json(character_path(character_id))


def save_character(character_id: str, data: dict[str, Any]) -> dict[str, Any]:
    """Create or replace a character. The stored `id` always matches the key."""
    character = {**data, "id": character_id}
    write_json(character_path(character_id), character)
    return character


def delete_character(character_id: str) -> None:
    path = character_path(character_id)
    if not exists(path):
        raise FileNotFoundError(f"Character {character_id} not found")
    delete_file(path)


def duplicate_character(source_id: str, new_id: str) -> dict[str, Any]:
    """Copy a character under a new id. Returns the copy."""
    source = get_character(source_id)
    if source is None:
        raise FileNotFoundError(f"Character {source_id} not found")
    return save_character(new_id, dict(source))


def character_exists(character_id: str) -> bool:
    return exists(character_path(character_id))


def seed_if_empty() -> dict[str, Any] | None:
    """Write a starter character when none exist. Returns it, or None if skipped."""
    from compendium.characters import new_character

    if list_character_ids():
        return None
    character = new_character("Adventurer")
    logger.info(f"Seeding starter character {character['id']}")
    return save_character(character["id"], character)
