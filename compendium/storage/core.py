"""Storage initialization, on-disk layout, JSON primitives, and slug utilities.

This module is the only place that touches the filesystem. Everything else
asks it for paths and goes through read_json / write_json.
"""

import json
import logging
import os
import re
import tempfile
import unicodedata
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONTENT_TYPES: tuple[str, ...] = (
    "actions",
    "backgrounds",
    "classes",
    "conditions",
    "decks",
    "deities",
    "feats",
    "items",
    "languages",
    "monsters",
    "objects",
    "optionalfeatures",
    "races",
    "rules",
    "senses",
    "skills",
    "spells",
    "subclasses",
    "traps",
)

_data_dir: Path | None = None
_resources_dir: Path | None = None


def slugify(title: str) -> str:
    """Convert a title to a filesystem-safe slug.

    "Gareth the Bold" → "gareth-the-bold"
    """
    text = unicodedata.normalize("NFKD", title)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"['\"]", "", text)  # strip apostrophes/quotes before hyphenation
    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = text.strip("-")
    return text or "untitled"


def init_storage(data_dir: Path, resources_dir: Path | None = None) -> None:
    """Point storage at data_dir and create the directory layout."""
    global _data_dir, _resources_dir
    _data_dir = data_dir
    if resources_dir is None:
        # Default: repo_root/resources
        resources_dir = Path(__file__).parent.parent.parent / "resources"
    _resources_dir = resources_dir
    initialize()


def initialize() -> None:
    """Ensure both subdirectories and an empty collection per content type exist.

    Idempotent: existing collections are left untouched.
    """
    content_dir().mkdir(parents=True, exist_ok=True)
    characters_dir().mkdir(parents=True, exist_ok=True)
    for content_type in CONTENT_TYPES:
        path = content_path(content_type)
        if not exists(path):
            write_json(path, {})
    logger.info(f"Storage initialized: {data_dir()}")


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir


def resources_dir() -> Path:
    assert _resources_dir is not None, "Call init_storage() before using storage"
    return _resources_dir


def content_dir() -> Path:
    return data_dir() / "content"


def characters_dir() -> Path:
    return data_dir() / "characters"


def content_path(content_type: str) -> Path:
    if content_type not in CONTENT_TYPES:
        raise ValueError(
            f"Invalid content type: {content_type}. "
            f"Must be one of: {', '.join(CONTENT_TYPES)}"
        )
    return content_dir() / f"{content_type}.json"


def character_path(character_id: str) -> Path:
    return characters_dir() / f"{character_id}.json"


# ------------------------------------------------------------------
# JSON primitives
# ------------------------------------------------------------------


def read_json(path: Path) -> Any:
    """Load a JSON document. Returns None if the file does not exist.

    Decode errors and other I/O failures propagate.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return json.loads(text)


def write_json(path: Path, data: Any, indent: int | str = 2) -> None:
    """Replace path with the serialized data.

    The document is staged to a temp file next to the target and renamed
    into place, so a failed write never leaves a truncated file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        logger.error(f"Failed to write JSON: {path}")
        Path(tmp_name).unlink(missing_ok=True)
        raise


def exists(path: Path) -> bool:
    return path.exists()


def delete_file(path: Path) -> None:
    """Remove a file. Already absent counts as success."""
    path.unlink(missing_ok=True)


def list_character_ids() -> list[str]:
    """Return the ids (filename stems) of every stored character."""
    if not characters_dir().is_dir():
        return []
    return [p.stem for p in sorted(characters_dir().glob("*.json"))]


def list_json_files(directory: Path, recursive: bool = False) -> list[Path]:
    """List *.json files in a directory, sorted. Raises if the directory is missing."""
    if not directory.is_dir():
        raise FileNotFoundError(f"Not a directory: {directory}")
    pattern = "**/*.json" if recursive else "*.json"
    return sorted(p for p in directory.glob(pattern) if p.is_file())
