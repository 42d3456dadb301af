"""Loading third-party data files into the compendium.

Three entry points:
  load_file             one file, one content type, caller-chosen source
  load_directory        every *.json in a directory, every content type it holds
  load_bundled_dataset  resources/srd/<type>.json for each registered type

External files are imported as-is (no curated filter). Every entry point
rejects a blank source up front. The orchestrators that walk many files or
types log and skip per-file failures; load_file raises.

ensure_bundled_dataset() gates the bundled load behind a marker document so
it runs once per data directory, not on every start.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from compendium import storage
from compendium.parsers import ParserRegistry

logger = logging.getLogger(__name__)

BUNDLED_MARKER = ".bundled-loaded.json"


def _marker_path() -> Path:
    return storage.data_dir() / BUNDLED_MARKER


def bundled_dir() -> Path:
    return storage.resources_dir() / "srd"


def _read_document(path: Path) -> Any:
    document = storage.read_json(path)
    if document is None:
        raise FileNotFoundError(f"No such file: {path}")
    return document


def load_file(
    registry: ParserRegistry, path: Path, content_type: str, source: str = "CUSTOM"
) -> int:
    """Import one file's items of content_type. Returns the number imported."""
    parser = registry.get_parser(content_type)
    if parser is None:
        raise ValueError(f"No parser found for content type: {content_type}")
    if not source:
        raise ValueError("source is required")

    document = _read_document(Path(path))
    items = parser.parse(document, curated_only=False)
    if not items:
        return 0
    return storage.import_items(content_type, items, source)


def load_directory(registry: ParserRegistry, path: Path, source: str = "CUSTOM") -> int:
    """Import every content type found in each JSON file of a directory.

    A file holding both `spell` and `monster` arrays feeds both collections.
    Returns the total number of items imported.
    """
    if not source:
        raise ValueError("source is required")
    total = 0
    for file_path in storage.list_json_files(Path(path)):
        try:
            document = _read_document(file_path)
            for content_type in registry.content_types():
                parser = registry.get_parser(content_type)
                if not parser.has_items(document):
                    continue
                items = parser.parse(document, curated_only=False)
                if items:
                    count = storage.import_items(content_type, items, source)
                    logger.info(f"  {file_path.name} [{parser.array_key}]: {count} {content_type}")
                    total += count
        except (OSError, ValueError) as e:
            logger.error(f"  Failed to load {file_path.name}: {e}")
    logger.info(f"Directory load complete: {total} items from {path}")
    return total


def load_bundled_dataset(
    registry: ParserRegistry, resources_dir: Path | None = None, source: str = "SRD"
) -> int:
    """Import the bundled curated dataset, one `<type>.json` per content type.

    Types with no bundled file are skipped; a broken file is reported and
    the remaining types still load.
    """
    if not source:
        raise ValueError("source is required")
    directory = Path(resources_dir) if resources_dir else bundled_dir()
    logger.info(f"Loading bundled dataset from: {directory}")

    total = 0
    for content_type in registry.content_types():
        file_path = directory / f"{content_type}.json"
        try:
            count = load_file(registry, file_path, content_type, source)
        except FileNotFoundError:
            logger.debug(f"  No bundled data for {content_type}")
            continue
        except (OSError, ValueError) as e:
            logger.error(f"  Failed to load {content_type}: {e}")
            continue
        if count > 0:
            logger.info(f"  Loaded {count} {content_type}")
            total += count

    logger.info(f"Bundled dataset loading complete: {total} total items")
    return total


def bundled_dataset_loaded() -> bool:
    return storage.exists(_marker_path())


def ensure_bundled_dataset(registry: ParserRegistry, source: str = "SRD") -> int | None:
    """Load the bundled dataset on first run. Returns the count, or None if already done."""
    if not source:
        raise ValueError("source is required")
    if bundled_dataset_loaded():
        return None
    count = load_bundled_dataset(registry, source=source)
    storage.write_json(_marker_path(), {
        "loaded_at": datetime.now(timezone.utc).isoformat(),
        "items": count,
    })
    return count
