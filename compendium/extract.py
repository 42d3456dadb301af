"""Build the bundled dataset from a full third-party data tree.

Walks every *.json under input_dir, keeps only curated items for each
registered content type, and writes one `<type>.json` per type into
output_dir in the same third-party shape:

    {"_meta": <_meta of the first contributing file>, "<array key>": [...]}

The output directory is what load_bundled_dataset() reads.
"""

import logging
from pathlib import Path

from compendium import storage
from compendium.parsers import ParserRegistry

logger = logging.getLogger(__name__)


def extract_curated(registry: ParserRegistry, input_dir: Path, output_dir: Path) -> dict[str, int]:
    """Extract curated items per content type. Returns {content_type: count}."""
    files = storage.list_json_files(Path(input_dir), recursive=True)
    logger.info(f"Found {len(files)} JSON files in {input_dir}")

    collected: dict[str, dict] = {}
    files_with_content = 0

    for file_path in files:
        name = file_path.relative_to(input_dir)
        try:
            document = storage.read_json(file_path)
        except (OSError, ValueError) as e:
            logger.error(f"  {name}: {e}")
            continue

        had_content = False
        for content_type in registry.content_types():
            parser = registry.get_parser(content_type)
            if not parser.has_items(document):
                continue
            items = parser.parse(document, curated_only=True)
            if not items:
                continue
            bucket = collected.setdefault(
                content_type, {"meta": document.get("_meta") or {}, "items": []}
            )
            bucket["items"].extend(items)
            logger.info(f"  {name} [{parser.array_key}]: {len(items)} curated -> {content_type}.json")
            had_content = True

        if had_content:
            files_with_content += 1
        else:
            logger.debug(f"  {name}: no curated content")

    counts: dict[str, int] = {}
    for content_type, bucket in collected.items():
        array_key = registry.array_key(content_type)
        storage.write_json(
            Path(output_dir) / f"{content_type}.json",
            {"_meta": bucket["meta"], array_key: bucket["items"]},
            indent="\t",
        )
        counts[content_type] = len(bucket["items"])

    logger.info(
        f"Extraction complete: {sum(counts.values())} curated items from {files_with_content} files"
    )
    return counts
