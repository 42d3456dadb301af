"""File-based JSON storage for the compendium and character sheets.

Data layout:
  data/
    content/             One collection per content type
      <type>.json        {"<name>::<SOURCE>": {record}, ...}, initialized to {}
    characters/          One document per character
      <id>.json          Character sheet, always carrying "id" == <id>
    settings.json        App settings (import sources, first-run behaviour)
    .bundled-loaded.json Marker written once the bundled dataset is imported
  resources/
    srd/<type>.json      Bundled curated dataset in third-party format

Compound keys: "<name>::<SOURCE>", source upper-cased. Records keep the
source spelling they were imported with.

Import merging: additive only. Existing non-blank fields are never
overwritten; missing or blank ones are backfilled. New records are stored
verbatim with "source" resolved to the item's own or the fallback.

Writes replace the whole document via temp file + rename. Read-modify-write
on a collection is serialized per content type within the process.
"""

# Re-export all public symbols so `from compendium import storage` keeps working.

from .core import (  # noqa: F401
    CONTENT_TYPES,
    character_path,
    characters_dir,
    content_dir,
    content_path,
    data_dir,
    delete_file,
    exists,
    init_storage,
    initialize,
    list_character_ids,
    list_json_files,
    read_json,
    resources_dir,
    slugify,
    write_json,
)

from .content import (  # noqa: F401
    delete_item,
    get_all,
    get_item,
    import_items,
    make_key,
    parse_key,
    search,
)

from .characters import (  # noqa: F401
    character_exists,
    delete_character,
    duplicate_character,
    get_character,
    list_characters,
    save_character,
    seed_if_empty,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)
