"""Parsers for third-party (5etools-format) data files.

A source document is a JSON object holding zero or more arrays, each under
a fixed per-type key:

    {"_meta": {...}, "spell": [{...}, ...], "monster": [{...}, ...]}

Every content type is parsed the same way; they differ only in the type
name, the array key, an optional per-item transform, and an optional
expansion that turns one source item into several (classes carry their
subclasses nested, and each is stored on its own). PARSER_TABLE lists
them all, and discover() turns it into an immutable ParserRegistry that the
app builds once and hands to the loader and routes.

Curated (SRD) items are marked with `srd: true` or, in newer data,
`srd52: true`. Either flag qualifies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from compendium.storage import CONTENT_TYPES

logger = logging.getLogger(__name__)

CURATED_FLAGS = ("srd", "srd52")

Item = dict[str, Any]


def _identity(item: Item) -> Item:
    return item


def is_curated(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    return any(item.get(flag) is True for flag in CURATED_FLAGS)


def split_class_subclasses(item: Any, curated_only: bool = False) -> list[Any]:
    """Split a class into itself without `subclasses`, then each subclass.

    Subclasses get `className`/`classSource` pointing back at the class. With
    curated_only, subclasses are filtered by the curated flags as well.
    """
    if not isinstance(item, dict):
        return [item]
    base = {k: v for k, v in item.items() if k != "subclasses"}
    result = [base]
    subclasses = item.get("subclasses")
    if not isinstance(subclasses, list):
        return result
    for subclass in subclasses:
        if not isinstance(subclass, dict):
            continue
        if curated_only and not is_curated(subclass):
            continue
        result.append({**subclass, "className": item.get("name"), "classSource": item.get("source")})
    return result


@dataclass(frozen=True)
class ContentParser:
    content_type: str
    array_key: str
    transform: Callable[[Item], Item] = field(default=_identity, compare=False)
    expand: Callable[[Any, bool], list[Any]] | None = field(default=None, compare=False)

    def parse(self, document: Any, curated_only: bool = False) -> list[Item]:
        """Extract this type's items from a source document.

        Missing or non-list arrays yield []. Input order is preserved; items
        produced by `expand` follow the item they came from.
        """
        if not isinstance(document, dict):
            return []
        items = document.get(self.array_key)
        if not isinstance(items, list):
            return []
        if curated_only:
            items = [item for item in items if is_curated(item)]
        if self.expand is None:
            return [self.transform(item) for item in items]
        return [self.transform(part) for item in items for part in self.expand(item, curated_only)]

    def has_items(self, document: Any) -> bool:
        """True if the document holds a non-empty array for this type."""
        if not isinstance(document, dict):
            return False
        items = document.get(self.array_key)
        return isinstance(items, list) and len(items) > 0


PARSER_TABLE: tuple[ContentParser, ...] = (
    ContentParser("actions", "action"),
    ContentParser("backgrounds", "background"),
    ContentParser("classes", "class", expand=split_class_subclasses),
    ContentParser("conditions", "condition"),
    ContentParser("decks", "deck"),
    ContentParser("deities", "deity"),
    ContentParser("feats", "feat"),
    ContentParser("items", "item"),
    ContentParser("languages", "language"),
    ContentParser("monsters", "monster"),
    ContentParser("objects", "object"),
    ContentParser("optionalfeatures", "optionalfeature"),
    ContentParser("races", "race"),
    ContentParser("rules", "rule"),
    ContentParser("senses", "sense"),
    ContentParser("skills", "skill"),
    ContentParser("spells", "spell"),
    ContentParser("subclasses", "subclass"),
    ContentParser("traps", "trap"),
)


class ParserRegistry:
    """Read-only lookup of content type → parser."""

    def __init__(self, parsers: Iterable[ContentParser]):
        by_type: dict[str, ContentParser] = {}
        for parser in parsers:
            if parser.content_type not in CONTENT_TYPES:
                raise ValueError(f"Parser for unknown content type: {parser.content_type}")
            if parser.content_type in by_type:
                raise ValueError(f"Duplicate parser for content type: {parser.content_type}")
            by_type[parser.content_type] = parser
        self._parsers: Mapping[str, ContentParser] = MappingProxyType(by_type)

    def get_parser(self, content_type: str) -> ContentParser | None:
        return self._parsers.get(content_type)

    def has_parser(self, content_type: str) -> bool:
        return content_type in self._parsers

    def content_types(self) -> list[str]:
        return list(self._parsers)

    def array_key(self, content_type: str) -> str | None:
        parser = self._parsers.get(content_type)
        return parser.array_key if parser else None

    def __len__(self) -> int:
        return len(self._parsers)


def discover(
    content_types: Iterable[str] | None = None,
    table: Iterable[ContentParser] = PARSER_TABLE,
) -> ParserRegistry:
    """Build a registry from the parser table, optionally limited to some types."""
    table = tuple(table)
    wanted = set(content_types) if content_types is not None else None
    if wanted is not None:
        unknown = wanted - {p.content_type for p in table}
        if unknown:
            raise ValueError(f"No parser for content types: {', '.join(sorted(unknown))}")
    parsers = [p for p in table if wanted is None or p.content_type in wanted]
    registry = ParserRegistry(parsers)
    for parser in parsers:
        logger.info(f"Registered parser: {parser.content_type} ({parser.array_key})")
    logger.info(f"Parser discovery complete: {len(registry)} parsers registered")
    return registry
