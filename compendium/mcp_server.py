"""FastMCP server exposing read-only compendium lookups as MCP tools.

Tools:
  - list_content_types(): content types with array keys
  - search_compendium(content_type, query): substring search, capped
  - get_compendium_entry(content_type, name, source): single entry or null

Storage must be initialized before the tools are called; __main__ does
that from DATA_DIR.

Usage:
    uv run python -m compendium.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from compendium import storage
from compendium.parsers import ParserRegistry, discover

mcp = FastMCP("aplus-compendium")

MAX_RESULTS = 50

_registry: ParserRegistry | None = None


def set_registry(registry: ParserRegistry) -> None:
    """Replace the active registry (used in tests)."""
    global _registry
    _registry = registry


def get_registry() -> ParserRegistry:
    global _registry
    if _registry is None:
        _registry = discover()
    return _registry


@mcp.tool()
def list_content_types() -> dict:
    """List the compendium's content types and their source-file array keys."""
    registry = get_registry()
    return {t: registry.array_key(t) for t in registry.content_types()}


@mcp.tool()
def search_compendium(content_type: str, query: str) -> dict:
    """Search a content type by name or description. Returns {"total", "results"}."""
    results = storage.search(content_type, query)
    keys = sorted(results)[:MAX_RESULTS]
    return {"total": len(results), "results": {k: results[k] for k in keys}}


@mcp.tool()
def get_compendium_entry(content_type: str, name: str, source: str) -> dict:
    """Fetch one compendium entry by name and source. Returns {"entry": ... or null}."""
    return {"entry": storage.get_item(content_type, name, source)}


if __name__ == "__main__":
    import os
    from pathlib import Path

    from dotenv import load_dotenv

    load_dotenv(Path(__file__).parent.parent / ".env")
    default_dir = Path(__file__).parent.parent / "data"
    storage.init_storage(Path(os.getenv("DATA_DIR", str(default_dir))))
    mcp.run()
