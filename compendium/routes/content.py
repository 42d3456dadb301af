"""Compendium content endpoints: browse, search, import, load from disk."""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request

from compendium import loader, storage

from .models import ImportBody, LoadDirectoryBody, LoadFileBody

router = APIRouter()


def _registry(request: Request):
    return request.app.state.registry


@router.get("/content")
async def list_content_types(request: Request):
    """List content types and their third-party array keys."""
    registry = _registry(request)
    return [
        {"content_type": t, "array_key": registry.array_key(t)}
        for t in registry.content_types()
    ]


@router.post("/content/load-file")
async def load_file(request: Request, body: LoadFileBody):
    """Import one third-party file into a content type."""
    source = body.source or storage.get_config()["default_source"]
    try:
        count = loader.load_file(_registry(request), Path(body.path), body.content_type, source)
    except FileNotFoundError as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"imported": count}


@router.post("/content/load-directory")
async def load_directory(request: Request, body: LoadDirectoryBody):
    """Import every JSON file in a directory, fanning out across content types."""
    source = body.source or storage.get_config()["default_source"]
    try:
        count = loader.load_directory(_registry(request), Path(body.path), source)
    except FileNotFoundError as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"imported": count}


@router.get("/content/{content_type}")
async def get_all(content_type: str):
    """Get a content type's whole collection, keyed by name::SOURCE."""
    try:
        return storage.get_all(content_type)
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.get("/content/{content_type}/search")
async def search(content_type: str, q: str = ""):
    """Substring search over name and description."""
    try:
        return storage.search(content_type, q)
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.get("/content/{content_type}/entry")
async def get_entry(content_type: str, name: str, source: str):
    """Get a single entry by name and source."""
    try:
        item = storage.get_item(content_type, name, source)
    except ValueError as e:
        raise HTTPException(400, str(e))
    if item is None:
        raise HTTPException(404, "Entry not found")
    return item


@router.delete("/content/{content_type}/entry")
async def delete_entry(content_type: str, name: str, source: str):
    """Delete an entry. Deleting a missing entry is not an error."""
    try:
        deleted = storage.delete_item(content_type, name, source)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"ok": True, "deleted": deleted}


@router.post("/content/{content_type}/import")
async def import_items(content_type: str, body: ImportBody):
    """Merge items into a content type (additive, never overwrites filled fields)."""
    try:
        count = storage.import_items(content_type, body.items, body.source)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"imported": count}
