"""Character sheet CRUD endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException

from compendium import storage
from compendium.characters import new_character

from .models import CreateCharacter, DuplicateCharacter

router = APIRouter()


@router.get("/characters")
async def list_characters():
    """List all stored characters."""
    return storage.list_characters()


@router.post("/characters", status_code=201)
async def create_character(body: CreateCharacter):
    """Create a blank character sheet."""
    character = new_character(body.name)
    return storage.save_character(character["id"], character)


@router.get("/characters/{character_id}")
async def get_character(character_id: str):
    """Get a single character by id."""
    character = storage.get_character(character_id)
    if character is None:
        raise HTTPException(404, "Character not found")
    return character


@router.get("/characters/{character_id}/exists")
async def character_exists(character_id: str):
    return {"exists": storage.character_exists(character_id)}


@router.put("/characters/{character_id}")
async def save_character(character_id: str, body: dict[str, Any]):
    """Create or replace a character."""
    return storage.save_character(character_id, body)


@router.delete("/characters/{character_id}")
async def delete_character(character_id: str):
    """Delete a character."""
    try:
        storage.delete_character(character_id)
    except FileNotFoundError:
        raise HTTPException(404, "Character not found")
    return {"ok": True}


@router.post("/characters/{character_id}/duplicate", status_code=201)
async def duplicate_character(character_id: str, body: DuplicateCharacter):
    """Copy a character under a new id."""
    if storage.character_exists(body.new_id):
        raise HTTPException(409, f"Character '{body.new_id}' already exists")
    try:
        return storage.duplicate_character(character_id, body.new_id)
    except FileNotFoundError:
        raise HTTPException(404, "Character not found")
