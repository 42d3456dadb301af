"""Pydantic request/response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ImportBody(BaseModel):
    items: list[dict[str, Any]]
    source: str


class LoadFileBody(BaseModel):
    path: str
    content_type: str
    source: str | None = None


class LoadDirectoryBody(BaseModel):
    path: str
    source: str | None = None


class CreateCharacter(BaseModel):
    name: str


class DuplicateCharacter(BaseModel):
    new_id: str


class UpdateSettings(BaseModel):
    default_source: str | None = Field(default=None, min_length=1)
    bundled_source: str | None = Field(default=None, min_length=1)
    auto_load_bundled: bool | None = None
    seed_characters: bool | None = None
