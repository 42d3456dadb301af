"""FastAPI API endpoints under /api.

Endpoint groups: health + settings, compendium content (browse, search,
import, load from disk), characters. Content entries are addressed by
content type plus name and source query parameters, since names may contain
slashes.
"""

from fastapi import APIRouter

from .characters import router as characters_router
from .content import router as content_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(content_router)
router.include_router(characters_router)
