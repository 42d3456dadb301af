import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from compendium import loader, parsers, storage
from compendium.routes import router

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None, resources_dir: Path | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    resources = resources_dir or (Path(os.environ["RESOURCES_DIR"]) if os.getenv("RESOURCES_DIR") else None)
    storage.init_storage(resolved, resources_dir=resources)

    registry = parsers.discover()
    config = storage.get_config()
    if config["auto_load_bundled"]:
        count = loader.ensure_bundled_dataset(registry, source=config["bundled_source"])
        if count is not None:
            logger.info(f"First run: loaded {count} bundled items")
    if config["seed_characters"]:
        storage.seed_if_empty()

    app = FastAPI(title="A+ Compendium")
    app.state.registry = registry
    app.include_router(router, prefix="/api")
    return app
