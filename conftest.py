import shutil
from pathlib import Path

import pytest

from compendium import storage

TEST_DATA_DIR = Path("data-tests")
RESOURCES_DIR = Path(__file__).parent / "resources"


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-init data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    storage.init_storage(TEST_DATA_DIR, resources_dir=RESOURCES_DIR)
    yield
    # leave data-tests around after tests for inspection; CI can ignore it
