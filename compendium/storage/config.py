"""App settings (import sources, first-run behaviour)."""

from pathlib import Path
from typing import Any

from .core import data_dir, read_json, write_json

_CONFIG_DEFAULTS: dict[str, Any] = {
    "default_source": "CUSTOM",
    "bundled_source": "SRD",
    "auto_load_bundled": True,
    "seed_characters": True,
}


def _config_path() -> Path:
    return data_dir() / "settings.json"


def get_config() -> dict[str, Any]:
    """Read settings, returning defaults merged with stored values."""
    config = dict(_CONFIG_DEFAULTS)
    stored = read_json(_config_path())
    if isinstance(stored, dict):
        for key in _CONFIG_DEFAULTS:
            if key in stored:
                config[key] = stored[key]
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge known fields into settings and persist. Returns full settings."""
    config = get_config()
    for key, value in fields.items():
        if key in _CONFIG_DEFAULTS:
            config[key] = value
    write_json(_config_path(), config)
    return config
