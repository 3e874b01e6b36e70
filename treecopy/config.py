# treecopy/config.py
import json
from pathlib import Path

from treecopy.logger import setup_app_logger
from treecopy.tree_constants import DEFAULT_IGNORE_GLOB, DEFAULT_DEBOUNCE_MS, DEFAULT_FENCE

logger = setup_app_logger("CONFIG")

CONFIG_FILE_NAME = "app_config.json"

DEFAULTS = {
    "ignore_glob": DEFAULT_IGNORE_GLOB,
    "debounce_ms": DEFAULT_DEBOUNCE_MS,
    "fence": DEFAULT_FENCE,
    "include_hidden": False,
    "respect_gitignore": False,
    "include_structure": False,
    "count_tokens": False,
    "output_file": "selected_files.txt",
    "last_project_dir": "",
}


def load(path=None):
    """Reads the JSON config over DEFAULTS. Never raises."""
    data = DEFAULTS.copy()
    config_path = Path(path) if path else Path(CONFIG_FILE_NAME)
    if not config_path.is_file():
        return data
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to load config from %s", config_path)
        return data
    if not isinstance(loaded, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_path)
        return data
    data.update(loaded)
    return data


def save(data, path=None):
    config_path = Path(path) if path else Path(CONFIG_FILE_NAME)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)
