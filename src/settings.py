"""Static configuration for nudge.

All user-editable settings (messaging catalog, storage, logging) live in a
single JSON file for quick edits without touching Python. The file path
comes from NUDGE_CONFIG (a .env file is honored) or defaults to
config.json at the project root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from adapters.json_feature import load_config_file
from nudge.errors import ConfigError

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")

DEFAULT_DB_NAME = "nudge.db"


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one run of the app."""

    config_path: str
    db_path: str
    logging: dict = field(default_factory=dict)


def resolve_config_path(explicit: Optional[str] = None) -> str:
    """Pick the config path: explicit argument, then NUDGE_CONFIG, then default."""

    if explicit:
        return os.path.abspath(explicit)
    load_dotenv()
    return os.path.abspath(os.getenv("NUDGE_CONFIG", DEFAULT_CONFIG_PATH))


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load and validate the non-catalog sections of the config file."""

    path = resolve_config_path(config_path)
    config = load_config_file(path)

    # Relative database paths are anchored next to the config file so the
    # catalog and its metadata travel together.
    storage = config.get("storage", {})
    if not isinstance(storage, dict):
        raise ConfigError(f"'storage' must be an object in {path}")
    db_path = storage.get("db_path", DEFAULT_DB_NAME)
    if not os.path.isabs(db_path):
        db_path = os.path.join(os.path.dirname(path), db_path)

    logging_config = config.get("logging", {})
    if not isinstance(logging_config, dict):
        raise ConfigError(f"'logging' must be an object in {path}")

    return Settings(config_path=path, db_path=db_path, logging=logging_config)
