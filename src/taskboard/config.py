"""Configuration defaults, env vars, and runtime options for taskboard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


VERSION = "1.0.0"

DEFAULT_STORAGE_KEY = "tasks"
STORE_ENV = "TASKBOARD_STORE"
KEY_ENV = "TASKBOARD_KEY"


def default_store_path() -> Path:
    """Return ``~/.taskboard/storage.json``."""
    return Path.home() / ".taskboard" / "storage.json"


@dataclass
class Config:
    """Runtime configuration, filled from CLI flags and the environment."""

    # Storage
    store_path: str = ""
    storage_key: str = ""

    # Persistence
    background_saves: bool = True

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.store_path:
            self.store_path = os.environ.get(STORE_ENV) or str(default_store_path())
        if not self.storage_key:
            self.storage_key = os.environ.get(KEY_ENV) or DEFAULT_STORAGE_KEY
