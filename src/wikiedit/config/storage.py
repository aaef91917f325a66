"""Location of the on-disk HTTP cache."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "wikiedit"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    cache_dir: Path

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        cache_dir = self.cache_dir.expanduser().resolve()
        if ensure:
            cache_dir.mkdir(parents=True, exist_ok=True)
        return cache_dir / HTTP_CACHE_FILENAME


def _default_cache_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        return (Path(base) if base else Path.home() / "AppData" / "Local") / APP_DIR_NAME / "Cache"
    base = os.getenv("XDG_CACHE_HOME")
    return (Path(base) if base else Path.home() / ".cache") / APP_DIR_NAME


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("WIKIEDIT_CACHE_DIR")
    return StorageConfig(cache_dir=Path(env_dir) if env_dir else _default_cache_dir())
