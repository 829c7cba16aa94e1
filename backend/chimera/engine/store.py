"""
State store - Key-value persistence for game state and narrative text

The engine only ever calls `get` and `set` with string keys and string
values. Two backends are provided:

- MemoryStore: process-local dict (development and tests)
- FileStore: one JSON document per key under a directory
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from chimera import config
from chimera.errors import StoreError

logger = logging.getLogger(__name__)


@runtime_checkable
class StateStore(Protocol):
    """Protocol for an opaque string key-value store.

    Implementations raise StoreError when the backend cannot be read
    or written. A missing key is not an error: `get` returns None.
    """

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-memory store, lost when the process exits"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)


class FileStore:
    """Stores each key as a JSON file in a directory.

    File names are derived from a hash of the key so arbitrary keys are
    safe on disk. Writes go to a temporary file first and are renamed
    into place, so readers never see a partial value.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]
        return self.root / f"{digest}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read store key '{key}' from {path}: {e}")
            raise StoreError(f"Failed to read '{key}' from the state store") from e

        value = data.get("value") if isinstance(data, dict) else None
        if value is not None and not isinstance(value, str):
            raise StoreError(f"Stored value for '{key}' is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        document = {
            "key": key,
            "value": value,
            "updated_at": datetime.now().isoformat(),
        }
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write store key '{key}' to {path}: {e}")
            raise StoreError(f"Failed to write '{key}' to the state store") from e


def game_state_key(game_id: str, prefix: str | None = None) -> str:
    """Store key holding the GameState document of a game"""
    return f"{prefix or config.get_key_prefix()}:{game_id}:game_state"


def narrative_key(game_id: str, prefix: str | None = None) -> str:
    """Store key holding the last narrative text of a game"""
    return f"{prefix or config.get_key_prefix()}:{game_id}:last_narrative"


def create_store(backend: str | None = None) -> StateStore:
    """Create the store selected by configuration."""
    backend = backend or config.get_store_backend()
    if backend == "memory":
        logger.info("Using in-memory state store")
        return MemoryStore()
    if backend == "file":
        state_dir = config.get_state_dir()
        logger.info(f"Using file state store at {state_dir}")
        return FileStore(state_dir)
    raise ValueError(f"Unknown state store backend: {backend!r}")
