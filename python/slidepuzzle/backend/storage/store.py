"""Key-value persistence for the roster and leaderboard.

Values are JSON strings, one independent record per key. Every write
replaces the whole record; saves are best effort.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from slidepuzzle.backend.errors import CorruptPersistedState

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Keeps each key in ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text()
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(value + "\n")
        except OSError as exc:
            logger.warning("Could not save %s: %s", path, exc)


# -- JSON helpers -------------------------------------------------------------


def read_json(store: KeyValueStore, key: str) -> Any:
    """Decode the record under *key*; ``None`` when it was never saved."""
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptPersistedState(key, str(exc)) from exc


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value, indent=2))
