"""Persistent string key-value stores backing the lookup cache.

Entries are never expired or evicted; a written key stays authoritative for
the lifetime of the store.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Synchronous string → string map."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Process-local store. Contents are lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore:
    """Durable store persisted as one JSON object on disk.

    The file is read on first access and rewritten atomically (temp file +
    os.replace) on every set.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: dict[str, str] | None = None
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data
        data: dict[str, str] = {}
        if self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as fh:
                    loaded = json.load(fh)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable cache file %s: %s", self.path, e)
            else:
                if isinstance(loaded, dict):
                    data = {
                        k: v
                        for k, v in loaded.items()
                        if isinstance(k, str) and isinstance(v, str)
                    }
                else:
                    logger.warning("Ignoring cache file %s: not a JSON object", self.path)
        self._data = data
        return data

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._flush(data)

    def _flush(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp, self.path)
        finally:
            if tmp.exists():
                tmp.unlink()
