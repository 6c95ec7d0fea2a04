from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Protocol

from ..errors import LedgerCorruptedError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Whole-document key-value storage used by the ledger."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def keys(self) -> list[str]: ...

    def update(self, key: str, default: Any, mutate: Callable[[Any], Any]) -> Any: ...


class MemoryStore:
    """In-process store; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return copy.deepcopy(default)
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def update(self, key: str, default: Any, mutate: Callable[[Any], Any]) -> Any:
        with self._lock:
            value = mutate(self.get(key, default))
            self.set(key, value)
            return value


class JsonFileStore:
    """
    One pretty-printed JSON document per key, stored as ``<key>.json``.

    A missing document reads as ``default``. A document that is not valid
    JSON raises :class:`LedgerCorruptedError` rather than being overwritten.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return copy.deepcopy(default)
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise LedgerCorruptedError(f"Unreadable JSON in {path}: {exc}") from exc

    def set(self, key: str, value: Any) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(value, fh, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Wrote %s", path)

    def keys(self) -> list[str]:
        if not self.data_dir.exists():
            return []
        return sorted(p.stem for p in self.data_dir.glob("*.json"))

    def update(self, key: str, default: Any, mutate: Callable[[Any], Any]) -> Any:
        """Read-modify-write ``key`` while holding the store lock."""
        with self._lock:
            value = mutate(self.get(key, default))
            self.set(key, value)
            return value
