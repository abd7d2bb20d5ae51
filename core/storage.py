"""
Local key-value storage for the cart snapshot.

Values are stored as JSON text under a name, like browser local storage.
Writing a value always replaces the whole previous value.

Implementations:
    JSONFileStorage - one ``<name>.json`` file per key in a directory
    MemoryStorage   - dict of JSON strings, for tests and ephemeral runs
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.exceptions import StorageError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class KeyValueStorage:
    """Interface shared by the storage backends."""

    def get_item(self, name: str) -> Optional[Any]:
        """Return the decoded value stored under ``name``, or None."""
        raise NotImplementedError

    def set_item(self, name: str, value: Any) -> None:
        """Replace the value stored under ``name``."""
        raise NotImplementedError

    def remove_item(self, name: str) -> None:
        """Delete ``name``; no-op when absent."""
        raise NotImplementedError


class JSONFileStorage(KeyValueStorage):
    """
    File-backed storage.

    Writes go to a temporary file in the same directory which is then
    renamed over the target, so a crash never leaves a half-written snapshot.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def get_item(self, name: str) -> Optional[Any]:
        path = self._path(name)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(name, "read", str(e)) from e

    def set_item(self, name: str, value: Any) -> None:
        path = self._path(name)
        with self._lock:
            try:
                text = json.dumps(value, ensure_ascii=False)
            except (TypeError, ValueError) as e:
                raise StorageError(name, "write", str(e)) from e

            tmp_path = None
            try:
                fd, tmp_path = tempfile.mkstemp(
                    dir=self.directory, prefix=f".{name}.", suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_path, path)
            except OSError as e:
                if tmp_path and os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise StorageError(name, "write", str(e)) from e

        logger.debug(f"Wrote {path.name}")

    def remove_item(self, name: str) -> None:
        with self._lock:
            try:
                self._path(name).unlink()
            except FileNotFoundError:
                pass


class MemoryStorage(KeyValueStorage):
    """In-memory storage keeping JSON text, so values round-trip like files."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get_item(self, name: str) -> Optional[Any]:
        raw = self._data.get(name)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(name, "read", str(e)) from e

    def set_item(self, name: str, value: Any) -> None:
        try:
            self._data[name] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(name, "write", str(e)) from e

    def remove_item(self, name: str) -> None:
        self._data.pop(name, None)

    def raw(self, name: str) -> Optional[str]:
        """Stored JSON text for ``name`` (for inspection in tests)."""
        return self._data.get(name)

    def put_raw(self, name: str, text: str) -> None:
        """Store JSON text without validating it."""
        self._data[name] = text


def create_storage(backend: str, directory: Optional[str] = None) -> KeyValueStorage:
    """
    Build the storage backend named in configuration.

    Args:
        backend: "file" or "memory"
        directory: Storage directory for the file backend

    Raises:
        ValueError: Unknown backend name
    """
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        if not directory:
            raise ValueError("File storage requires a directory")
        return JSONFileStorage(directory)
    raise ValueError(f"Unknown storage backend: {backend}")
