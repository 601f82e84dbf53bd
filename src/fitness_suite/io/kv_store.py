"""
Key-value storage for application state.

Two layers:

- A storage capability (``KeyValueStore``): synchronous get/set of a string
  by key. ``FileKeyValueStore`` keeps one ``<key>.json`` file per key under
  a data directory; ``MemoryKeyValueStore`` keeps a dict.
- ``PersistentStore``: JSON (de)serialization on top of a capability, with
  default-value fallback when a stored value cannot be read or decoded.
"""

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from .serializers import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Get/set a string value by key. Implementations may raise OSError."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """In-process store; contents are lost with the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore:
    """
    Stores each key in its own JSON file under ``data_dir``.

    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace``, so a failed write leaves the previous value (and
    every other key) intact.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the file store.

        Args:
            data_dir: Directory holding one file per key (created on first write)
        """
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class PersistentStore:
    """JSON-encoding adapter over a KeyValueStore."""

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    def load(
        self,
        key: str,
        default: T,
        decode: Callable[[Any], T] | None = None,
    ) -> T:
        """
        Load and decode the value stored under ``key``.

        Never raises: a missing key, unreadable storage, invalid JSON, or a
        payload rejected by ``decode`` all return ``default``. Failures other
        than a missing key are logged.

        Args:
            key: Storage key
            default: Value returned when nothing usable is stored
            decode: Optional converter from the decoded JSON to the model type

        Returns:
            The decoded value or ``default``
        """
        try:
            raw = self.backend.get(key)
        except (OSError, ValueError) as e:
            logger.warning("Could not read storage key %r: %s", key, e)
            return default
        if not raw:
            return default

        try:
            data = json.loads(raw)
            return decode(data) if decode is not None else data
        except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
            logger.warning("Error parsing storage key %r, using default: %s", key, e)
            return default

    def save(self, key: str, value: T, encode: Callable[[T], Any] | None = None) -> None:
        """
        Serialize ``value`` and write it under ``key``.

        Storage errors (e.g. disk full) propagate to the caller.
        """
        data = encode(value) if encode is not None else value
        self.backend.set(key, json.dumps(data, ensure_ascii=False, indent=2))
