"""Key/value storage backends for drafts.

``DraftStorage`` is the same contract the browser's ``localStorage``
offers: string keys, string values, get/set/remove.  Two implementations
ship with the SDK:

  - InMemoryStorage: a dict; used in tests and when no directory is set
  - FileStorage: one UTF-8 file per key under a directory

Backends may raise on any operation (disk full, permission denied);
:class:`~questionnaire_forms.drafts.DraftStore` absorbs those errors.
"""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path


class DraftStorage(ABC):
    """Interface for string key/value persistence."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""
        ...


class InMemoryStorage(DraftStorage):
    """Process-local dict storage."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorage(DraftStorage):
    """Stores each key as ``<directory>/<key>.json``.

    Writes go through a temporary file and ``os.replace`` so a crash never
    leaves a half-written draft behind.  Concurrent writers are not
    coordinated; the last write wins.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self._dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
