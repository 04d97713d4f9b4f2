"""
Local key-value storage for content, used whenever the remote backend is not.

Each content type owns one fixed key holding a JSON array (collections) or a
JSON object (singletons). Writes replace the whole key.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Protocol

from portfolio.registry import ALL_CONTENT_TYPES, ContentType

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class LocalStorageUnavailableError(RuntimeError):
    """The local storage backend cannot be used at all."""


class LocalStorage(Protocol):
    """String key-value storage, shaped after the browser's Web Storage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> bool:
        ...

    def keys(self) -> list[str]:
        ...


@dataclass
class InMemoryLocalStorage:
    """Test double for local storage. Set `available=False` to simulate a disabled store."""

    items: dict = field(default_factory=dict)
    available: bool = True

    def _check(self) -> None:
        if not self.available:
            raise LocalStorageUnavailableError("In-memory local storage is disabled")

    def get_item(self, key: str) -> Optional[str]:
        self._check()
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check()
        self.items[key] = value

    def remove_item(self, key: str) -> bool:
        self._check()
        return self.items.pop(key, None) is not None

    def keys(self) -> list[str]:
        self._check()
        return list(self.items)


class FileLocalStorage:
    """One `<key>.json` file per key inside `directory`; writes go through a temp file and `os.replace`."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _VALID_KEY.match(key):
            raise ValueError(f"Invalid local storage key: {key!r}")
        return self.directory / f"{key}.json"

    def _unavailable(self, action: str, exc: OSError) -> LocalStorageUnavailableError:
        return LocalStorageUnavailableError(
            f"Local storage at {self.directory} cannot {action}: {exc}"
        )

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise self._unavailable("be read", exc) from exc

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.directory, prefix=f".{key}.", suffix=".tmp"
            )
        except OSError as exc:
            raise self._unavailable("be written", exc) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(temp_path, path)
        except OSError as exc:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise self._unavailable("be written", exc) from exc

    def remove_item(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise self._unavailable("be modified", exc) from exc
        return True

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        try:
            return sorted(
                path.stem
                for path in self.directory.iterdir()
                if path.suffix == ".json" and not path.name.startswith(".")
            )
        except OSError as exc:
            raise self._unavailable("be listed", exc) from exc


class LocalStore:
    """Reads and writes content records (camelCase dicts) under their fixed keys."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _read(self, key: str):
        try:
            raw = self.storage.get_item(key)
        except UnicodeDecodeError as exc:
            logger.warning("Ignoring undecodable data under local key %r: %s", key, exc)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring invalid JSON under local key %r: %s", key, exc)
            return None

    def _write(self, key: str, value) -> None:
        self.storage.set_item(key, json.dumps(value, ensure_ascii=False, default=str))

    def read_collection(self, content_type: ContentType) -> list[dict]:
        data = self._read(content_type.local_key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(
                "Local key %r does not hold a list; treating it as empty",
                content_type.local_key,
            )
            return []
        return [item for item in data if isinstance(item, dict)]

    def write_collection(self, content_type: ContentType, items: list[dict]) -> None:
        self._write(content_type.local_key, list(items))

    def read_singleton(self, content_type: ContentType) -> Optional[dict]:
        data = self._read(content_type.local_key)
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning(
                "Local key %r does not hold an object; treating it as absent",
                content_type.local_key,
            )
            return None
        return data

    def write_singleton(self, content_type: ContentType, data: dict) -> None:
        self._write(content_type.local_key, dict(data))

    def clear(
        self, content_types: Iterable[ContentType] = ALL_CONTENT_TYPES
    ) -> list[str]:
        """Remove the local keys of `content_types`; returns the keys that existed."""
        removed = []
        for content_type in content_types:
            if self.storage.remove_item(content_type.local_key):
                removed.append(content_type.local_key)
        return removed
