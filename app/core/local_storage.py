# app/core/local_storage.py
"""
Small key/value storage used to persist buyer carts.

The interface mirrors browser localStorage: string keys, string values,
synchronous reads and overwrite-on-write.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class KeyValueStorage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete `key`. No-op if missing."""


class MemoryStorage(KeyValueStorage):
    """Process-local storage; contents are lost on restart."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(KeyValueStorage):
    """
    One directory per namespace, one file per key:

        <root>/<key>.json

    The directory is created lazily on first write.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
