"""JSON file local storage backend.

Keeps every key in a single JSON document on disk. Each write rewrites
the whole document through a temporary file and an atomic rename.
"""

import asyncio
import json
import os
from pathlib import Path

from .base import LocalStorage, StorageError


class JSONFileStorage(LocalStorage):
    """File-backed storage holding a flat ``{key: value}`` JSON object."""

    def __init__(self, path: str | Path = "~/.parley/storage.json"):
        self._path = Path(path).expanduser()
        self._items: dict[str, str] | None = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Load the document from disk, creating the parent directory."""
        self._items = await asyncio.to_thread(self._read)

    async def disconnect(self) -> None:
        """Forget the loaded document; writes are already flushed."""
        self._items = None

    def _require_items(self) -> dict[str, str]:
        if self._items is None:
            raise StorageError("JSON storage is not connected; call connect() first")
        return self._items

    def _read(self) -> dict[str, str]:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if not self._path.exists():
                return {}
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read storage file {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Cannot write storage file {self._path}: {e}") from e

    async def get_item(self, key: str) -> str | None:
        return self._require_items().get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            items = {**self._require_items(), key: value}
            await asyncio.to_thread(self._write, items)
            self._items = items

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            current = self._require_items()
            if key not in current:
                return
            items = {k: v for k, v in current.items() if k != key}
            await asyncio.to_thread(self._write, items)
            self._items = items

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path
