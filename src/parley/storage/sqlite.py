"""SQLite local storage backend.

Provides persistent key/value storage in a SQLite database file.
Uses aiosqlite for async access.
"""

from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from .base import LocalStorage, StorageError


class SQLiteStorage(LocalStorage):
    """SQLite-backed key/value storage.

    Stores each key as one row; writes replace the row in a single
    transaction.
    """

    def __init__(self, path: str | Path = "~/.parley/storage.db"):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
            await self._create_schema()
        except (OSError, aiosqlite.Error) as e:
            raise StorageError(f"Cannot open storage database {self._db_path}: {e}") from e

    async def _create_schema(self) -> None:
        """Create the key/value table."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageError("SQLite storage is not connected; call connect() first")
        return self._connection

    async def get_item(self, key: str) -> str | None:
        connection = self._require_connection()
        try:
            async with connection.execute(
                "SELECT value FROM local_storage WHERE key = ?",
                (key,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Cannot read key {key!r}: {e}") from e
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        connection = self._require_connection()
        now = datetime.now(timezone.utc).isoformat()
        try:
            await connection.execute("""
                INSERT INTO local_storage (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, value, now))
            await connection.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Cannot write key {key!r}: {e}") from e

    async def remove_item(self, key: str) -> None:
        connection = self._require_connection()
        try:
            await connection.execute("DELETE FROM local_storage WHERE key = ?", (key,))
            await connection.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Cannot remove key {key!r}: {e}") from e

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
