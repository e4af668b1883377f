"""Abstract base class for durable local storage.

This module defines the interface the session archive persists through.
It mirrors a browser ``localStorage``: string values under string keys,
every write replaces the whole value. The abstraction hides:
- Storage format (JSON document, SQLite table, plain dict)
- Persistence location
- Connection management
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when a storage backend cannot read or write a value."""


class LocalStorage(ABC):
    """Abstract key/value storage backend."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the backend (create files or tables as needed)."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent.

        Raises:
            StorageError: If the backend cannot be read
        """

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the backend cannot be written
        """

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete ``key`` if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "LocalStorage":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
