"""Durable local storage module for parley.

Provides a localStorage-like key/value store used to persist the
session archive across runs.
"""

from .base import LocalStorage, StorageError
from .factory import create_local_storage
from .in_memory import InMemoryStorage
from .json_file import JSONFileStorage
from .sqlite import SQLiteStorage

__all__ = [
    "InMemoryStorage",
    "JSONFileStorage",
    "LocalStorage",
    "SQLiteStorage",
    "StorageError",
    "create_local_storage",
]
