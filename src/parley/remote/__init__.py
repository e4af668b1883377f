"""Remote history and persistence store module for parley."""

from .base import HistoryStore
from .factory import create_history_store
from .http import HttpHistoryStore
from .in_memory import InMemoryHistoryStore
from .models import ExchangeRecord, HistoryRecord, RemoteStoreError

__all__ = [
    "ExchangeRecord",
    "HistoryRecord",
    "HistoryStore",
    "HttpHistoryStore",
    "InMemoryHistoryStore",
    "RemoteStoreError",
    "create_history_store",
]
