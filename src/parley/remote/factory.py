"""Factory for creating remote history stores."""

from typing import Any

from .base import HistoryStore


def create_history_store(backend: str = "http", **config: Any) -> HistoryStore:
    """Create a history store.

    Args:
        backend: Store type ("http" or "memory")
        **config: Store-specific configuration
            For http:
                - base_url: str (default: 'http://localhost:5000/api')
                - session_cookie: str | None
                - cookie_name: str (default: 'session')

    Returns:
        HistoryStore instance

    Raises:
        ValueError: If store type is not supported
    """
    backend_lower = backend.lower()

    if backend_lower == "http":
        from .http import HttpHistoryStore
        return HttpHistoryStore(**config)

    elif backend_lower == "memory":
        from .in_memory import InMemoryHistoryStore
        return InMemoryHistoryStore(**config)

    raise ValueError(
        f"Unsupported history store: {backend}. "
        f"Supported stores: http, memory"
    )
