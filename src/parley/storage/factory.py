"""Factory for creating local storage backends."""

from typing import Any

from .base import LocalStorage


def create_local_storage(
    backend: str = "json",
    **kwargs: Any
) -> LocalStorage:
    """Create a local storage backend.

    Args:
        backend: Backend type ("memory", "json" or "sqlite")
        **kwargs: Backend-specific configuration
            For json / sqlite:
                - path: str | Path

    Returns:
        LocalStorage instance (not yet connected)

    Raises:
        ValueError: If backend type is not supported
    """
    backend_lower = backend.lower()

    if backend_lower == "memory":
        from .in_memory import InMemoryStorage
        kwargs.pop("path", None)
        return InMemoryStorage(**kwargs)

    elif backend_lower == "json":
        from .json_file import JSONFileStorage
        return JSONFileStorage(**kwargs)

    elif backend_lower == "sqlite":
        from .sqlite import SQLiteStorage
        return SQLiteStorage(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: memory, json, sqlite"
    )
