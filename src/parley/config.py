"""Client configuration.

Centralizes every tunable of the chat client. Values come from the
environment (and a ``.env`` file, if present); nothing secret is
hard-coded.

Environment variables:
    PARLEY_MAX_MESSAGES: Message cap per conversation (default: 20)
    GEMINI_API_KEY: Gemini API key (required to chat)
    GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    GEMINI_BASE_URL: Override of the Gemini endpoint
    PARLEY_STORE_URL: Chat backend base URL (default: http://localhost:5000/api)
    PARLEY_SESSION_COOKIE: Session credential for the chat backend
    PARLEY_STORAGE: Local storage backend: memory, json, sqlite (default: json)
    PARLEY_STORAGE_PATH: Local storage file (default: ~/.parley/storage.json)
    PARLEY_LOG_LEVEL: Log level (default: WARNING)
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_STORAGE_PATHS = {
    "json": "~/.parley/storage.json",
    "sqlite": "~/.parley/storage.db",
}


class ClientConfig(BaseModel):
    """Validated configuration for ``ChatClient``."""

    max_messages_per_session: int = Field(default=20, ge=1)
    api_key: str | None = Field(default=None, description="Generation service credential")
    model: str = Field(default="gemini-2.5-flash")
    generation_base_url: str | None = None
    store_backend: str = Field(default="http", description="History store: http or memory")
    store_base_url: str = Field(default="http://localhost:5000/api")
    session_cookie: str | None = None
    storage_backend: str = Field(default="json")
    storage_path: Path | None = None
    log_level: str = Field(default="WARNING")

    @field_validator("storage_backend", "store_backend")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _uppercase(cls, value: str) -> str:
        return value.upper()

    @property
    def resolved_storage_path(self) -> Path | None:
        """Storage path, falling back to the backend's default location."""
        if self.storage_path is not None:
            return self.storage_path.expanduser()
        default = DEFAULT_STORAGE_PATHS.get(self.storage_backend)
        return Path(default).expanduser() if default else None

    @classmethod
    def from_env(cls, load_env_file: bool = True, **overrides) -> "ClientConfig":
        """Build a configuration from environment variables.

        Args:
            load_env_file: Read a ``.env`` file found from the working
                directory upwards first (python-dotenv)
            **overrides: Values that take precedence over the environment
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        values = {
            "max_messages_per_session": os.getenv("PARLEY_MAX_MESSAGES"),
            "api_key": os.getenv("GEMINI_API_KEY"),
            "model": os.getenv("GEMINI_MODEL"),
            "generation_base_url": os.getenv("GEMINI_BASE_URL"),
            "store_backend": os.getenv("PARLEY_STORE"),
            "store_base_url": os.getenv("PARLEY_STORE_URL"),
            "session_cookie": os.getenv("PARLEY_SESSION_COOKIE"),
            "storage_backend": os.getenv("PARLEY_STORAGE"),
            "storage_path": os.getenv("PARLEY_STORAGE_PATH"),
            "log_level": os.getenv("PARLEY_LOG_LEVEL"),
        }
        values = {k: v for k, v in values.items() if v}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
