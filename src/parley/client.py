"""Chat client: the composition root of the session lifecycle.

Owns one transcript buffer, one session archive and one identity signal,
and wires the history loader, exchange orchestrator and session manager
around them.

Usage:
    async with ChatClient.from_config(ClientConfig.from_env()) as client:
        await client.login("ada")
        result = await client.submit("Hello")
        await client.new_chat()
"""

from typing import Any

from loguru import logger

from .config import ClientConfig
from .llm import LLMProvider, create_llm_provider
from .remote import HistoryStore, create_history_store
from .session import (
    ExchangeOrchestrator,
    ExchangeResult,
    HistoryLoader,
    IdentitySignal,
    SessionArchive,
    SessionManager,
)
from .storage import LocalStorage, create_local_storage
from .transcript import Message, Session, TranscriptBuffer


class ChatClient:
    """Single-user chat client state and operations."""

    def __init__(
        self,
        provider: LLMProvider,
        store: HistoryStore,
        storage: LocalStorage,
        max_messages_per_session: int = 20
    ):
        self._provider = provider
        self._store = store
        self._storage = storage

        self.buffer = TranscriptBuffer()
        self.identity = IdentitySignal()
        self.archive = SessionArchive(storage)
        self.loader = HistoryLoader(store, self.buffer, self.identity)
        self.orchestrator = ExchangeOrchestrator(
            self.buffer,
            provider,
            store,
            self.identity,
            max_messages_per_session=max_messages_per_session
        )
        self.manager = SessionManager(self.buffer, self.archive)

    @classmethod
    def from_config(cls, config: ClientConfig, **overrides: Any) -> "ChatClient":
        """Build a client and its collaborators from configuration.

        Args:
            config: Client configuration
            **overrides: Pre-built ``provider``, ``store`` or ``storage``

        Raises:
            TypeError: If no API key is configured and no provider is given
        """
        provider = overrides.get("provider") or create_llm_provider(
            "gemini",
            api_key=config.api_key,
            model=config.model,
            base_url=config.generation_base_url
        )

        store = overrides.get("store")
        if store is None:
            if config.store_backend == "http":
                store = create_history_store(
                    "http",
                    base_url=config.store_base_url,
                    session_cookie=config.session_cookie
                )
            else:
                store = create_history_store(config.store_backend)

        storage = overrides.get("storage")
        if storage is None:
            storage_kwargs = {}
            if config.resolved_storage_path is not None:
                storage_kwargs["path"] = config.resolved_storage_path
            storage = create_local_storage(config.storage_backend, **storage_kwargs)

        return cls(
            provider=provider,
            store=store,
            storage=storage,
            max_messages_per_session=config.max_messages_per_session
        )

    async def connect(self) -> None:
        """Open local storage and load the session archive."""
        await self._storage.connect()
        count = await self.archive.load()
        logger.debug("Client connected ({} archived sessions)", count)

    async def close(self) -> None:
        """Wait for pending saves, then release every resource."""
        try:
            await self.orchestrator.drain()
        finally:
            await self._store.close()
            await self._provider.close()
            await self._storage.disconnect()

    async def __aenter__(self) -> "ChatClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def login(self, user: str) -> bool:
        """Mark ``user`` present and load their history once per login.

        Returns:
            True if history was fetched for this login
        """
        self.identity.login(user)
        return await self.loader.load()

    def logout(self) -> None:
        """Mark the user absent. The transcript is left as it is."""
        self.identity.logout()

    async def submit(self, prompt: str | None = None) -> ExchangeResult:
        return await self.orchestrator.submit(prompt)

    async def new_chat(self) -> bool:
        return await self.manager.start_new_session()

    async def open_session(self, index: int) -> Session:
        return await self.manager.open_session(index)

    async def delete_session(self, index: int) -> Session:
        return await self.manager.delete_session(index)

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.buffer.messages

    @property
    def sessions(self) -> tuple[Session, ...]:
        return self.archive.sessions

    @property
    def is_loading(self) -> bool:
        return self.orchestrator.is_loading
