"""Pytest configuration and shared fixtures."""
import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest
from loguru import logger

from parley.llm import LLMProvider, LLMResponse
from parley.remote import ExchangeRecord, HistoryRecord, HistoryStore, RemoteStoreError
from parley.session import (
    ExchangeOrchestrator,
    HistoryLoader,
    IdentitySignal,
    SessionArchive,
    SessionManager,
)
from parley.storage import InMemoryStorage
from parley.transcript import Message, TranscriptBuffer


class FakeProvider(LLMProvider):
    """Generation provider returning scripted replies.

    Each scripted item is either reply text or an exception to raise.
    When ``gate`` is given, every call waits on it after signalling
    ``started``.
    """

    def __init__(self, replies: list[Any] | None = None, gate: asyncio.Event | None = None):
        self.replies = list(replies or [])
        self.gate = gate
        self.started = asyncio.Event()
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str, model: str | None = None, **kwargs: Any) -> LLMResponse:
        self.prompts.append(prompt)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        item = self.replies.pop(0) if self.replies else f"echo: {prompt}"
        if isinstance(item, BaseException):
            raise item
        return LLMResponse(content=item, model="fake")

    async def close(self) -> None:
        self.closed = True


class RecordingStore(HistoryStore):
    """History store that records saves and can be told to fail."""

    def __init__(
        self,
        history: list[HistoryRecord] | None = None,
        fetch_error: Exception | None = None,
        save_error: Exception | None = None,
    ):
        self.history = list(history or [])
        self.fetch_error = fetch_error
        self.save_error = save_error
        self.fetch_calls = 0
        self.saved: list[ExchangeRecord] = []
        self.closed = False

    async def fetch_history(self) -> list[HistoryRecord]:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.history)

    async def save_exchange(self, record: ExchangeRecord) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saved.append(record)

    async def close(self) -> None:
        self.closed = True

    @property
    def backend_type(self) -> str:
        return "recording"


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def ts():
    """A fixed UTC timestamp."""
    return datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_messages(ts):
    """A short two-turn conversation."""
    return [
        Message.user("hello", timestamp=ts),
        Message.bot("hi there", timestamp=ts),
        Message.user("how are you?", timestamp=ts),
        Message.bot("fine", timestamp=ts),
    ]


@pytest.fixture
def buffer():
    return TranscriptBuffer()


@pytest.fixture
def identity():
    signal = IdentitySignal()
    signal.login("ada")
    return signal


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def archive(storage):
    return SessionArchive(storage)


@pytest.fixture
def orchestrator(buffer, provider, store, identity):
    return ExchangeOrchestrator(buffer, provider, store, identity, max_messages_per_session=20)


@pytest.fixture
def manager(buffer, archive):
    return SessionManager(buffer, archive)


@pytest.fixture
def loader(store, buffer, identity):
    return HistoryLoader(store, buffer, identity)


@pytest.fixture
def transport_error():
    return RemoteStoreError("connection refused")
