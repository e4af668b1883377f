"""Unit tests for the history loader."""
import asyncio
from datetime import datetime, timezone

import pytest

from conftest import RecordingStore
from parley.remote import HistoryRecord, RemoteStoreError
from parley.session import HistoryLoader, IdentitySignal
from parley.transcript import Message, TranscriptBuffer


class TestHistoryLoader:
    """Tests for HistoryLoader."""

    @pytest.mark.asyncio
    async def test_single_record_expansion(self, buffer, identity, ts):
        """Test that one record becomes a user message then a bot message."""
        store = RecordingStore(history=[HistoryRecord(prompt="a", response="b", timestamp=ts)])
        loader = HistoryLoader(store, buffer, identity)

        assert await loader.load() is True
        assert buffer.messages == (
            Message(text="a", is_user=True, timestamp=ts),
            Message(text="b", is_user=False, timestamp=ts),
        )

    @pytest.mark.asyncio
    async def test_record_order_preserved(self, buffer, identity):
        """Test that expansion keeps remote record order."""
        records = [
            HistoryRecord(prompt=f"p{i}", response=f"r{i}", timestamp=datetime(2026, 1, i + 1, tzinfo=timezone.utc))
            for i in range(3)
        ]
        loader = HistoryLoader(RecordingStore(history=records), buffer, identity)
        await loader.load()

        assert [m.text for m in buffer] == ["p0", "r0", "p1", "r1", "p2", "r2"]
        assert [m.is_user for m in buffer] == [True, False] * 3

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_swallowed(self, buffer, identity, log_messages):
        """Test that a fetch failure leaves the buffer empty without raising."""
        store = RecordingStore(fetch_error=RemoteStoreError("connection refused"))
        loader = HistoryLoader(store, buffer, identity)

        assert await loader.load() is True
        assert buffer.is_empty
        assert any("Error fetching chat history" in m for m in log_messages)

    @pytest.mark.asyncio
    async def test_runs_once_per_login(self, buffer, identity, store):
        """Test that repeated loads in one epoch do not re-fetch."""
        loader = HistoryLoader(store, buffer, identity)
        assert await loader.load() is True
        assert await loader.load() is False
        assert store.fetch_calls == 1

    @pytest.mark.asyncio
    async def test_failed_fetch_not_retried_in_same_epoch(self, buffer, identity):
        """Test that a failure still counts as the epoch's single fetch."""
        store = RecordingStore(fetch_error=RemoteStoreError("down"))
        loader = HistoryLoader(store, buffer, identity)
        await loader.load()
        await loader.load()
        assert store.fetch_calls == 1

    @pytest.mark.asyncio
    async def test_new_login_fetches_again(self, buffer, identity, store):
        """Test that logout followed by login starts a new fetch."""
        loader = HistoryLoader(store, buffer, identity)
        await loader.load()

        identity.logout()
        identity.login("ada")
        await loader.load()
        assert store.fetch_calls == 2

    @pytest.mark.asyncio
    async def test_absent_identity_skips_fetch(self, buffer, store):
        """Test that nothing is fetched while no user is present."""
        loader = HistoryLoader(store, buffer, IdentitySignal())
        assert await loader.load() is False
        assert store.fetch_calls == 0

    @pytest.mark.asyncio
    async def test_stale_result_discarded(self, ts):
        """Test that history arriving after logout is not applied."""
        gate = asyncio.Event()

        class SlowStore(RecordingStore):
            async def fetch_history(self):
                await gate.wait()
                return await super().fetch_history()

        identity = IdentitySignal()
        identity.login("ada")
        buffer = TranscriptBuffer()
        loader = HistoryLoader(
            SlowStore(history=[HistoryRecord(prompt="a", response="b", timestamp=ts)]),
            buffer,
            identity,
        )

        task = asyncio.create_task(loader.load())
        await asyncio.sleep(0)
        identity.logout()
        gate.set()
        await task

        assert buffer.is_empty
