"""History loader: seeds the transcript from the remote history store."""

from loguru import logger

from ..remote import HistoryStore, RemoteStoreError
from ..transcript import Message, TranscriptBuffer
from .identity import IdentitySignal


class HistoryLoader:
    """Fetches persisted exchanges once per login and seeds the buffer.

    Each remote record expands into a user message followed by a bot
    message, both stamped with the record timestamp, in record order.
    Failures are logged and leave the buffer untouched.
    """

    def __init__(
        self,
        store: HistoryStore,
        buffer: TranscriptBuffer,
        identity: IdentitySignal
    ):
        self._store = store
        self._buffer = buffer
        self._identity = identity
        self._loaded_epoch: int | None = None

    async def load(self) -> bool:
        """Load history for the current identity epoch.

        Calls for an epoch that has already been loaded, or while no user
        is present, return without touching the network.

        Returns:
            True if a fetch was attempted
        """
        if not self._identity.is_present:
            return False

        epoch = self._identity.epoch
        if self._loaded_epoch == epoch:
            return False
        self._loaded_epoch = epoch

        try:
            records = await self._store.fetch_history()
        except RemoteStoreError as e:
            logger.error("Error fetching chat history: {}", e)
            return True

        if self._identity.epoch != epoch or not self._identity.is_present:
            logger.debug("Identity changed while fetching history; discarding result")
            return True

        messages: list[Message] = []
        for record in records:
            messages.extend(record.to_messages())
        self._buffer.replace_all(messages)
        logger.debug("Seeded transcript with {} messages from history", len(messages))
        return True

    @property
    def loaded_epoch(self) -> int | None:
        return self._loaded_epoch
