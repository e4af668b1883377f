"""In-memory history store.

Keeps exchanges in a list. Used for offline runs and tests.
"""

from ..transcript import utc_now
from .base import HistoryStore
from .models import ExchangeRecord, HistoryRecord


class InMemoryHistoryStore(HistoryStore):
    """History store that never leaves the process."""

    def __init__(self, records: list[HistoryRecord] | None = None):
        self._records: list[HistoryRecord] = list(records or [])

    async def fetch_history(self) -> list[HistoryRecord]:
        return list(self._records)

    async def save_exchange(self, record: ExchangeRecord) -> None:
        self._records.append(HistoryRecord(
            prompt=record.prompt,
            response=record.response,
            timestamp=utc_now(),
        ))

    async def close(self) -> None:
        pass

    @property
    def records(self) -> list[HistoryRecord]:
        return list(self._records)

    @property
    def backend_type(self) -> str:
        return "memory"
