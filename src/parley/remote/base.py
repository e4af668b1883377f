"""Abstract base class for the remote history store.

The same service answers history reads and accepts new exchanges.
The abstraction hides:
- Transport (HTTP, in-process)
- Endpoint layout
- How the ambient session credential is carried
"""

from abc import ABC, abstractmethod

from .models import ExchangeRecord, HistoryRecord


class HistoryStore(ABC):
    """Remote store of previously completed exchanges."""

    @abstractmethod
    async def fetch_history(self) -> list[HistoryRecord]:
        """Fetch all persisted exchanges for the current user, oldest first.

        Raises:
            RemoteStoreError: On transport, status or decoding failure
        """

    @abstractmethod
    async def save_exchange(self, record: ExchangeRecord) -> None:
        """Persist one completed exchange.

        Raises:
            RemoteStoreError: On transport or status failure
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any open connections."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "HistoryStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
