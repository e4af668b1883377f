"""Session archive persisted to durable local storage.

The archive is an ordered list of sessions stored as one JSON value
under a fixed key, in the same shape the browser client used:
``[[{"text", "isUser", "timestamp"}, ...], ...]``.
Every mutation writes the whole value before the in-memory list is
updated, so a failed write leaves both copies unchanged.
"""

from collections.abc import Iterable, Iterator

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..storage import LocalStorage
from ..transcript import Message, Session

SESSIONS_KEY = "chatSessions"

_WIRE_ADAPTER = TypeAdapter(list[list[Message]])


class SessionArchive:
    """Ordered collection of archived sessions."""

    def __init__(self, storage: LocalStorage, key: str = SESSIONS_KEY):
        self._storage = storage
        self._key = key
        self._sessions: list[Session] = []

    async def load(self) -> int:
        """Read the archive from storage.

        A missing key yields an empty archive. An undecodable value is
        logged and also yields an empty archive; it is overwritten on the
        next append.

        Returns:
            Number of sessions loaded
        """
        raw = await self._storage.get_item(self._key)
        if raw is None:
            self._sessions = []
            return 0

        try:
            decoded = _WIRE_ADAPTER.validate_json(raw)
        except ValidationError as e:
            logger.error("Ignoring unreadable session archive under {!r}: {}", self._key, e)
            self._sessions = []
            return 0

        self._sessions = [Session(messages=tuple(messages)) for messages in decoded]
        logger.debug("Loaded {} archived sessions", len(self._sessions))
        return len(self._sessions)

    def _encode(self, sessions: list[Session]) -> str:
        wire = [list(session.messages) for session in sessions]
        return _WIRE_ADAPTER.dump_json(wire, by_alias=True).decode("utf-8")

    async def _persist(self, sessions: list[Session]) -> None:
        await self._storage.set_item(self._key, self._encode(sessions))
        self._sessions = sessions

    def contains(self, session: Session) -> bool:
        """True if a structurally equal session is already archived."""
        return any(existing == session for existing in self._sessions)

    async def append(self, session: Session) -> None:
        """Append ``session`` and persist the archive."""
        await self._persist([*self._sessions, session])

    async def remove(self, index: int) -> Session:
        """Remove and return the session at ``index``, persisting the result.

        Raises:
            IndexError: If ``index`` is out of range
        """
        removed = self._sessions[index]
        remaining = list(self._sessions)
        del remaining[index]
        await self._persist(remaining)
        return removed

    async def replace_all(self, sessions: Iterable[Session]) -> None:
        """Replace the archive contents wholesale."""
        await self._persist(list(sessions))

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    @property
    def key(self) -> str:
        return self._key

    def __getitem__(self, index: int) -> Session:
        return self._sessions[index]

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(tuple(self._sessions))
