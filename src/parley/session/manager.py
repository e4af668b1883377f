"""Session manager: archives, restores and deletes conversations."""

from loguru import logger

from ..transcript import Session, TranscriptBuffer
from .archive import SessionArchive


class SessionManager:
    """Moves conversations between the transcript buffer and the archive.

    Archiving deduplicates by structural equality, so archiving an
    unmodified conversation twice stores it once.
    """

    def __init__(self, buffer: TranscriptBuffer, archive: SessionArchive):
        self._buffer = buffer
        self._archive = archive

    async def start_new_session(self) -> bool:
        """Archive the current conversation (if new) and clear the buffer.

        Returns:
            True if a session was appended to the archive
        """
        archived = False
        if not self._buffer.is_empty:
            snapshot = self._buffer.snapshot()
            if self._archive.contains(snapshot):
                logger.debug("Conversation already archived; skipping")
            else:
                await self._archive.append(snapshot)
                archived = True
                logger.info("Archived session with {} messages", len(snapshot))

        self._buffer.clear()
        return archived

    async def open_session(self, index: int) -> Session:
        """Restore an archived session into the transcript.

        The current conversation is archived first, as with
        ``start_new_session``.

        Raises:
            IndexError: If ``index`` is out of range
        """
        session = self._archive[index]
        await self.start_new_session()
        self._buffer.replace_all(session.messages)
        logger.debug("Restored session {} ({} messages)", index, len(session))
        return session

    async def delete_session(self, index: int) -> Session:
        """Delete one archived session.

        Raises:
            IndexError: If ``index`` is out of range
        """
        removed = await self._archive.remove(index)
        logger.info("Deleted archived session {}", index)
        return removed

    async def clear_sessions(self) -> None:
        """Delete every archived session."""
        await self._archive.replace_all([])
        logger.info("Cleared session archive")

    @property
    def sessions(self) -> tuple[Session, ...]:
        return self._archive.sessions
