"""Transcript buffer for the conversation currently being composed.

The buffer does not enforce the per-session message cap. Callers that
append (the exchange orchestrator) check the limit first.
"""

from collections.abc import Iterable, Iterator

from .models import Message, Session


class TranscriptBuffer:
    """Ordered, append-only list of messages for the active conversation."""

    def __init__(self, messages: Iterable[Message] | None = None):
        self._messages: list[Message] = list(messages or [])
        self._revision = 0

    def append(self, message: Message) -> None:
        """Add a message to the end of the transcript."""
        self._messages.append(message)

    def replace_all(self, messages: Iterable[Message]) -> None:
        """Discard current contents and seed with ``messages``."""
        self._messages = list(messages)
        self._revision += 1

    def clear(self) -> None:
        """Empty the transcript."""
        self._messages = []
        self._revision += 1

    def snapshot(self) -> Session:
        """Freeze the current contents into a session.

        The returned session shares no mutable state with the buffer.
        """
        return Session(messages=tuple(self._messages))

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def revision(self) -> int:
        """Counter bumped whenever the contents are replaced or cleared."""
        return self._revision

    @property
    def user_turns(self) -> int:
        """Number of user-authored messages."""
        return sum(1 for m in self._messages if m.is_user)

    @property
    def is_empty(self) -> bool:
        return not self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __repr__(self) -> str:
        return f"TranscriptBuffer(messages={len(self._messages)})"
