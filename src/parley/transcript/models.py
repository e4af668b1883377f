"""Data models for conversation transcripts.

These models define the message and session values shared by the
transcript buffer, the session archive and the remote stores. Wire
field names follow the browser client format (``isUser``), Python
attributes use snake_case.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """A single message in a conversation.

    Messages are immutable once created; two messages are equal when
    text, author and timestamp are all equal.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(description="Message body")
    is_user: bool = Field(alias="isUser", description="True if authored by the user")
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def user(cls, text: str, timestamp: datetime | None = None) -> "Message":
        """Create a user-authored message."""
        return cls(text=text, is_user=True, timestamp=timestamp or utc_now())

    @classmethod
    def bot(cls, text: str, timestamp: datetime | None = None) -> "Message":
        """Create a generated (bot) message."""
        return cls(text=text, is_user=False, timestamp=timestamp or utc_now())


class Session(BaseModel):
    """A frozen snapshot of a completed conversation.

    Sessions are values: equality is structural over the ordered
    message sequence, timestamps included.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = Field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.messages)

    @property
    def title(self) -> str:
        """Short label taken from the first user message."""
        for message in self.messages:
            if message.is_user:
                text = message.text.strip().splitlines()[0] if message.text.strip() else ""
                return text[:60] + "..." if len(text) > 60 else text
        return "(empty)"

    @property
    def started_at(self) -> datetime | None:
        """Timestamp of the first message, if any."""
        return self.messages[0].timestamp if self.messages else None
