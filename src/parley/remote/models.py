"""Data models for the remote history and persistence stores."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..transcript import Message


class RemoteStoreError(Exception):
    """Raised when the remote store cannot be reached or answers badly."""


class HistoryRecord(BaseModel):
    """One persisted exchange as returned by the history store."""

    prompt: str
    response: str
    timestamp: datetime

    def to_messages(self) -> tuple[Message, Message]:
        """Expand into the user message followed by the bot message.

        Both messages carry the record timestamp.
        """
        return (
            Message.user(self.prompt, timestamp=self.timestamp),
            Message.bot(self.response, timestamp=self.timestamp),
        )


class ExchangeRecord(BaseModel):
    """Payload posted to the persistence store after a successful exchange."""

    prompt: str = Field(description="The user's prompt")
    response: str = Field(description="The generated reply")
