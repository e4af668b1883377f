"""Result types for session operations."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

LIMIT_NOTICE = "Chat limit reached. Please start a new chat."


class SubmitOutcome(str, Enum):
    """Terminal state of one submit call."""

    FULFILLED = "fulfilled"
    FAILED = "failed"
    EMPTY = "empty"
    LIMIT_REACHED = "limit_reached"
    UNAUTHENTICATED = "unauthenticated"
    BUSY = "busy"

    @property
    def accepted(self) -> bool:
        """True if the prompt was appended and sent."""
        return self in (SubmitOutcome.FULFILLED, SubmitOutcome.FAILED)


class ExchangeResult(BaseModel):
    """Outcome of ``ExchangeOrchestrator.submit``.

    Attributes:
        outcome: Which terminal state the call reached
        prompt: Prompt text that was sent (accepted outcomes only)
        reply: Generated reply (FULFILLED only)
        notice: User-facing notice (LIMIT_REACHED only)
        error: Failure description (FAILED only)
        appended: False if the reply arrived after the transcript was
            cleared or replaced and was therefore not appended
    """

    model_config = ConfigDict(frozen=True)

    outcome: SubmitOutcome
    prompt: str | None = None
    reply: str | None = None
    notice: str | None = None
    error: str | None = None
    appended: bool = Field(default=False)
