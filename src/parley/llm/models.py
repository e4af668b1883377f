"""Data models and errors for the remote generation service."""

from pydantic import BaseModel, ConfigDict, Field


class GenerationError(Exception):
    """Base error for a failed generation request."""


class GenerationTransportError(GenerationError):
    """The request could not be delivered or the service returned an error status."""


class MalformedResponseError(GenerationError):
    """The service answered but the response carried no usable candidate."""


class LLMResponse(BaseModel):
    """Response from the generation service."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated reply text")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
