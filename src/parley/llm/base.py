from abc import ABC, abstractmethod
from typing import Any

from .models import LLMResponse


class LLMProvider(ABC):
    """Abstract base class for the remote generation service.

    This module hides the design decision of which generation service is
    used. Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Mapping transport and format failures onto GenerationError

    A call is a single attempt; implementations do not retry.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.generate("Hello")
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a reply to a single prompt.

        Args:
            prompt: The user's prompt text
            model: Model to use (None uses provider's default)
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing the reply text and metadata

        Raises:
            GenerationTransportError: Network or service-side failure
            MalformedResponseError: Response without a usable candidate
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
