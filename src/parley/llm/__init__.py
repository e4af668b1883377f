from .base import LLMProvider
from .factory import create_llm_provider
from .models import (
    GenerationError,
    GenerationTransportError,
    LLMResponse,
    MalformedResponseError,
)
from .providers import GeminiProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "GenerationError",
    "GenerationTransportError",
    "LLMResponse",
    "MalformedResponseError",
    "GeminiProvider",
]
