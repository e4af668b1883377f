"""Google Gemini generation provider.

Uses the official Google GenAI SDK for async content generation.
Reference: https://github.com/googleapis/python-genai

A request carries only the current prompt: ``contents=[{parts: [{text}]}]``.
Gemini can return no candidates (safety filtering, service issues); that
is reported as MalformedResponseError and not retried. A body that is not
JSON (a proxy or captive-portal page) is reported the same way.

The SDK picks aiohttp for async calls whenever it is importable; the
provider always hands it an httpx transport so failures surface as
httpx errors.
"""

from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from ..base import LLMProvider
from ..models import GenerationTransportError, LLMResponse, MalformedResponseError


class GeminiProvider(LLMProvider):
    """Google Gemini generation provider.

    Hidden design decisions:
    - Google GenAI client initialization and API key handling
    - Request body construction
    - Reply extraction from ``candidates[0].content.parts``
    - Mapping SDK and transport exceptions onto GenerationError
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str | None = None,
        client: genai.Client | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            base_url: Optional override of the service endpoint
            client: Pre-built client (mainly for tests)
            transport: httpx transport for async requests (default: network)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        if client is not None:
            self._client = client
        else:
            client_kwargs["http_options"] = types.HttpOptions(
                base_url=base_url,
                async_client_args={"transport": transport or httpx.AsyncHTTPTransport()}
            )
            self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @staticmethod
    def _build_contents(prompt: str) -> list[types.Content]:
        return [types.Content(parts=[types.Part(text=prompt)])]

    @staticmethod
    def _extract_content(response: Any) -> str:
        """Extract reply text from the first candidate.

        Raises:
            MalformedResponseError: If there is no candidate or it has no text
        """
        candidates = getattr(response, "candidates", None)
        if not candidates:
            raise MalformedResponseError("Response contained no candidates")

        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        texts = [part.text for part in parts if getattr(part, "text", None)]
        if not texts:
            raise MalformedResponseError("First candidate contained no text")
        return "".join(texts)

    @staticmethod
    def _extract_usage(response: Any) -> dict[str, int] | None:
        usage_metadata = getattr(response, "usage_metadata", None)
        if not usage_metadata:
            return None
        return {
            "prompt_tokens": usage_metadata.prompt_token_count or 0,
            "completion_tokens": usage_metadata.candidates_token_count or 0,
            "total_tokens": usage_metadata.total_token_count or 0,
        }

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a reply using Google Gemini.

        Args:
            prompt: The user's prompt text
            model: Model to use (overrides default)
            **kwargs: Additional GenerateContentConfig fields

        Returns:
            LLMResponse with generated content
        """
        model_to_use = model or self._model
        config = types.GenerateContentConfig(**kwargs) if kwargs else None

        try:
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=self._build_contents(prompt),
                config=config
            )
        except errors.APIError as e:
            raise GenerationTransportError(f"Gemini API error {e.code}: {e.message}") from e
        except httpx.HTTPError as e:
            raise GenerationTransportError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise MalformedResponseError(f"Gemini returned an unreadable response: {e}") from e

        return LLMResponse(
            content=self._extract_content(response),
            model=model_to_use,
            usage=self._extract_usage(response)
        )

    async def close(self) -> None:
        """Close the async HTTP client held by the SDK."""
        await self._client.aio.aclose()
