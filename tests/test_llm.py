"""Unit tests for the llm module."""
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors, types
from hypothesis import given
from hypothesis import strategies as st

from conftest import RecordingStore
from parley.llm import (
    GeminiProvider,
    GenerationTransportError,
    LLMProvider,
    MalformedResponseError,
    create_llm_provider,
)
from parley.session import ExchangeOrchestrator, IdentitySignal, SubmitOutcome
from parley.transcript import TranscriptBuffer


class FakeModels:
    """Stand-in for ``client.aio.models`` recording requests."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return self.response


class FakeAsyncClient(SimpleNamespace):
    """Stand-in for ``client.aio``."""

    closed = False

    async def aclose(self):
        self.closed = True


def make_provider(response=None, error=None) -> tuple[GeminiProvider, FakeModels]:
    models = FakeModels(response=response, error=error)
    client = SimpleNamespace(aio=FakeAsyncClient(models=models))
    return GeminiProvider(api_key="fake-key", client=client), models


def reply(*texts: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(parts=[types.Part(text=t) for t in texts]))]
    )


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestGeminiProvider:
    """Tests for GeminiProvider."""

    @pytest.mark.asyncio
    async def test_request_carries_only_the_prompt(self):
        """Test the request body shape."""
        provider, models = make_provider(response=reply("hi"))
        await provider.generate("hello")

        call = models.calls[0]
        assert call["model"] == "gemini-2.5-flash"
        assert len(call["contents"]) == 1
        assert call["contents"][0].parts[0].text == "hello"

    @pytest.mark.asyncio
    async def test_extracts_first_candidate_text(self):
        """Test reply extraction from candidates[0].content.parts."""
        provider, _ = make_provider(response=reply("hel", "lo"))
        response = await provider.generate("hello")
        assert response.content == "hello"
        assert response.model == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_model_override(self):
        """Test that a per-call model overrides the default."""
        provider, models = make_provider(response=reply("hi"))
        response = await provider.generate("hello", model="gemini-2.5-pro")
        assert models.calls[0]["model"] == "gemini-2.5-pro"
        assert response.model == "gemini-2.5-pro"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        types.GenerateContentResponse(candidates=[]),
        types.GenerateContentResponse(),
        types.GenerateContentResponse(candidates=[types.Candidate()]),
    ])
    async def test_missing_candidates_are_malformed(self, response):
        """Test that responses without usable text raise MalformedResponseError."""
        provider, models = make_provider(response=response)
        with pytest.raises(MalformedResponseError):
            await provider.generate("hello")
        assert len(models.calls) == 1

    @pytest.mark.asyncio
    async def test_api_error_is_transport_error(self):
        """Test that SDK API errors are wrapped, without retrying."""
        error = errors.APIError(503, {"error": {"code": 503, "message": "unavailable", "status": "UNAVAILABLE"}})
        provider, models = make_provider(error=error)
        with pytest.raises(GenerationTransportError):
            await provider.generate("hello")
        assert len(models.calls) == 1

    @pytest.mark.asyncio
    async def test_network_error_is_transport_error(self):
        """Test that httpx failures are wrapped."""
        provider, _ = make_provider(error=httpx.ConnectError("connection refused"))
        with pytest.raises(GenerationTransportError, match="connection refused"):
            await provider.generate("hello")

    @pytest.mark.asyncio
    async def test_usage_extracted(self):
        """Test token usage mapping."""
        response = reply("hi")
        response.usage_metadata = types.GenerateContentResponseUsageMetadata(
            prompt_token_count=3, candidates_token_count=1, total_token_count=4
        )
        provider, _ = make_provider(response=response)
        result = await provider.generate("hello")
        assert result.usage == {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4}

    @pytest.mark.asyncio
    async def test_close_closes_sdk_client(self):
        """Test that close releases the SDK's async client."""
        provider, _ = make_provider(response=reply("hi"))
        async with provider:
            await provider.generate("hello")
        assert provider._client.aio.closed


def http_provider(handler) -> GeminiProvider:
    """Provider backed by a real SDK client over a mock transport."""
    return GeminiProvider(
        api_key="fake-key",
        base_url="https://gemini.test/",
        transport=httpx.MockTransport(handler)
    )


class TestGeminiOverHTTP:
    """Tests that drive the real SDK client through an httpx transport."""

    @pytest.mark.asyncio
    async def test_reply_through_transport(self):
        """Test that requests go through the supplied transport."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={
                "candidates": [{"content": {"role": "model", "parts": [{"text": "hi"}]}}]
            })

        provider = http_provider(handler)
        response = await provider.generate("hello")
        await provider.close()

        assert response.content == "hi"
        assert len(requests) == 1
        assert requests[0].url.host == "gemini.test"

    @pytest.mark.asyncio
    async def test_html_body_is_malformed(self):
        """Test that a 200 page that is not JSON raises MalformedResponseError."""
        provider = http_provider(
            lambda request: httpx.Response(200, text="<html>portal</html>", headers={"content-type": "text/html"})
        )
        with pytest.raises(MalformedResponseError):
            await provider.generate("hello")

    @pytest.mark.asyncio
    async def test_refused_connection_is_transport_error(self):
        """Test that a connection failure raises GenerationTransportError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GenerationTransportError):
            await http_provider(handler).generate("hello")

    @pytest.mark.asyncio
    async def test_submit_recovers_from_html_body(self, log_messages):
        """Test that an unreadable reply fails the exchange without raising."""
        provider = http_provider(lambda request: httpx.Response(200, text="<html>portal</html>"))
        identity = IdentitySignal()
        identity.login("ada")
        buffer = TranscriptBuffer()
        store = RecordingStore()
        orchestrator = ExchangeOrchestrator(buffer, provider, store, identity)

        result = await orchestrator.submit("hello")

        assert result.outcome == SubmitOutcome.FAILED
        assert not orchestrator.is_loading
        assert [m.text for m in buffer] == ["hello"]
        assert store.saved == []
        assert any("Error generating reply" in m for m in log_messages)


class TestLLMFactory:
    """Tests for the llm factory function."""

    def test_create_gemini_provider(self):
        """Test creating the Gemini provider via factory."""
        provider = create_llm_provider("gemini", api_key="test-key", model="gemini-2.5-pro")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-pro"

    def test_missing_api_key(self):
        """Test that a missing or empty API key raises TypeError."""
        with pytest.raises(TypeError, match="requires 'api_key'"):
            create_llm_provider("gemini")
        with pytest.raises(TypeError, match="requires 'api_key'"):
            create_llm_provider("gemini", api_key=None)

    @given(st.text(min_size=1))
    def test_factory_with_random_provider_names(self, provider_name: str):
        """Property test: Factory should only accept known providers."""
        if provider_name.lower() == "gemini":
            assert isinstance(create_llm_provider(provider_name, api_key="fake"), GeminiProvider)
        else:
            with pytest.raises(ValueError):
                create_llm_provider(provider_name, api_key="fake")
