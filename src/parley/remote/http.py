"""HTTP history store backed by httpx.

Talks to the chat backend:
- ``GET  {base_url}/history`` returns ``[{prompt, response, timestamp}, ...]``
- ``POST {base_url}/save`` accepts ``{prompt, response}``

The session credential is an opaque cookie sent with every request.
"""

from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .base import HistoryStore
from .models import ExchangeRecord, HistoryRecord, RemoteStoreError

_HISTORY_ADAPTER = TypeAdapter(list[HistoryRecord])


class HttpHistoryStore(HistoryStore):
    """History store reached over HTTP.

    Hidden design decisions:
    - Endpoint paths relative to the base URL
    - Cookie-based session credential
    - Mapping httpx and decoding failures onto RemoteStoreError
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        session_cookie: str | None = None,
        cookie_name: str = "session",
        history_path: str = "/history",
        save_path: str = "/save",
        **client_kwargs: Any
    ):
        """Initialize the HTTP store.

        Args:
            base_url: Base URL of the chat backend API
            session_cookie: Opaque session credential value
            cookie_name: Cookie name carrying the credential
            history_path: Path of the history endpoint
            save_path: Path of the save endpoint
            **client_kwargs: Additional kwargs for httpx.AsyncClient
                (e.g. ``transport`` in tests)
        """
        self._history_path = history_path
        self._save_path = save_path
        headers = {"Cookie": f"{cookie_name}={session_cookie}"} if session_cookie else None
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            **client_kwargs
        )

    async def fetch_history(self) -> list[HistoryRecord]:
        try:
            response = await self._client.get(self._history_path)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise RemoteStoreError(
                f"History request failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"History request failed: {e}") from e
        except ValueError as e:
            raise RemoteStoreError(f"History response is not JSON: {e}") from e

        try:
            return _HISTORY_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise RemoteStoreError(f"History response has unexpected shape: {e}") from e

    async def save_exchange(self, record: ExchangeRecord) -> None:
        try:
            response = await self._client.post(self._save_path, json=record.model_dump())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteStoreError(
                f"Save request failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"Save request failed: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def backend_type(self) -> str:
        return "http"
