"""HTTP client for the dashboard REST backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from src.dashboard.core.errors import ApiError
from src.dashboard.core.models.session import AdminSession
from src.dashboard.core.storage.session_storage import SessionStorage, get_session_storage
from src.dashboard.runtime.context import get_config

SESSION_KEY = "admin"


@dataclass(frozen=True)
class RequestContext:
    """Everything a single backend call needs: where to go and as whom."""

    base_url: str
    token: str | None = None
    timeout: float = 10.0

    @classmethod
    async def from_session(cls, storage: SessionStorage | None = None) -> RequestContext:
        """Build a context from the configuration and the stored admin session."""
        api_config = get_config().api
        storage = storage or get_session_storage()
        session = await storage.get(SESSION_KEY, AdminSession)
        return cls(
            base_url=api_config.normalized_base_url,
            token=session.token if session else None,
            timeout=api_config.timeout_seconds,
        )

    def with_token(self, token: str | None) -> RequestContext:
        return RequestContext(base_url=self.base_url, token=token, timeout=self.timeout)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or response.reason_phrase)
    return response.reason_phrase


class ApiClient:
    """Async client bound to one request context.

    Use as an async context manager; the underlying ``httpx.AsyncClient`` is
    opened on enter and closed on exit.
    """

    def __init__(
        self,
        context: RequestContext,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.context = context
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ApiClient:
        headers = {}
        if self.context.token:
            headers["Authorization"] = f"Bearer {self.context.token}"
        self._client = httpx.AsyncClient(
            base_url=self.context.base_url,
            headers=headers,
            timeout=self.context.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        files: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: The backend answered with a non-2xx status.
            httpx.HTTPError: The request could not be completed.
        """
        if self._client is None:
            raise RuntimeError("ApiClient must be used as an async context manager")

        headers = {}
        # Multipart bodies get their boundary header from httpx
        if files is None:
            headers["Content-Type"] = "application/json"

        try:
            response = await self._client.request(
                method, path, json=json, files=files, params=params, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"API request {method} {path} failed: {e!r}")
            raise

        if not response.is_success:
            message = _error_message(response)
            logger.error(
                "API error",
                status=response.status_code,
                status_text=response.reason_phrase,
                url=str(response.request.url),
                message=message,
            )
            raise ApiError(response.status_code, message, str(response.request.url))

        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)
