"""Shared plumbing for the proxy HTTP clients."""

from __future__ import annotations

import json
import logging
from typing import Optional, Type

import httpx
from pydantic import BaseModel

from .errors import ProxyApiError
from .models import ErrorResponseDTO


class ProxyClientBase:
    """Thin async HTTP client for one JSON POST endpoint of the proxy.

    Subclasses set ``endpoint`` and the error classes to raise. Each call is a
    single request: no retries, no streaming.
    """

    endpoint: str = "/"
    invalid_url_error: Type[ProxyApiError]
    network_error: Type[ProxyApiError]
    invalid_response_error: Type[ProxyApiError]
    server_error: Type[ProxyApiError]

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(type(self).__module__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self) -> str:
        raw = f"{self.base_url}{self.endpoint}"
        try:
            url = httpx.URL(raw)
        except (httpx.InvalidURL, TypeError) as e:
            raise self.invalid_url_error(raw) from e
        if url.scheme not in ("http", "https") or not url.host:
            raise self.invalid_url_error(raw)
        return raw

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def _encode(self, payload: BaseModel) -> bytes:
        return json.dumps(payload.model_dump(by_alias=True)).encode("utf-8")

    async def _post(self, body: bytes, response_model: Type[BaseModel]) -> BaseModel:
        url = self._url()
        self._logger.debug("%s: POST %s (%d bytes)", type(self).__name__, url, len(body))
        try:
            r = await self._client.post(url, headers=self._headers(), content=body)
        except httpx.HTTPError as e:
            raise self.network_error(e) from e

        if not r.is_success:
            raise self._server_error(r)

        try:
            parsed = response_model.model_validate(r.json())
        except ValueError as e:
            raise self.invalid_response_error(status_code=r.status_code, details=r.text) from e
        self._logger.debug("%s: %s -> %d", type(self).__name__, url, r.status_code)
        return parsed

    def _server_error(self, r: httpx.Response) -> ProxyApiError:
        try:
            error = ErrorResponseDTO.model_validate(r.json())
        except ValueError:
            return self._fallback_server_error(r)
        self._logger.debug("%s: server error %d: %s", type(self).__name__, r.status_code, error.error)
        return self.server_error(error.error, status_code=r.status_code, details=r.text)

    def _fallback_server_error(self, r: httpx.Response) -> ProxyApiError:
        return self.server_error(f"Server error: {r.status_code}", status_code=r.status_code, details=r.text)
