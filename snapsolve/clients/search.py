"""Client for the ``/search`` endpoint of the proxy."""

from __future__ import annotations

from snapsolve.formatting.sources import SEARCH_PROMPT_PREFIX

from .base import ProxyClientBase
from .errors import SearchInvalidResponseError, SearchInvalidURLError, SearchNetworkError, SearchServerError
from .models import SearchRequestDTO, SearchResponseDTO


class SearchClient(ProxyClientBase):
    """Async client for web search answers rendered as Markdown."""

    endpoint = "/search"
    invalid_url_error = SearchInvalidURLError
    network_error = SearchNetworkError
    invalid_response_error = SearchInvalidResponseError
    server_error = SearchServerError

    async def search(self, query: str) -> str:
        """Run one search and return the Markdown ``output``."""
        payload = SearchRequestDTO(input=f"{SEARCH_PROMPT_PREFIX}{query}")
        result = await self._post(self._encode(payload), SearchResponseDTO)
        return result.output
