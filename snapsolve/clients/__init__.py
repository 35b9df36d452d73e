"""
Async HTTP clients for the vision/search proxy.

- ``VisionClient``: ``POST /groq-vision`` with a prompt and a base64 JPEG
- ``SearchClient``: ``POST /search`` with a text query
- ``errors``: typed failures, each carrying a user-facing message
"""

from .errors import ProxyApiError, SearchError, VisionError
from .search import SearchClient
from .vision import VisionClient

__all__ = ["ProxyApiError", "SearchClient", "SearchError", "VisionClient", "VisionError"]
