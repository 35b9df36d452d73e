"""Error types raised by the proxy API clients.

Purpose:
- Provide typed exceptions for every failure of a vision or search request.
- Expose HTTP-oriented context (status code, error body) for diagnosis.
- Carry a ``user_message``, the single string shown to the user. No error is
  retried; callers only display it.

Usage:
- Catch ``ProxyApiError`` for any client failure.
- Catch ``VisionError`` or ``SearchError`` for one client's family.
"""

from __future__ import annotations

from typing import Any, Optional


class ProxyApiError(Exception):
    """Base error for proxy API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload from the server or the underlying exception.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    @property
    def user_message(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Vision
# ---------------------------------------------------------------------------


class VisionError(ProxyApiError):
    """Base error for the vision endpoint."""


class VisionInvalidURLError(VisionError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid vision URL: {url}", details=url)

    @property
    def user_message(self) -> str:
        return "Invalid server URL. Please check the configuration."


class VisionNetworkError(VisionError):
    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Vision request failed: {cause}", details=cause)

    @property
    def user_message(self) -> str:
        return f"Network error: {self.details}"


class VisionInvalidResponseError(VisionError):
    def __init__(self, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__("Invalid response from the vision endpoint", status_code=status_code, details=details)

    @property
    def user_message(self) -> str:
        return "Invalid response from the server."


class VisionServerError(VisionError):
    """Non-2xx reply. ``message`` is the server's ``error`` text when it sent one."""

    @property
    def user_message(self) -> str:
        return f"Server error: {self.message}"


class ImageConversionError(VisionError):
    def __init__(self, details: Optional[Any] = None) -> None:
        super().__init__("Could not encode image as JPEG", details=details)

    @property
    def user_message(self) -> str:
        return "Could not process the selected image."


class PromptTooLongError(VisionError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Prompt has {length} characters, limit is {limit}", details={"length": length, "limit": limit})

    @property
    def user_message(self) -> str:
        return "The prompt is too long. Please shorten it."


class ImageTooLargeError(VisionError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Encoded image is {size} bytes, limit is {limit}", details={"size": size, "limit": limit})

    @property
    def user_message(self) -> str:
        return "The selected image is too large. Please choose a smaller one."


class VisionEncodingError(VisionError):
    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Failed to encode request body: {cause}", details=cause)

    @property
    def user_message(self) -> str:
        return f"Failed to encode request data: {self.details}"


class NoMathFoundError(VisionError):
    def __init__(self) -> None:
        super().__init__("No mathematical content detected in image")

    @property
    def user_message(self) -> str:
        return (
            "No math problems detected in this image. Please try taking a photo that contains "
            "mathematical equations, formulas, or problems to solve."
        )


class ImageContentNotSuitableError(VisionError):
    def __init__(self) -> None:
        super().__init__("Image content not suitable for solving")

    @property
    def user_message(self) -> str:
        return (
            "This image doesn't appear to contain mathematical content suitable for solving. "
            "Please capture an image with clear math problems."
        )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class SearchError(ProxyApiError):
    """Base error for the search endpoint."""


class SearchInvalidURLError(SearchError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid search URL: {url}", details=url)

    @property
    def user_message(self) -> str:
        return "Invalid URL."


class SearchNetworkError(SearchError):
    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Search request failed: {cause}", details=cause)

    @property
    def user_message(self) -> str:
        return f"Network error: {self.details}"


class SearchInvalidResponseError(SearchError):
    def __init__(self, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__("Invalid response from the search endpoint", status_code=status_code, details=details)

    @property
    def user_message(self) -> str:
        return "Invalid response from server."


class SearchServerError(SearchError):
    @property
    def user_message(self) -> str:
        return f"Server error: {self.message}"
