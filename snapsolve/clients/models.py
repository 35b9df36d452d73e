"""Request and response DTOs for the proxy endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


def _to_camel(s: str) -> str:
    """Convert snake_case to camelCase for JSON aliasing."""
    parts = s.split("_")
    return parts[0] + "".join(p.capitalize() or "_" for p in parts[1:])


class BaseSchema(BaseModel):
    """Shared base for proxy DTOs.

    - Enables populate_by_name for using either snake_case or camelCase
    - Uses a snake->camel alias generator for JSON interop
    - Ignores unknown response fields
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        alias_generator=_to_camel,
    )


class VisionRequestDTO(BaseSchema):
    prompt: str
    image_base64: str
    mime_type: str


class VisionResponseDTO(BaseSchema):
    response_text: str


class SearchRequestDTO(BaseSchema):
    input: str


class SearchResponseDTO(BaseSchema):
    output: str


class ErrorResponseDTO(BaseSchema):
    error: str
