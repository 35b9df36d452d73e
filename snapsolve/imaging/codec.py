"""Image encoding helpers built on Pillow.

Images travel as base64 JPEG strings, both in the vision request body and in
persisted projects.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from snapsolve.geometry.capture_rect import Rect

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 80
JPEG_MIME_TYPE = "image/jpeg"


class ImageDecodeError(ValueError):
    """Raised when bytes cannot be decoded as an image."""


def open_image(data: Union[bytes, bytearray]) -> Image.Image:
    """Decode raw image bytes into a loaded Pillow image."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Cannot decode image: {e}") from e
    return image


def encode_jpeg(image: Image.Image, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode ``image`` as JPEG bytes, flattening alpha and palette modes."""
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def encode_jpeg_base64(image: Image.Image, quality: int = DEFAULT_JPEG_QUALITY) -> str:
    return base64.b64encode(encode_jpeg(image, quality)).decode("ascii")


def decode_base64_image(data: str) -> Optional[Image.Image]:
    """Decode a base64 image string; ``None`` when it is not a valid image."""
    try:
        raw = base64.b64decode(data, validate=True)
        return open_image(raw)
    except (binascii.Error, ValueError) as e:
        logger.debug("Skipping undecodable image payload: %s", e)
        return None


def image_fingerprint(image: Image.Image) -> bytes:
    """Lossless PNG encoding used for byte-wise image comparison."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def crop_to_capture_rect(image: Image.Image, capture_rect: Rect, view_width: float, view_height: float) -> Image.Image:
    """Crop the part of ``image`` under an on-screen capture rectangle.

    The camera preview fills a ``view_width`` x ``view_height`` view, so the
    rectangle is scaled from view points to image pixels and then clamped to
    the image bounds.

    Args:
        image: Full captured frame
        capture_rect: Capture rectangle in view coordinates
        view_width: Width of the preview view
        view_height: Height of the preview view

    Returns:
        The cropped image
    """
    if view_width <= 0 or view_height <= 0:
        raise ValueError("View size must be positive")
    scale_x = image.width / view_width
    scale_y = image.height / view_height
    left = max(0, round(capture_rect.min_x * scale_x))
    top = max(0, round(capture_rect.min_y * scale_y))
    right = min(image.width, round(capture_rect.max_x * scale_x))
    bottom = min(image.height, round(capture_rect.max_y * scale_y))
    if right <= left or bottom <= top:
        raise ValueError("Capture rectangle does not overlap the image")
    return image.crop((left, top, right, bottom))
