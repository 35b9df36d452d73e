"""Image codecs, cropping and editable image assets."""

from .codec import (
    JPEG_MIME_TYPE,
    ImageDecodeError,
    crop_to_capture_rect,
    decode_base64_image,
    encode_jpeg,
    encode_jpeg_base64,
    image_fingerprint,
    open_image,
)
from .editable_asset import EditableAsset

__all__ = [
    "JPEG_MIME_TYPE",
    "EditableAsset",
    "ImageDecodeError",
    "crop_to_capture_rect",
    "decode_base64_image",
    "encode_jpeg",
    "encode_jpeg_base64",
    "image_fingerprint",
    "open_image",
]
