"""In-memory pairing of an edited image with its original."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace

from PIL import Image

from .codec import image_fingerprint


@dataclass(frozen=True)
class EditableAsset:
    """An image being edited in the photo editor.

    ``original_image`` never changes; edits produce a new asset with a new
    ``image``. Nothing here is persisted.
    """

    image: Image.Image
    original_image: Image.Image
    index: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def from_image(cls, image: Image.Image, index: int) -> "EditableAsset":
        return cls(image=image, original_image=image, index=index)

    @property
    def is_modified(self) -> bool:
        """True when the current and original images encode to different bytes."""
        if self.image is self.original_image:
            return False
        try:
            return image_fingerprint(self.image) != image_fingerprint(self.original_image)
        except OSError:
            return False

    def with_modified_image(self, new_image: Image.Image) -> "EditableAsset":
        return replace(self, image=new_image, id=uuid.uuid4())

    def reverted(self) -> "EditableAsset":
        return replace(self, image=self.original_image, id=uuid.uuid4())
