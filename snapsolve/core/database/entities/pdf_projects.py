"""
PDF project entity.

A project is a titled, ordered list of photos plus page layout options. Each
photo is stored as a base64 JPEG string. A parallel list keeps the photo as
first added so edits can be reverted. Free-text annotations are pinned to a
page index and a position in PDF points, measured from the bottom-left corner
of the page.

JSON columns are only flushed when the attribute is reassigned, so every
mutation below builds a new list.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import uuid4

from PIL import Image
from sqlmodel import JSON, Column, Field

from snapsolve.imaging.codec import decode_base64_image, encode_jpeg_base64

from ..base import Base, timestamp_column, utc_now

PHOTOS_PER_PAGE_CHOICES = (1, 2, 4)
PROJECT_JPEG_QUALITY = 80


class TextAnnotation(Base):
    """Free text drawn on one page of the exported PDF."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    page: int = Field(ge=0, description="Zero-based page index")
    x: float = Field(description="Left edge of the text, in points")
    y: float = Field(description="Text baseline, in points from the page bottom")
    text: str = Field(min_length=1)


def _encode(images: Sequence[Image.Image]) -> List[str]:
    return [encode_jpeg_base64(image, PROJECT_JPEG_QUALITY) for image in images]


def _decode(data: Sequence[str]) -> List[Image.Image]:
    return [image for image in (decode_base64_image(item) for item in data) if image is not None]


class PDFProject(Base, table=True):
    """Photo collection destined for PDF export.

    Table: ss_pdf_projects
    """

    __tablename__ = "ss_pdf_projects"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=64)
    title: str = Field(max_length=255)
    created_date: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())
    modified_date: datetime = Field(default_factory=utc_now, sa_column=timestamp_column(index=True))

    # Layout
    is_landscape: bool = Field(default=False)
    photos_per_page: int = Field(default=1)
    show_title: bool = Field(default=True)

    # Images as base64 JPEG, current and as originally added
    image_data: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    original_image_data: Optional[List[str]] = Field(default=None, sa_column=Column(JSON, nullable=True))

    # TextAnnotation dicts
    annotations: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    @classmethod
    def from_images(
        cls,
        title: str,
        images: Sequence[Image.Image] = (),
        *,
        is_landscape: bool = False,
        photos_per_page: int = 1,
        show_title: bool = True,
    ) -> "PDFProject":
        if photos_per_page not in PHOTOS_PER_PAGE_CHOICES:
            raise ValueError(f"photos_per_page must be one of {PHOTOS_PER_PAGE_CHOICES}")
        data = _encode(images)
        return cls(
            title=title,
            is_landscape=is_landscape,
            photos_per_page=photos_per_page,
            show_title=show_title,
            image_data=data,
            original_image_data=list(data),
        )

    @property
    def images(self) -> List[Image.Image]:
        return _decode(self.image_data)

    @property
    def original_images(self) -> List[Image.Image]:
        """Originals, or the current images for rows that never stored any."""
        return _decode(self.original_image_data if self.original_image_data is not None else self.image_data)

    @property
    def image_count(self) -> int:
        return len(self.image_data)

    @property
    def has_modified_images(self) -> bool:
        if self.original_image_data is None:
            return False
        return self.image_data != self.original_image_data

    def is_image_modified(self, index: int) -> bool:
        originals = self.original_image_data
        if originals is None or not (0 <= index < len(self.image_data) and index < len(originals)):
            return False
        return self.image_data[index] != originals[index]

    def _touch(self) -> None:
        self.modified_date = utc_now()

    def _ensure_originals(self) -> None:
        if not self.original_image_data:
            self.original_image_data = list(self.image_data)

    def update_images(self, images: Sequence[Image.Image]) -> None:
        """Replace every image. The first images ever set also become the originals."""
        data = _encode(images)
        if not self.image_data and not self.original_image_data:
            self.image_data = data
            self.original_image_data = list(data)
        else:
            self._ensure_originals()
            self.image_data = data
        self._touch()

    def update_image(self, index: int, image: Image.Image) -> None:
        if not 0 <= index < len(self.image_data):
            return
        self._ensure_originals()
        data = list(self.image_data)
        data[index] = encode_jpeg_base64(image, PROJECT_JPEG_QUALITY)
        self.image_data = data
        self._touch()

    def revert_image(self, index: int) -> None:
        originals = self.original_image_data
        if originals is None or not (0 <= index < len(self.image_data) and index < len(originals)):
            return
        data = list(self.image_data)
        data[index] = originals[index]
        self.image_data = data
        self._touch()

    def revert_all_images(self) -> None:
        if self.original_image_data is None:
            return
        self.image_data = list(self.original_image_data)
        self._touch()

    def add_image(self, image: Image.Image) -> None:
        """Append an image; it is its own original."""
        self._ensure_originals()
        encoded = encode_jpeg_base64(image, PROJECT_JPEG_QUALITY)
        self.image_data = [*self.image_data, encoded]
        self.original_image_data = [*(self.original_image_data or []), encoded]
        self._touch()

    def remove_image(self, index: int) -> None:
        if not 0 <= index < len(self.image_data):
            return
        self.image_data = self.image_data[:index] + self.image_data[index + 1 :]
        originals = self.original_image_data
        if originals is not None and index < len(originals):
            self.original_image_data = originals[:index] + originals[index + 1 :]
        self._touch()

    def move_image(self, source: int, destination: int) -> None:
        count = len(self.image_data)
        if not (0 <= source < count and 0 <= destination < count):
            return
        data = list(self.image_data)
        data.insert(destination, data.pop(source))
        self.image_data = data
        originals = self.original_image_data
        if originals is not None and source < len(originals) and destination < len(originals):
            moved = list(originals)
            moved.insert(destination, moved.pop(source))
            self.original_image_data = moved
        self._touch()

    @property
    def page_count(self) -> int:
        """Pages in the export; an empty project still has one."""
        return max(1, math.ceil(len(self.image_data) / self.photos_per_page))

    @property
    def text_annotations(self) -> List[TextAnnotation]:
        return [TextAnnotation.model_validate(item) for item in self.annotations or []]

    def annotations_on_page(self, page: int) -> List[TextAnnotation]:
        return [annotation for annotation in self.text_annotations if annotation.page == page]

    def add_annotation(self, page: int, x: float, y: float, text: str) -> TextAnnotation:
        annotation = TextAnnotation(page=page, x=x, y=y, text=text)
        self.annotations = [*(self.annotations or []), annotation.model_dump()]
        self._touch()
        return annotation

    def update_annotation(
        self,
        annotation_id: str,
        *,
        text: Optional[str] = None,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> Optional[TextAnnotation]:
        """Edit or move an annotation. Returns None when the id is unknown."""
        updated = None
        items = []
        for annotation in self.text_annotations:
            if annotation.id == annotation_id:
                changes = {k: v for k, v in {"text": text, "x": x, "y": y}.items() if v is not None}
                annotation = TextAnnotation.model_validate({**annotation.model_dump(), **changes})
                updated = annotation
            items.append(annotation.model_dump())
        if updated is None:
            return None
        self.annotations = items
        self._touch()
        return updated

    def delete_annotation(self, annotation_id: str) -> bool:
        items = [item for item in self.annotations or [] if item.get("id") != annotation_id]
        if len(items) == len(self.annotations or []):
            return False
        self.annotations = items
        self._touch()
        return True

    def update_configuration(
        self,
        *,
        title: Optional[str] = None,
        is_landscape: Optional[bool] = None,
        photos_per_page: Optional[int] = None,
        show_title: Optional[bool] = None,
    ) -> None:
        if photos_per_page is not None and photos_per_page not in PHOTOS_PER_PAGE_CHOICES:
            raise ValueError(f"photos_per_page must be one of {PHOTOS_PER_PAGE_CHOICES}")
        if title is not None:
            self.title = title
        if is_landscape is not None:
            self.is_landscape = is_landscape
        if photos_per_page is not None:
            self.photos_per_page = photos_per_page
        if show_title is not None:
            self.show_title = show_title
        self._touch()

    def __repr__(self) -> str:
        return (
            f"PDFProject(id={self.id}, title={self.title!r}, images={len(self.image_data)}, "
            f"annotations={len(self.annotations or [])})"
        )
