"""Render a :class:`PDFProject` to a PDF document.

Pages are US letter, rotated for landscape projects. Each page holds a grid
of 1, 2 or 4 photos; a project title is drawn above the grid on the first
page when ``show_title`` is set. Text annotations are drawn last, on a
half-transparent white box, so they sit above the photos.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from PIL import Image
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from snapsolve.core.database.entities.pdf_projects import PHOTOS_PER_PAGE_CHOICES, PDFProject, TextAnnotation

logger = logging.getLogger(__name__)

PAGE_MARGIN = 36.0
GUTTER = 12.0
TITLE_BAND_HEIGHT = 40.0
TITLE_FONT = "Helvetica-Bold"
TITLE_FONT_SIZE = 18
ANNOTATION_FONT = "Helvetica"
ANNOTATION_FONT_SIZE = 14
ANNOTATION_PADDING = 6.0
ANNOTATION_BACKGROUND_ALPHA = 0.5


@dataclass(frozen=True)
class Box:
    """Rectangle in PDF points, origin at the bottom-left of the page."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PageLayout:
    page_width: float
    page_height: float
    photos_per_page: int
    title: str = ""
    show_title: bool = False
    margin: float = PAGE_MARGIN
    gutter: float = GUTTER

    @classmethod
    def for_project(cls, project: PDFProject) -> "PageLayout":
        width, height = landscape(letter) if project.is_landscape else letter
        return cls(
            page_width=width,
            page_height=height,
            photos_per_page=project.photos_per_page,
            title=project.title,
            show_title=project.show_title,
        )

    @property
    def is_landscape(self) -> bool:
        return self.page_width > self.page_height

    def grid(self) -> Tuple[int, int]:
        """``(columns, rows)`` for the photo grid."""
        if self.photos_per_page not in PHOTOS_PER_PAGE_CHOICES:
            raise ValueError(f"photos_per_page must be one of {PHOTOS_PER_PAGE_CHOICES}")
        if self.photos_per_page == 1:
            return 1, 1
        if self.photos_per_page == 2:
            return (2, 1) if self.is_landscape else (1, 2)
        return 2, 2


def layout_slots(layout: PageLayout, with_title: bool = False) -> List[Box]:
    """Photo boxes for one page, in reading order (left to right, top to bottom)."""
    columns, rows = layout.grid()
    top = layout.page_height - layout.margin
    if with_title:
        top -= TITLE_BAND_HEIGHT
    usable_w = layout.page_width - 2 * layout.margin
    usable_h = top - layout.margin
    cell_w = (usable_w - (columns - 1) * layout.gutter) / columns
    cell_h = (usable_h - (rows - 1) * layout.gutter) / rows

    boxes = []
    for row in range(rows):
        for col in range(columns):
            x = layout.margin + col * (cell_w + layout.gutter)
            y = top - (row + 1) * cell_h - row * layout.gutter
            boxes.append(Box(x, y, cell_w, cell_h))
    return boxes


def fit_image(box: Box, image_width: float, image_height: float) -> Box:
    """Largest box with the image's aspect ratio that fits ``box``, centred in it."""
    if image_width <= 0 or image_height <= 0:
        raise ValueError("image dimensions must be positive")
    scale = min(box.width / image_width, box.height / image_height)
    width = image_width * scale
    height = image_height * scale
    return Box(box.x + (box.width - width) / 2, box.y + (box.height - height) / 2, width, height)


def paginate(images: Sequence[Image.Image], per_page: int) -> List[Sequence[Image.Image]]:
    return [images[i : i + per_page] for i in range(0, len(images), per_page)]


def _draw_title(canvas: Canvas, layout: PageLayout) -> None:
    canvas.setFont(TITLE_FONT, TITLE_FONT_SIZE)
    baseline = layout.page_height - layout.margin - TITLE_BAND_HEIGHT / 2 - TITLE_FONT_SIZE / 3
    canvas.drawCentredString(layout.page_width / 2, baseline, layout.title)


def annotation_box(annotation: TextAnnotation) -> Box:
    """Background box of an annotation: the text extent plus padding on every side."""
    width = stringWidth(f" {annotation.text}", ANNOTATION_FONT, ANNOTATION_FONT_SIZE)
    return Box(
        annotation.x - ANNOTATION_PADDING,
        annotation.y - ANNOTATION_PADDING,
        width + 2 * ANNOTATION_PADDING,
        ANNOTATION_FONT_SIZE + 2 * ANNOTATION_PADDING,
    )


def _draw_annotation(canvas: Canvas, annotation: TextAnnotation) -> None:
    box = annotation_box(annotation)
    canvas.saveState()
    canvas.setFillColorRGB(1, 1, 1, alpha=ANNOTATION_BACKGROUND_ALPHA)
    canvas.rect(box.x, box.y, box.width, box.height, stroke=0, fill=1)
    canvas.restoreState()
    canvas.setFillColorRGB(0, 0, 0)
    canvas.setFont(ANNOTATION_FONT, ANNOTATION_FONT_SIZE)
    canvas.drawString(annotation.x, annotation.y, f" {annotation.text}")


def export_project_pdf(project: PDFProject) -> bytes:
    """Render ``project`` and return the PDF bytes.

    A project without images still yields one page, carrying the title if shown.
    Annotations pinned to a page past the last one are skipped.
    """
    layout = PageLayout.for_project(project)
    images = project.images
    pages = paginate(images, layout.photos_per_page) or [[]]

    buffer = io.BytesIO()
    canvas = Canvas(buffer, pagesize=(layout.page_width, layout.page_height))
    canvas.setTitle(project.title)

    for page_index, page_images in enumerate(pages):
        with_title = layout.show_title and page_index == 0 and bool(project.title)
        if with_title:
            _draw_title(canvas, layout)
        for box, image in zip(layout_slots(layout, with_title), page_images):
            target = fit_image(box, *image.size)
            canvas.drawImage(ImageReader(image), target.x, target.y, target.width, target.height, mask="auto")
        for annotation in project.annotations_on_page(page_index):
            _draw_annotation(canvas, annotation)
        canvas.showPage()
    canvas.save()

    skipped = sum(1 for a in project.text_annotations if a.page >= len(pages))
    if skipped:
        logger.debug("Project %s: skipped %d annotations on missing pages", project.id, skipped)
    logger.info("Exported project %s: %d images on %d pages", project.id, len(images), len(pages))
    return buffer.getvalue()
