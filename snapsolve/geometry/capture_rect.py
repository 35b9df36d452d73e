"""Capture rectangle geometry.

The capture rectangle marks the part of the camera frame that is cropped and
sent for solving. Dragging any of its four corners resizes it symmetrically
around its centre, so the corner under the finger and the opposite corner move
by the same amount. The result is clamped to a minimum size, to the vertical
band left free by the top and bottom margins, and to the side margins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class Point(BaseModel):
    """A point in screen coordinates."""

    x: float
    y: float


class Rect(BaseModel):
    """An axis-aligned rectangle in screen coordinates (origin at top-left)."""

    x: float = Field(description="Left edge")
    y: float = Field(description="Top edge")
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Point:
        return Point(x=self.mid_x, y=self.mid_y)

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y


class Corner(str, Enum):
    """Drag handle positions."""

    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


@dataclass(frozen=True)
class CaptureRectLimits:
    """Size and margin constraints for the capture rectangle, in points."""

    min_width: float = 100.0
    min_height: float = 50.0
    top_margin: float = 200.0
    bottom_margin: float = 250.0
    side_margin: float = 20.0

    def max_height(self, screen: Rect) -> float:
        return max(0.0, screen.height - self.top_margin - self.bottom_margin)

    def max_width(self, screen: Rect) -> float:
        return max(0.0, screen.width - 2 * self.side_margin)


DEFAULT_LIMITS = CaptureRectLimits()


def corner_position(rect: Rect, corner: Corner) -> Point:
    """Return the screen position of a drag handle."""
    if corner is Corner.TOP_LEFT:
        return Point(x=rect.min_x, y=rect.min_y)
    if corner is Corner.TOP_RIGHT:
        return Point(x=rect.max_x, y=rect.min_y)
    if corner is Corner.BOTTOM_LEFT:
        return Point(x=rect.min_x, y=rect.max_y)
    return Point(x=rect.max_x, y=rect.max_y)


def resize_capture_rect(
    rect: Rect,
    drag_location: Point,
    screen: Rect,
    limits: CaptureRectLimits = DEFAULT_LIMITS,
) -> Rect:
    """Resize ``rect`` so that a corner follows ``drag_location``.

    Which corner is dragged does not matter: the new half-extents are the
    absolute distances from the rectangle centre to the drag point, so the
    opposite corner mirrors the movement.

    Args:
        rect: Current capture rectangle
        drag_location: Current finger position
        screen: Screen bounds
        limits: Size and margin constraints

    Returns:
        The resized and clamped rectangle
    """
    center = rect.center
    max_available_height = limits.max_height(screen)

    delta_x = abs(drag_location.x - center.x)
    delta_y = abs(drag_location.y - center.y)

    delta_x = max(delta_x, limits.min_width / 2)
    delta_y = min(max(delta_y, limits.min_height / 2), max_available_height / 2)

    width = delta_x * 2
    height = delta_y * 2
    x = center.x - delta_x
    y = center.y - delta_y

    return Rect(
        x=max(limits.side_margin, min(x, screen.width - width - limits.side_margin)),
        y=max(limits.top_margin, min(y, screen.height - limits.bottom_margin - height)),
        width=min(width, limits.max_width(screen)),
        height=min(height, max_available_height),
    )


def default_capture_rect(
    screen: Rect,
    width_ratio: float = 0.8,
    height: float = 120.0,
    limits: CaptureRectLimits = DEFAULT_LIMITS,
) -> Rect:
    """Initial capture rectangle: centred in the free band, 80% of the screen wide."""
    width = max(limits.min_width, min(screen.width * width_ratio, screen.width - 2 * limits.side_margin))
    height = max(limits.min_height, min(height, limits.max_height(screen)))
    band_mid = limits.top_margin + limits.max_height(screen) / 2
    return Rect(x=(screen.width - width) / 2, y=band_mid - height / 2, width=width, height=height)
