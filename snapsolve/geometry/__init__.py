"""
Screen-space geometry for the camera capture flow.

- ``capture_rect``: the user-adjustable crop rectangle and its mirrored resize.
- ``scan_dots``: dot placement and timing for the scan overlay shown while solving.
"""

from .capture_rect import (
    CaptureRectLimits,
    Corner,
    Point,
    Rect,
    corner_position,
    default_capture_rect,
    resize_capture_rect,
)
from .scan_dots import ScanAnimationPlan, dot_count, generate_dot_positions, usable_rect

__all__ = [
    "CaptureRectLimits",
    "Corner",
    "Point",
    "Rect",
    "ScanAnimationPlan",
    "corner_position",
    "default_capture_rect",
    "dot_count",
    "generate_dot_positions",
    "resize_capture_rect",
    "usable_rect",
]
