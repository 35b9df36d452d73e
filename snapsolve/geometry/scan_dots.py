"""Scan overlay dot placement.

While a cropped image is being solved, a scan line sweeps across the capture
rectangle and then pulsing dots appear inside it. The dots are placed by
rejection sampling so they look evenly spread: a candidate is accepted only if
it keeps a minimum distance to every dot already accepted.

Sampling is bounded by an attempt cap. When the cap is hit before enough
spaced dots were found, the remaining slots are filled with unconstrained
random points, so callers always receive exactly ``count`` positions.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional

from .capture_rect import Point, Rect

DOT_DENSITY = 0.00025
MIN_DOTS = 16
MAX_DOTS = 50

MIN_HEIGHT_FOR_PADDING = 60.0
BASE_PADDING = 5.0
ADDITIONAL_PADDING_FACTOR = 0.1
DEFAULT_HEIGHT = 120.0
SPACING_FACTOR = 0.7
ATTEMPTS_PER_DOT = 100

TWO_PI = math.pi * 2


def dot_count(rect: Rect) -> int:
    """Number of dots for a capture rectangle, proportional to its area."""
    return min(max(MIN_DOTS, int(rect.area * DOT_DENSITY)), MAX_DOTS)


def usable_rect(rect: Rect) -> Rect:
    """Inset ``rect`` by a padding that grows with its height."""
    height_above_min = max(0.0, rect.height - MIN_HEIGHT_FOR_PADDING)
    padding = BASE_PADDING + height_above_min * ADDITIONAL_PADDING_FACTOR
    padding = min(padding, min(rect.width, rect.height) / 3.0)
    return Rect(
        x=rect.x + padding,
        y=rect.y + padding,
        width=rect.width - padding * 2,
        height=rect.height - padding * 2,
    )


def min_spacing(rect: Rect, usable: Rect, count: int) -> float:
    height_factor = min(1.0, rect.height / DEFAULT_HEIGHT)
    spacing_modifier = height_factor * 0.4 + 0.6
    return math.sqrt(usable.area / count) * SPACING_FACTOR * spacing_modifier


def _random_point(area: Rect, rng: random.Random) -> Point:
    return Point(x=rng.uniform(area.min_x, area.max_x), y=rng.uniform(area.min_y, area.max_y))


def generate_dot_positions(
    rect: Rect,
    count: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Point]:
    """Place ``count`` dots inside the padded capture rectangle.

    Two of the dots are fixed anchors at the left and right middle of the
    usable area; the rest are sampled.

    Args:
        rect: Capture rectangle
        count: Number of dots, defaults to ``dot_count(rect)``
        rng: Random source, injectable for deterministic tests

    Returns:
        Exactly ``count`` points, all inside ``usable_rect(rect)``
    """
    rng = rng or random.Random()
    if count is None:
        count = dot_count(rect)
    if count <= 0:
        return []

    usable = usable_rect(rect)
    spacing = min_spacing(rect, usable, count)
    max_attempts = count * ATTEMPTS_PER_DOT
    to_sample = max(0, count - 2)

    positions: List[Point] = []
    attempts = 0
    while len(positions) < to_sample and attempts < max_attempts:
        candidate = _random_point(usable, rng)
        if all(math.hypot(candidate.x - p.x, candidate.y - p.y) >= spacing for p in positions):
            positions.append(candidate)
        attempts += 1

    if count >= 2:
        positions.append(Point(x=usable.min_x, y=usable.mid_y))
        positions.append(Point(x=usable.max_x, y=usable.mid_y))

    while len(positions) < count:
        positions.append(_random_point(usable, rng))

    return positions


def animation_phases(count: int, rng: Optional[random.Random] = None) -> List[float]:
    """Random starting phase in [0, 2π) for each dot's pulse."""
    rng = rng or random.Random()
    return [rng.uniform(0.0, TWO_PI) % TWO_PI for _ in range(count)]


def advance_phase(phase: float, step: float = 0.1, speed: float = 1.2) -> float:
    """Advance a pulse phase by one frame, wrapping at 2π."""
    phase += step / speed
    if phase > TWO_PI:
        phase -= TWO_PI
    return phase


def pulse_scale(base_scale: float, phase: float) -> float:
    return base_scale * (1.0 + 0.3 * abs(math.sin(phase)))


@dataclass(frozen=True)
class ScanAnimationPlan:
    """Timeline of the scan overlay for one capture rectangle."""

    rect: Rect
    dots: List[Point]
    phases: List[float]
    scan_line_width: float = 4.0
    sweep_duration: float = 0.4
    dots_reveal_delay: float = 0.5
    pop_in_duration: float = 0.3
    frame_interval: float = 0.016

    @classmethod
    def for_rect(cls, rect: Rect, rng: Optional[random.Random] = None) -> "ScanAnimationPlan":
        rng = rng or random.Random()
        dots = generate_dot_positions(rect, rng=rng)
        return cls(rect=rect, dots=dots, phases=animation_phases(len(dots), rng))

    @property
    def scan_start_offset(self) -> float:
        return -self.scan_line_width / 2

    @property
    def scan_end_offset(self) -> float:
        return self.rect.width + self.scan_line_width / 2

    def scan_line_x(self, elapsed: float) -> float:
        """Horizontal position of the scan line ``elapsed`` seconds into the sweep."""
        progress = min(max(elapsed / self.sweep_duration, 0.0), 1.0)
        offset = self.scan_start_offset + (self.scan_end_offset - self.scan_start_offset) * progress
        return self.rect.x + offset
