from __future__ import annotations

import pytest

from snapsolve.geometry.capture_rect import (
    CaptureRectLimits,
    Corner,
    Point,
    Rect,
    corner_position,
    default_capture_rect,
    resize_capture_rect,
)

SCREEN = Rect(x=0, y=0, width=390, height=844)


@pytest.fixture
def rect() -> Rect:
    # centred on (195, 400)
    return Rect(x=95, y=340, width=200, height=120)


def test_rect_accessors(rect: Rect) -> None:
    assert (rect.min_x, rect.max_x, rect.mid_x) == (95, 295, 195)
    assert (rect.min_y, rect.max_y, rect.mid_y) == (340, 460, 400)
    assert rect.center == Point(x=195, y=400)
    assert rect.area == 24000
    assert rect.contains(Point(x=100, y=400))
    assert not rect.contains(Point(x=10, y=400))


@pytest.mark.parametrize(
    "corner,expected",
    [
        (Corner.TOP_LEFT, (95, 340)),
        (Corner.TOP_RIGHT, (295, 340)),
        (Corner.BOTTOM_LEFT, (95, 460)),
        (Corner.BOTTOM_RIGHT, (295, 460)),
    ],
)
def test_corner_position(rect: Rect, corner: Corner, expected: tuple) -> None:
    p = corner_position(rect, corner)
    assert (p.x, p.y) == expected


def test_drag_below_minimum_clamps_to_minimum_half_size(rect: Rect) -> None:
    limits = CaptureRectLimits()
    resized = resize_capture_rect(rect, Point(x=200, y=405), SCREEN, limits)

    assert resized.width / 2 == limits.min_width / 2
    assert resized.height / 2 == limits.min_height / 2
    assert resized.center == rect.center


def test_drag_is_mirrored_around_center(rect: Rect) -> None:
    from_top_left = resize_capture_rect(rect, Point(x=75, y=330), SCREEN)
    from_bottom_right = resize_capture_rect(rect, Point(x=315, y=470), SCREEN)

    assert from_top_left == from_bottom_right
    assert from_top_left.width == 240
    assert from_top_left.height == 140
    assert from_top_left.center == rect.center


def test_drag_far_outside_is_clamped_to_margins(rect: Rect) -> None:
    limits = CaptureRectLimits()
    resized = resize_capture_rect(rect, Point(x=495, y=700), SCREEN, limits)

    assert resized.x == limits.side_margin
    assert resized.width == SCREEN.width - 2 * limits.side_margin
    assert resized.y == limits.top_margin
    assert resized.height == limits.max_height(SCREEN) == 394


def test_resize_keeps_rect_inside_free_band() -> None:
    limits = CaptureRectLimits()
    near_bottom = Rect(x=95, y=560, width=200, height=60)
    resized = resize_capture_rect(near_bottom, Point(x=300, y=640), SCREEN, limits)

    assert resized.max_y <= SCREEN.height - limits.bottom_margin
    assert resized.min_y >= limits.top_margin


def test_default_capture_rect_is_centred() -> None:
    limits = CaptureRectLimits()
    rect = default_capture_rect(SCREEN)

    assert rect.width == pytest.approx(312)
    assert rect.height == 120
    assert rect.mid_x == pytest.approx(SCREEN.width / 2)
    assert rect.mid_y == pytest.approx(limits.top_margin + limits.max_height(SCREEN) / 2)


def test_rect_rejects_negative_size() -> None:
    with pytest.raises(ValueError):
        Rect(x=0, y=0, width=-1, height=10)


def test_resize_on_screen_shorter_than_margins_collapses_height(rect: Rect) -> None:
    limits = CaptureRectLimits()
    short_screen = Rect(x=0, y=0, width=390, height=400)
    assert limits.max_height(short_screen) == 0

    resized = resize_capture_rect(rect, Point(x=300, y=450), short_screen, limits)

    assert resized.height == 0
    assert resized.y == limits.top_margin
    assert resized.width == 210


def test_resize_on_screen_narrower_than_side_margins() -> None:
    narrow = Rect(x=0, y=0, width=30, height=844)
    resized = resize_capture_rect(Rect(x=0, y=300, width=20, height=60), Point(x=100, y=330), narrow)
    assert resized.width == 0
