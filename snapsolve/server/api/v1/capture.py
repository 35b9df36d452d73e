"""
Capture Geometry Endpoints.

Server-side versions of the capture rectangle math and the scan overlay
plan, for clients that do not implement them locally.
"""

import random

from fastapi import APIRouter

from snapsolve.geometry.capture_rect import Corner, corner_position, default_capture_rect, resize_capture_rect
from snapsolve.geometry.scan_dots import ScanAnimationPlan
from snapsolve.server.schemas import CornersResponse, ResizeRequest, ScanPlanRequest, ScanPlanResponse, ScreenRequest

router = APIRouter()


def _corners(rect) -> CornersResponse:
    return CornersResponse(rect=rect, corners={corner: corner_position(rect, corner) for corner in Corner})


@router.post("/default", response_model=CornersResponse, summary="Initial Capture Rectangle")
async def default_rect(request: ScreenRequest) -> CornersResponse:
    return _corners(default_capture_rect(request.screen))


@router.post("/resize", response_model=CornersResponse, summary="Resize Capture Rectangle")
async def resize(request: ResizeRequest) -> CornersResponse:
    return _corners(resize_capture_rect(request.rect, request.drag_location, request.screen))


@router.post("/scan-plan", response_model=ScanPlanResponse, summary="Scan Overlay Plan")
async def scan_plan(request: ScanPlanRequest) -> ScanPlanResponse:
    plan = ScanAnimationPlan.for_rect(request.rect, random.Random(request.seed))
    return ScanPlanResponse(
        dots=plan.dots,
        phases=plan.phases,
        scan_start_offset=plan.scan_start_offset,
        scan_end_offset=plan.scan_end_offset,
        sweep_duration=plan.sweep_duration,
        dots_reveal_delay=plan.dots_reveal_delay,
        pop_in_duration=plan.pop_in_duration,
    )
