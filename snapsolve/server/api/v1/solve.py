"""
Math Solver Endpoints.

Accepts a captured photo, optionally cropped to the on-screen capture
rectangle, and returns the vision model's solution segmented into Markdown
and LaTeX.
"""

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from snapsolve.geometry.capture_rect import Rect
from snapsolve.imaging.codec import ImageDecodeError, open_image
from snapsolve.server.schemas import DetectResponse, SolveResponse, SolverStatus
from snapsolve.server.services.deps import CreditStoreDep, EntitlementsDep, SolverServiceDep, VisionClientDep
from snapsolve.services.solver import CropRequest

router = APIRouter()


async def _read_image(image: UploadFile):
    data = await image.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image provided")
    try:
        return open_image(data)
    except ImageDecodeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def _crop_request(
    crop_x: Optional[float],
    crop_y: Optional[float],
    crop_width: Optional[float],
    crop_height: Optional[float],
    view_width: Optional[float],
    view_height: Optional[float],
) -> Optional[CropRequest]:
    values = (crop_x, crop_y, crop_width, crop_height, view_width, view_height)
    if all(v is None for v in values):
        return None
    if any(v is None for v in values):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Crop needs crop_x, crop_y, crop_width, crop_height, view_width and view_height",
        )
    return CropRequest(
        rect=Rect(x=crop_x, y=crop_y, width=crop_width, height=crop_height),
        view_width=view_width,
        view_height=view_height,
    )


@router.post(
    "",
    response_model=SolveResponse,
    summary="Solve Math Problem",
    description="Detect and solve the math problem in an uploaded photo. Consumes one free credit unless premium.",
    responses={
        400: {"description": "Missing or unreadable image, or crop outside the image"},
        402: {"description": "No credits left"},
        502: {"description": "Vision endpoint failure"},
    },
)
async def solve(
    service: SolverServiceDep,
    image: UploadFile = File(..., description="Captured photo"),
    crop_x: Optional[float] = Form(None),
    crop_y: Optional[float] = Form(None),
    crop_width: Optional[float] = Form(None, ge=0),
    crop_height: Optional[float] = Form(None, ge=0),
    view_width: Optional[float] = Form(None, gt=0),
    view_height: Optional[float] = Form(None, gt=0),
) -> SolveResponse:
    crop = _crop_request(crop_x, crop_y, crop_width, crop_height, view_width, view_height)
    picture = await _read_image(image)
    try:
        result = await service.solve(picture, crop)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return SolveResponse(
        text=result.text,
        segments=result.segments,
        duration=result.duration,
        remaining_credits=result.remaining_credits,
    )


@router.post(
    "/detect",
    response_model=DetectResponse,
    summary="Detect Math Content",
    description="Ask the vision model whether the photo contains solvable math. Does not use credits.",
)
async def detect(vision: VisionClientDep, image: UploadFile = File(...)) -> DetectResponse:
    picture = await _read_image(image)
    return DetectResponse(has_math=await vision.detect_math_content(picture))


@router.get("/status", response_model=SolverStatus, summary="Solver Availability")
async def solver_status(credits: CreditStoreDep, entitlements: EntitlementsDep) -> SolverStatus:
    return SolverStatus(
        can_solve=entitlements.is_premium or credits.can_use_solver(),
        is_premium=entitlements.is_premium,
        remaining_credits=credits.remaining_credits,
        credits_text=credits.display_text(),
    )
