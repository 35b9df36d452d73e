"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
These schemas define the interface contract between the client and the server.
"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from snapsolve.billing.plans import SubscriptionPlan
from snapsolve.formatting.markdown_blocks import BlockKind
from snapsolve.formatting.tokenizer import Segment
from snapsolve.geometry.capture_rect import Corner, Point, Rect

# =====================================================================
# Solve / search
# =====================================================================


class SolveResponse(BaseModel):
    """Solution text plus its Markdown/LaTeX segmentation."""

    text: str
    segments: List[Segment]
    duration: float = Field(description="Seconds spent waiting on the vision endpoint")
    remaining_credits: Optional[int] = Field(default=None, description="None for premium users")


class DetectResponse(BaseModel):
    has_math: bool


class SolverStatus(BaseModel):
    can_solve: bool
    is_premium: bool
    remaining_credits: int
    credits_text: str


class SearchRequest(BaseModel):
    query: str = Field(..., description="Search text", examples=["speed of light in vacuum"])


class SourceLink(BaseModel):
    label: str
    url: str


class SearchResponse(BaseModel):
    query: str
    output: str
    cleaned_output: str
    source: Optional[SourceLink] = None
    saved_to_history: bool


class SearchHistoryRead(BaseModel):
    id: str
    query: str
    result: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================================
# Projects
# =====================================================================


class ProjectCreate(BaseModel):
    """Project fields; images are added through the image endpoints."""

    title: str = Field(..., min_length=1, max_length=255)
    is_landscape: bool = False
    photos_per_page: Literal[1, 2, 4] = 1
    show_title: bool = True


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_landscape: Optional[bool] = None
    photos_per_page: Optional[Literal[1, 2, 4]] = None
    show_title: Optional[bool] = None


class ImageMove(BaseModel):
    source: int = Field(..., ge=0)
    destination: int = Field(..., ge=0)


class ProjectRead(BaseModel):
    id: str
    title: str
    created_date: datetime
    modified_date: datetime
    is_landscape: bool
    photos_per_page: int
    show_title: bool
    image_count: int
    has_modified_images: bool
    modified_images: List[int] = Field(default_factory=list, description="Indices of edited images")
    page_count: int = 1
    annotation_count: int = 0


class ProjectImages(BaseModel):
    images: List[str] = Field(description="Base64 JPEG data")
    original_images: Optional[List[str]] = None


class AnnotationCreate(BaseModel):
    page: int = Field(..., ge=0, description="Zero-based page index")
    x: float = Field(..., description="Left edge of the text, in points from the page left")
    y: float = Field(..., description="Text baseline, in points from the page bottom")
    text: str = Field(..., min_length=1, max_length=1000)


class AnnotationUpdate(BaseModel):
    """Edit the text, move the annotation, or both."""

    text: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    x: Optional[float] = None
    y: Optional[float] = None


class AnnotationRead(BaseModel):
    id: str
    page: int
    x: float
    y: float
    text: str

    model_config = ConfigDict(from_attributes=True)


# =====================================================================
# Usage / credits / languages
# =====================================================================


class UsageRead(BaseModel):
    id: int
    timestamp: datetime
    duration: float

    model_config = ConfigDict(from_attributes=True)


class UsageSummary(BaseModel):
    count: int
    total_duration: float
    entries: List[UsageRead]


class CreditsRead(BaseModel):
    remaining_credits: int
    has_credits: bool
    display_text: str


class CreditsAdd(BaseModel):
    amount: int = Field(..., ge=0)


class LanguageRead(BaseModel):
    code: str
    english_name: str
    native_name: str


class LanguageUpdate(BaseModel):
    code: str


# =====================================================================
# Billing
# =====================================================================


class PlanRead(BaseModel):
    plan: SubscriptionPlan
    product_id: str
    display_name: str
    price_text: str
    is_best_value: bool = False


class PlansResponse(BaseModel):
    plans: List[PlanRead]
    products_loaded: bool
    annual_equivalent_of_weekly: Optional[str] = None
    savings_percent: Optional[int] = None
    monthly_equivalent_of_yearly: Optional[str] = None


class PurchaseRequest(BaseModel):
    plan: SubscriptionPlan = SubscriptionPlan.YEARLY


class AlertResponse(BaseModel):
    kind: str
    title: str
    message: str
    is_premium: bool


class EntitlementStatus(BaseModel):
    is_premium: bool
    active_plan: Optional[SubscriptionPlan] = None
    did_check_premium: bool
    listening: bool


# =====================================================================
# Formatting
# =====================================================================


class FormatRequest(BaseModel):
    text: str


class InlineRunRead(BaseModel):
    type: Literal["inline"] = "inline"
    segments: List[Segment]


class BlockMathRead(BaseModel):
    type: Literal["block"] = "block"
    segment: Segment


class MarkdownBlockRead(BaseModel):
    kind: BlockKind
    level: Optional[int] = None
    lines: List[str]


class FormatResponse(BaseModel):
    segments: List[Segment]
    layout: List[Union[InlineRunRead, BlockMathRead]]
    blocks: List[MarkdownBlockRead]


# =====================================================================
# Capture geometry
# =====================================================================


class ScreenRequest(BaseModel):
    screen: Rect


class ResizeRequest(BaseModel):
    rect: Rect
    drag_location: Point
    screen: Rect


class CornersResponse(BaseModel):
    rect: Rect
    corners: dict[Corner, Point]


class ScanPlanRequest(BaseModel):
    rect: Rect
    seed: Optional[int] = None


class ScanPlanResponse(BaseModel):
    dots: List[Point]
    phases: List[float]
    scan_start_offset: float
    scan_end_offset: float
    sweep_duration: float
    dots_reveal_delay: float
    pop_in_duration: float
