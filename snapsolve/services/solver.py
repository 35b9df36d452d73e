"""Solve and search use cases.

These glue the proxy clients to credits, entitlements and persistence. The
server builds one service per request because the repositories are bound to
the request's database session.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from PIL import Image
from sqlalchemy.exc import SQLAlchemyError

from snapsolve.billing.credits import CreditStore
from snapsolve.billing.entitlements import EntitlementManager
from snapsolve.clients.errors import ImageContentNotSuitableError, SearchError, VisionError
from snapsolve.clients.search import SearchClient
from snapsolve.clients.vision import VisionClient
from snapsolve.core.database.repositories.search_history import SearchHistoryRepository
from snapsolve.core.database.repositories.usage import UsageRepository
from snapsolve.formatting.sources import extract_source
from snapsolve.formatting.tokenizer import Segment, tokenize_math
from snapsolve.geometry.capture_rect import Rect
from snapsolve.imaging.codec import crop_to_capture_rect

logger = logging.getLogger(__name__)

NO_CREDITS_MESSAGE = "You have no free solves left. Upgrade to PRO for unlimited solving."


class ServiceError(Exception):
    """A use-case failure carrying the message shown to the user."""

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


class NoCreditsError(ServiceError):
    def __init__(self) -> None:
        super().__init__(NO_CREDITS_MESSAGE)


class EmptyQueryError(ServiceError):
    def __init__(self) -> None:
        super().__init__("Please enter a search query.")


@dataclass(frozen=True)
class CropRequest:
    """Capture rectangle plus the size of the view it was drawn on."""

    rect: Rect
    view_width: float
    view_height: float


@dataclass(frozen=True)
class SolveResult:
    text: str
    segments: List[Segment] = field(default_factory=list)
    duration: float = 0.0
    remaining_credits: Optional[int] = None


@dataclass(frozen=True)
class SearchResult:
    query: str
    output: str
    source: Optional[Tuple[str, str]] = None
    saved: bool = False


class MathSolverService:
    """Credit-gated math solving."""

    def __init__(
        self,
        vision: VisionClient,
        credits: CreditStore,
        usage: UsageRepository,
        entitlements: Optional[EntitlementManager] = None,
    ) -> None:
        self.vision = vision
        self.credits = credits
        self.usage = usage
        self.entitlements = entitlements

    @property
    def is_premium(self) -> bool:
        return self.entitlements is not None and self.entitlements.is_premium

    def can_solve(self) -> bool:
        return self.is_premium or self.credits.can_use_solver()

    async def solve(self, image: Image.Image, crop: Optional[CropRequest] = None) -> SolveResult:
        """Crop ``image``, solve it and record the run.

        Non-premium callers reserve one credit before the vision requests
        start. The credit is given back when the solve fails, so concurrent
        requests can never spend more credits than remain.

        Raises:
            NoCreditsError: no credits left and not premium
            ServiceError: the vision request failed; carries its user message
            ValueError: the crop rectangle does not fit the image
        """
        reserved = False
        if not self.is_premium:
            if not self.credits.use_credit():
                raise NoCreditsError()
            reserved = True

        started = time.monotonic()
        try:
            text = await self._solve_image(image, crop)
        except BaseException:
            if reserved:
                self.credits.add_credits(1)
                logger.info("MathSolverService.solve: refunded reserved credit")
            raise
        duration = time.monotonic() - started

        try:
            await self.usage.append(duration)
        except SQLAlchemyError as e:
            logger.error("Failed to record usage: %s", e, exc_info=True)

        remaining = self.credits.remaining_credits if reserved else None
        logger.info("MathSolverService.solve: solved in %.2fs", duration)
        return SolveResult(text=text, segments=tokenize_math(text), duration=duration, remaining_credits=remaining)

    async def _solve_image(self, image: Image.Image, crop: Optional[CropRequest]) -> str:
        if crop is not None:
            image = crop_to_capture_rect(image, crop.rect, crop.view_width, crop.view_height)
        try:
            text = await self.vision.solve_math_problem(image)
            if not text.strip():
                raise ImageContentNotSuitableError()
        except VisionError as e:
            logger.warning("MathSolverService.solve: %s", e)
            raise ServiceError(e.user_message) from e
        return text


class SearchService:
    """Web search with de-duplicated history."""

    def __init__(self, search_client: SearchClient, history: SearchHistoryRepository) -> None:
        self.search_client = search_client
        self.history = history

    async def search(self, query: str) -> SearchResult:
        query = query.strip()
        if not query:
            raise EmptyQueryError()
        try:
            output = await self.search_client.search(query)
        except SearchError as e:
            logger.warning("SearchService.search: %s", e)
            raise ServiceError(e.user_message) from e
        item = await self.history.add_item(query, output)
        return SearchResult(query=query, output=output, source=extract_source(output), saved=item is not None)
