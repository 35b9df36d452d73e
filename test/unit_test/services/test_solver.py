from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from typing import Callable, List
from unittest.mock import AsyncMock

import httpx
import pytest
from PIL import Image
from sqlalchemy.exc import OperationalError

from snapsolve.billing.credits import CreditStore
from snapsolve.clients.errors import NoMathFoundError
from snapsolve.clients.search import SearchClient
from snapsolve.clients.vision import DETECTION_PROMPT, VisionClient
from snapsolve.formatting.tokenizer import SegmentKind
from snapsolve.geometry.capture_rect import Rect
from snapsolve.imaging.codec import decode_base64_image
from snapsolve.services.solver import (
    NO_CREDITS_MESSAGE,
    CropRequest,
    EmptyQueryError,
    MathSolverService,
    NoCreditsError,
    SearchService,
    ServiceError,
)
from snapsolve.settings.preferences import PreferencesStore

pytestmark = pytest.mark.asyncio

SOLUTION = "The answer is $x = 2$."


def _vision(answer: str = SOLUTION, detect: str = "YES", seen: List[dict] | None = None) -> VisionClient:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if seen is not None:
            seen.append(body)
        text = detect if body["prompt"] == DETECTION_PROMPT else answer
        return httpx.Response(200, json={"responseText": text})

    return VisionClient("http://mock", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def _search(handler: Callable[[httpx.Request], httpx.Response]) -> SearchClient:
    return SearchClient("http://mock", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.fixture
def credits() -> CreditStore:
    return CreditStore(PreferencesStore(), initial_credits=1)


@pytest.fixture
def usage() -> AsyncMock:
    return AsyncMock()


class TestMathSolverService:
    async def test_solve_consumes_a_credit(self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock) -> None:
        service = MathSolverService(_vision(), credits, usage)

        result = await service.solve(rgb_image)

        assert result.text == SOLUTION
        assert result.remaining_credits == 0
        assert any(segment.kind is SegmentKind.INLINE_MATH for segment in result.segments)
        usage.append.assert_awaited_once()
        assert credits.remaining_credits == 0

    async def test_no_credits(self, rgb_image: Image.Image, usage: AsyncMock) -> None:
        service = MathSolverService(_vision(), CreditStore(PreferencesStore(), initial_credits=0), usage)
        assert not service.can_solve()

        with pytest.raises(NoCreditsError) as info:
            await service.solve(rgb_image)
        assert info.value.user_message == NO_CREDITS_MESSAGE
        usage.append.assert_not_awaited()

    async def test_premium_solves_without_credits(self, rgb_image: Image.Image, usage: AsyncMock) -> None:
        credits = CreditStore(PreferencesStore(), initial_credits=0)
        service = MathSolverService(_vision(), credits, usage, SimpleNamespace(is_premium=True))

        result = await service.solve(rgb_image)

        assert result.remaining_credits is None
        assert credits.remaining_credits == 0

    async def test_vision_failure_keeps_credit(self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock) -> None:
        service = MathSolverService(_vision(detect="NO"), credits, usage)

        with pytest.raises(ServiceError) as info:
            await service.solve(rgb_image)

        assert info.value.user_message == NoMathFoundError().user_message
        assert credits.remaining_credits == 1
        usage.append.assert_not_awaited()

    async def test_empty_answer_is_not_suitable(self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock) -> None:
        service = MathSolverService(_vision(answer="   "), credits, usage)
        with pytest.raises(ServiceError) as info:
            await service.solve(rgb_image)
        assert "suitable" in info.value.user_message
        assert credits.remaining_credits == 1

    async def test_usage_failure_does_not_fail_solve(
        self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock
    ) -> None:
        usage.append.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        result = await MathSolverService(_vision(), credits, usage).solve(rgb_image)
        assert result.text == SOLUTION

    async def test_crop_is_applied_before_upload(
        self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock
    ) -> None:
        seen: List[dict] = []
        service = MathSolverService(_vision(seen=seen), credits, usage)
        crop = CropRequest(rect=Rect(x=0, y=0, width=32, height=24), view_width=64, view_height=48)

        await service.solve(rgb_image, crop)

        uploaded = decode_base64_image(seen[0]["imageBase64"])
        assert uploaded is not None
        assert uploaded.size == (32, 24)

    async def test_concurrent_solves_share_one_credit(
        self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock
    ) -> None:
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.05)
            body = json.loads(request.content)
            text = "YES" if body["prompt"] == DETECTION_PROMPT else SOLUTION
            return httpx.Response(200, json={"responseText": text})

        vision = VisionClient("http://mock", client=httpx.AsyncClient(transport=httpx.MockTransport(slow_handler)))
        service = MathSolverService(vision, credits, usage)

        results = await asyncio.gather(service.solve(rgb_image), service.solve(rgb_image), return_exceptions=True)

        solved = [r for r in results if not isinstance(r, BaseException)]
        refused = [r for r in results if isinstance(r, NoCreditsError)]
        assert len(solved) == 1
        assert len(refused) == 1
        assert credits.remaining_credits == 0

    async def test_bad_crop_returns_reserved_credit(
        self, rgb_image: Image.Image, credits: CreditStore, usage: AsyncMock
    ) -> None:
        service = MathSolverService(_vision(), credits, usage)
        crop = CropRequest(rect=Rect(x=500, y=500, width=10, height=10), view_width=64, view_height=48)

        with pytest.raises(ValueError):
            await service.solve(rgb_image, crop)
        assert credits.remaining_credits == 1


class TestSearchService:
    async def test_search_saves_history_and_extracts_source(self) -> None:
        output = "Light travels at about 300,000 km/s ([Wikipedia](https://en.wikipedia.org/wiki/Light))."
        history = AsyncMock()
        history.add_item.return_value = object()
        service = SearchService(_search(lambda r: httpx.Response(200, json={"output": output})), history)

        result = await service.search("  speed of light  ")

        assert result.query == "speed of light"
        assert result.output == output
        assert result.saved
        assert result.source == ("Wikipedia", "https://en.wikipedia.org/wiki/Light")
        history.add_item.assert_awaited_once_with("speed of light", output)

    async def test_duplicate_query_not_saved(self) -> None:
        history = AsyncMock()
        history.add_item.return_value = None
        service = SearchService(_search(lambda r: httpx.Response(200, json={"output": "ok"})), history)
        result = await service.search("q")
        assert not result.saved
        assert result.source is None

    async def test_empty_query_rejected(self) -> None:
        history = AsyncMock()
        service = SearchService(_search(lambda r: httpx.Response(200, json={"output": "ok"})), history)
        with pytest.raises(EmptyQueryError):
            await service.search("   ")
        history.add_item.assert_not_awaited()

    async def test_search_failure_maps_to_service_error(self) -> None:
        history = AsyncMock()
        service = SearchService(_search(lambda r: httpx.Response(503, json={"error": "Upstream down"})), history)
        with pytest.raises(ServiceError) as info:
            await service.search("q")
        assert "Upstream down" in info.value.user_message
        history.add_item.assert_not_awaited()
