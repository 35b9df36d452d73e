from __future__ import annotations

import httpx
import pytest

from snapsolve.clients.errors import NoMathFoundError
from snapsolve.imaging.codec import decode_base64_image
from snapsolve.services.solver import NO_CREDITS_MESSAGE

pytestmark = pytest.mark.asyncio

SOLVE_URL = "/api/v1/solve"


def _files(data: bytes) -> dict:
    return {"image": ("photo.jpg", data, "image/jpeg")}


async def test_solve_returns_segments_and_uses_credit(client: httpx.AsyncClient, jpeg_bytes: bytes) -> None:
    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes))

    assert r.status_code == 200
    body = r.json()
    assert body["text"] == "So $$x^2 = 4$$ and $x = 2$."
    assert [s["kind"] for s in body["segments"]] == ["markdown", "block_math", "markdown", "inline_math", "markdown"]
    assert body["remaining_credits"] == 1

    usage = (await client.get("/api/v1/usage")).json()
    assert usage["count"] == 1
    assert len(usage["entries"]) == 1


async def test_solve_without_credits_is_payment_required(client: httpx.AsyncClient, jpeg_bytes: bytes) -> None:
    for _ in range(2):
        assert (await client.post(SOLVE_URL, files=_files(jpeg_bytes))).status_code == 200

    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes))
    assert r.status_code == 402
    assert r.json()["detail"] == NO_CREDITS_MESSAGE

    status = (await client.get(f"{SOLVE_URL}/status")).json()
    assert status == {"can_solve": False, "is_premium": False, "remaining_credits": 0, "credits_text": "No credits"}


async def test_premium_solve_keeps_credits(client: httpx.AsyncClient, jpeg_bytes: bytes) -> None:
    assert (await client.post("/api/v1/billing/purchase", json={"plan": "weekly.infofinder"})).json()["is_premium"]

    body = (await client.post(SOLVE_URL, files=_files(jpeg_bytes))).json()
    assert body["remaining_credits"] is None
    assert (await client.get("/api/v1/credits")).json()["remaining_credits"] == 2


async def test_solve_with_crop(client: httpx.AsyncClient, proxy, jpeg_bytes: bytes) -> None:
    data = {"crop_x": "0", "crop_y": "0", "crop_width": "32", "crop_height": "24", "view_width": "64", "view_height": "48"}
    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes), data=data)

    assert r.status_code == 200
    uploaded = decode_base64_image(proxy.requests[0]["imageBase64"])
    assert uploaded.size == (32, 24)


async def test_partial_crop_is_rejected(client: httpx.AsyncClient, jpeg_bytes: bytes) -> None:
    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes), data={"crop_x": "10"})
    assert r.status_code == 422


@pytest.mark.parametrize(
    "field, value",
    [("crop_width", "-5"), ("crop_height", "-1"), ("view_width", "0"), ("view_height", "-48")],
)
async def test_negative_crop_size_is_rejected(
    client: httpx.AsyncClient, jpeg_bytes: bytes, field: str, value: str
) -> None:
    data = {"crop_x": "0", "crop_y": "0", "crop_width": "32", "crop_height": "24", "view_width": "64", "view_height": "48"}
    data[field] = value

    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes), data=data)

    assert r.status_code == 422
    assert (await client.get("/api/v1/credits")).json()["remaining_credits"] == 2


async def test_crop_outside_image_is_bad_request(client: httpx.AsyncClient, jpeg_bytes: bytes) -> None:
    data = {"crop_x": "500", "crop_y": "0", "crop_width": "10", "crop_height": "10", "view_width": "64", "view_height": "48"}
    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes), data=data)
    assert r.status_code == 400


async def test_unreadable_image(client: httpx.AsyncClient) -> None:
    r = await client.post(SOLVE_URL, files=_files(b"definitely not a jpeg"))
    assert r.status_code == 400


async def test_no_math_detected_keeps_credit(client: httpx.AsyncClient, proxy, jpeg_bytes: bytes) -> None:
    proxy.detect_text = "NO"
    r = await client.post(SOLVE_URL, files=_files(jpeg_bytes))

    assert r.status_code == 502
    assert r.json()["detail"] == NoMathFoundError().user_message
    assert (await client.get("/api/v1/credits")).json()["remaining_credits"] == 2


async def test_detect(client: httpx.AsyncClient, proxy, jpeg_bytes: bytes) -> None:
    r = await client.post(f"{SOLVE_URL}/detect", files=_files(jpeg_bytes))
    assert r.json() == {"has_math": True}
    assert len(proxy.requests) == 1

    proxy.status_code = 503
    r = await client.post(f"{SOLVE_URL}/detect", files=_files(jpeg_bytes))
    assert r.status_code == 502
    assert r.json()["error_type"] == "VisionServerError"
    assert r.json()["detail"] == "Server error: Upstream unavailable"
