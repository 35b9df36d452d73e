from __future__ import annotations

import json as _json
from typing import Callable, List

import httpx
import pytest
from PIL import Image

from snapsolve.clients.errors import (
    ImageTooLargeError,
    NoMathFoundError,
    PromptTooLongError,
    VisionInvalidResponseError,
    VisionInvalidURLError,
    VisionNetworkError,
    VisionServerError,
)
from snapsolve.clients.vision import DETECTION_PROMPT, SOLVE_PROMPT, VisionClient

pytestmark = pytest.mark.asyncio


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> VisionClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VisionClient("http://mock", client=http, **kwargs)


async def test_request_body_and_response(rgb_image: Image.Image) -> None:
    seen: List[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/groq-vision"
        assert request.headers["content-type"] == "application/json"
        seen.append(_json.loads(request.content))
        return httpx.Response(200, json={"responseText": "x = 2"})

    client = _client(handler)
    assert await client.perform_vision_request("describe", rgb_image) == "x = 2"

    body = seen[0]
    assert set(body) == {"prompt", "imageBase64", "mimeType"}
    assert body["prompt"] == "describe"
    assert body["mimeType"] == "image/jpeg"
    assert body["imageBase64"]


async def test_server_error_message_is_surfaced_verbatim(rgb_image: Image.Image) -> None:
    client = _client(lambda r: httpx.Response(500, json={"error": "Model overloaded"}))

    with pytest.raises(VisionServerError) as info:
        await client.perform_vision_request("p", rgb_image)

    assert info.value.message == "Model overloaded"
    assert info.value.status_code == 500
    assert info.value.user_message == "Server error: Model overloaded"


async def test_server_error_without_json_body(rgb_image: Image.Image) -> None:
    client = _client(lambda r: httpx.Response(503, text="upstream down"))

    with pytest.raises(VisionServerError) as info:
        await client.perform_vision_request("p", rgb_image)

    assert info.value.message == "Server returned status code 503. upstream down"


async def test_undecodable_success_body_is_invalid_response(rgb_image: Image.Image) -> None:
    client = _client(lambda r: httpx.Response(200, json={"unexpected": True}))

    with pytest.raises(VisionInvalidResponseError):
        await client.perform_vision_request("p", rgb_image)


async def test_transport_failure_is_network_error(rgb_image: Image.Image) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(VisionNetworkError) as info:
        await _client(handler).perform_vision_request("p", rgb_image)
    assert info.value.user_message.startswith("Network error:")


async def test_prompt_too_long_is_rejected_before_sending(rgb_image: Image.Image) -> None:
    calls = []
    client = _client(lambda r: calls.append(r) or httpx.Response(200, json={"responseText": ""}))

    with pytest.raises(PromptTooLongError):
        await client.perform_vision_request("x" * 4001, rgb_image)
    assert calls == []


async def test_image_too_large(rgb_image: Image.Image) -> None:
    client = _client(lambda r: httpx.Response(200, json={"responseText": ""}), max_image_base64_size=10)

    with pytest.raises(ImageTooLargeError):
        await client.perform_vision_request("p", rgb_image)


async def test_invalid_base_url(rgb_image: Image.Image) -> None:
    client = VisionClient("not a url", client=httpx.AsyncClient())

    with pytest.raises(VisionInvalidURLError):
        await client.perform_vision_request("p", rgb_image)
    await client.aclose()


@pytest.mark.parametrize("answer,expected", [("YES", True), (" yes\n", True), ("NO", False), ("Yes, it does", False)])
async def test_detect_math_content(rgb_image: Image.Image, answer: str, expected: bool) -> None:
    client = _client(lambda r: httpx.Response(200, json={"responseText": answer}))
    assert await client.detect_math_content(rgb_image) is expected


async def test_solve_runs_detection_then_solve_prompt(rgb_image: Image.Image) -> None:
    prompts: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        prompt = _json.loads(request.content)["prompt"]
        prompts.append(prompt)
        text = "YES" if prompt == DETECTION_PROMPT else "The answer is $x = 4$"
        return httpx.Response(200, json={"responseText": text})

    answer = await _client(handler).solve_math_problem(rgb_image)

    assert answer == "The answer is $x = 4$"
    assert prompts == [DETECTION_PROMPT, SOLVE_PROMPT]


async def test_solve_raises_when_no_math(rgb_image: Image.Image) -> None:
    client = _client(lambda r: httpx.Response(200, json={"responseText": "NO"}))

    with pytest.raises(NoMathFoundError) as info:
        await client.solve_math_problem(rgb_image)
    assert "No math problems detected" in info.value.user_message


async def test_owned_client_is_closed() -> None:
    async with VisionClient("http://mock") as client:
        inner = client._client
    assert inner.is_closed
