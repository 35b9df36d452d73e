from __future__ import annotations

import io
import os
from typing import Iterable

import httpx
import pytest
from PIL import Image

# Keep the module-level engine and preferences away from the working directory
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SNAPSOLVE_PROXY_BASE_URL", "http://mock")


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


@pytest.fixture
def rgb_image() -> Image.Image:
    """A 64x48 test image with a left/right colour split."""
    image = Image.new("RGB", (64, 48), (255, 255, 255))
    for x in range(32):
        for y in range(48):
            image.putpixel((x, y), (20, 40, 200))
    return image


@pytest.fixture
def jpeg_bytes(rgb_image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    rgb_image.save(buffer, format="JPEG")
    return buffer.getvalue()
