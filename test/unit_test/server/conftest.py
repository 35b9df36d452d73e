"""Fixtures for API tests.

The app is built with ``create_app`` and its ``app.state`` is populated by
hand, so no lifespan runs: the database is an in-memory SQLite engine and the
proxy clients talk to an ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import AsyncGenerator, List

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from snapsolve.billing.credits import CreditStore
from snapsolve.billing.entitlements import EntitlementManager, LocalStoreBackend
from snapsolve.clients.search import SearchClient
from snapsolve.clients.vision import DETECTION_PROMPT, VisionClient
from snapsolve.core.database import entities  # noqa: F401
from snapsolve.core.database.utils import create_sessionmaker
from snapsolve.server.main import create_app
from snapsolve.settings.languages import LanguageSettings
from snapsolve.settings.preferences import PreferencesStore


@dataclass
class ProxyStub:
    """Scripted answers of the remote proxy."""

    detect_text: str = "YES"
    solve_text: str = "So $$x^2 = 4$$ and $x = 2$."
    search_output: str = "Paris is the capital of France ([Britannica](https://www.britannica.com/place/Paris))."
    status_code: int = 200
    requests: List[dict] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "Upstream unavailable"})
        if request.url.path == "/search":
            return httpx.Response(200, json={"output": self.search_output})
        text = self.detect_text if body["prompt"] == DETECTION_PROMPT else self.solve_text
        return httpx.Response(200, json={"responseText": text})


@pytest.fixture
def proxy() -> ProxyStub:
    return ProxyStub()


@pytest.fixture
async def app(proxy: ProxyStub) -> AsyncGenerator[FastAPI, None]:
    application = create_app()

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    application.state.session_maker = create_sessionmaker(engine)

    http = httpx.AsyncClient(transport=httpx.MockTransport(proxy.handler))
    application.state.vision_client = VisionClient("http://mock", client=http)
    application.state.search_client = SearchClient("http://mock", client=http)

    preferences = PreferencesStore()
    application.state.preferences = preferences
    application.state.credits = CreditStore(preferences, initial_credits=2)
    application.state.languages = LanguageSettings(preferences)

    entitlements = EntitlementManager(LocalStoreBackend.from_plan_prices("$2.99", "$29.99", purchases_enabled=True))
    await entitlements.fetch_products()
    application.state.entitlements = entitlements

    try:
        yield application
    finally:
        await entitlements.stop_listener()
        await http.aclose()
        await engine.dispose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://localhost") as ac:
        yield ac
