from __future__ import annotations

from pathlib import Path

import pytest

from snapsolve.billing.plans import SubscriptionPlan
from snapsolve.server.core.config import Settings
from snapsolve.server.main import create_app

pytestmark = pytest.mark.asyncio


async def test_lifespan_builds_and_tears_down_state(tmp_path: Path) -> None:
    prefs = tmp_path / "prefs.json"
    config = Settings(SNAPSOLVE_PREFERENCES_PATH=str(prefs), SNAPSOLVE_INITIAL_CREDITS=3, SNAPSOLVE_WEEKLY_PRICE="€3.49")
    app = create_app(config)

    async with app.router.lifespan_context(app):
        entitlements = app.state.entitlements
        assert app.state.credits.remaining_credits == 3
        assert app.state.languages.source_language == "en"
        assert entitlements.listening
        assert entitlements.did_check_premium
        assert entitlements.price_text(SubscriptionPlan.WEEKLY) == "€3.49"
        assert app.state.vision_client.base_url == "http://mock"
        assert await entitlements.purchase(SubscriptionPlan.WEEKLY) is False
        assert not entitlements.is_premium
        app.state.credits.use_credit()

    assert not entitlements.listening
    assert '"remaining_credits": 2' in prefs.read_text(encoding="utf-8")


async def test_routes_are_mounted_under_api_prefix() -> None:
    paths = set(create_app().openapi()["paths"])
    assert {
        "/health",
        "/api/v1/solve",
        "/api/v1/search",
        "/api/v1/history",
        "/api/v1/projects/{project_id}/pdf",
        "/api/v1/billing/plans",
        "/api/v1/format",
        "/api/v1/capture/scan-plan",
        "/api/v1/languages/current",
        "/api/v1/usage",
        "/api/v1/credits",
    } <= paths


async def test_local_store_purchases_are_opt_in(tmp_path: Path) -> None:
    config = Settings(SNAPSOLVE_PREFERENCES_PATH=str(tmp_path / "prefs.json"), SNAPSOLVE_LOCAL_STORE_ENABLED=True)
    app = create_app(config)

    async with app.router.lifespan_context(app):
        entitlements = app.state.entitlements
        assert await entitlements.purchase(SubscriptionPlan.YEARLY) is True
        assert entitlements.is_premium
