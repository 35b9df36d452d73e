"""Credits, billing and language endpoints."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from snapsolve.billing.paywall import NOTHING_TO_RESTORE_MESSAGE, PURCHASE_FAILED_MESSAGE, PURCHASE_SUCCESS_MESSAGE

pytestmark = pytest.mark.asyncio


async def test_credits_add_and_reset(client: httpx.AsyncClient) -> None:
    assert (await client.get("/api/v1/credits")).json() == {
        "remaining_credits": 2,
        "has_credits": True,
        "display_text": "2 credits left",
    }

    added = await client.post("/api/v1/credits/add", json={"amount": 3})
    assert added.json()["remaining_credits"] == 5

    assert (await client.post("/api/v1/credits/add", json={"amount": -1})).status_code == 422

    reset = await client.post("/api/v1/credits/reset")
    assert reset.json()["remaining_credits"] == 2


async def test_plans_comparison(client: httpx.AsyncClient) -> None:
    body = (await client.get("/api/v1/billing/plans")).json()

    assert body["products_loaded"] is True
    plans = {p["plan"]: p for p in body["plans"]}
    assert plans["weekly.infofinder"]["price_text"] == "$2.99"
    assert plans["weekly.infofinder"]["display_name"] == "Weekly PRO"
    assert plans["yearly.infofinder"]["is_best_value"] is True
    assert body["annual_equivalent_of_weekly"] == "$155.48"
    assert body["savings_percent"] == 80
    assert body["monthly_equivalent_of_yearly"] == "$2.50"


async def test_purchase_restore_and_status(client: httpx.AsyncClient) -> None:
    restore = (await client.post("/api/v1/billing/restore")).json()
    assert restore["kind"] == "error"
    assert restore["message"] == NOTHING_TO_RESTORE_MESSAGE

    purchase = (await client.post("/api/v1/billing/purchase", json={})).json()
    assert purchase == {"kind": "success", "title": "Success", "message": PURCHASE_SUCCESS_MESSAGE, "is_premium": True}

    status = (await client.get("/api/v1/billing/status")).json()
    assert status["is_premium"] is True
    assert status["active_plan"] == "yearly.infofinder"
    assert status["listening"] is False

    assert (await client.post("/api/v1/billing/restore")).json()["kind"] == "success"


async def test_purchase_of_unpriced_plan_fails(app: FastAPI, client: httpx.AsyncClient) -> None:
    app.state.entitlements.plan_products.clear()
    app.state.entitlements.backend.prices.clear()

    body = (await client.post("/api/v1/billing/purchase", json={"plan": "weekly.infofinder"})).json()
    assert body["kind"] == "error"
    assert body["title"] == "Error"
    assert body["message"] == PURCHASE_FAILED_MESSAGE

    plans = (await client.get("/api/v1/billing/plans")).json()
    assert plans["products_loaded"] is False
    assert {p["price_text"] for p in plans["plans"]} == {"Loading..."}
    assert plans["savings_percent"] is None


async def test_languages(client: httpx.AsyncClient) -> None:
    languages = (await client.get("/api/v1/languages")).json()
    assert {"code": "ja", "english_name": "Japanese", "native_name": "日本語"} in languages

    assert (await client.get("/api/v1/languages/current")).json()["code"] == "en"

    r = await client.put("/api/v1/languages/current", json={"code": "fr"})
    assert r.json() == {"code": "fr", "english_name": "French", "native_name": "Français"}
    assert (await client.get("/api/v1/languages/current")).json()["code"] == "fr"

    assert (await client.put("/api/v1/languages/current", json={"code": "xx"})).status_code == 400


async def test_purchase_refused_when_local_store_is_disabled(app: FastAPI, client: httpx.AsyncClient) -> None:
    app.state.entitlements.backend.purchases_enabled = False

    body = (await client.post("/api/v1/billing/purchase", json={"plan": "yearly.infofinder"})).json()

    assert body["kind"] == "error"
    assert body["is_premium"] is False
    assert (await client.get("/api/v1/billing/status")).json()["is_premium"] is False
