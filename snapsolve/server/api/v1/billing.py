"""
Subscription Endpoints.

Plans with their store prices and the yearly-versus-weekly comparison,
purchase and restore, and the current entitlement status.
"""

from fastapi import APIRouter

from snapsolve.billing.entitlements import EntitlementManager
from snapsolve.billing.paywall import PaywallAlert, PaywallFlow
from snapsolve.billing.plans import SubscriptionPlan
from snapsolve.billing.pricing import (
    annual_equivalent,
    best_value_plan,
    format_price,
    monthly_equivalent,
    parse_price,
    savings_percent,
)
from snapsolve.server.schemas import AlertResponse, EntitlementStatus, PlanRead, PlansResponse, PurchaseRequest
from snapsolve.server.services.deps import EntitlementsDep

router = APIRouter()


def _alert(alert: PaywallAlert, entitlements: EntitlementManager) -> AlertResponse:
    return AlertResponse(
        kind=alert.kind.value, title=alert.title, message=alert.message, is_premium=entitlements.is_premium
    )


@router.get(
    "/plans",
    response_model=PlansResponse,
    summary="List Plans",
    description="Plans with localized prices; the comparison fields are set once both prices are known.",
)
async def list_plans(entitlements: EntitlementsDep) -> PlansResponse:
    if not entitlements.products_loaded:
        await entitlements.fetch_products()

    weekly = parse_price(entitlements.price_text(SubscriptionPlan.WEEKLY))
    yearly = parse_price(entitlements.price_text(SubscriptionPlan.YEARLY))
    response = PlansResponse(plans=[], products_loaded=entitlements.products_loaded)
    best = None
    if weekly and yearly:
        symbol = weekly[1]
        best = best_value_plan(weekly[0], yearly[0])
        response.annual_equivalent_of_weekly = format_price(annual_equivalent(weekly[0]), symbol)
        response.savings_percent = savings_percent(weekly[0], yearly[0])
        response.monthly_equivalent_of_yearly = format_price(monthly_equivalent(yearly[0]), yearly[1])

    response.plans = [
        PlanRead(
            plan=plan,
            product_id=plan.product_id,
            display_name=plan.display_name,
            price_text=entitlements.price_text(plan),
            is_best_value=plan is best,
        )
        for plan in SubscriptionPlan
    ]
    return response


@router.post("/purchase", response_model=AlertResponse, summary="Purchase Plan")
async def purchase(request: PurchaseRequest, entitlements: EntitlementsDep) -> AlertResponse:
    flow = PaywallFlow(entitlements, selected_plan=request.plan)
    return _alert(await flow.purchase(), entitlements)


@router.post("/restore", response_model=AlertResponse, summary="Restore Purchases")
async def restore(entitlements: EntitlementsDep) -> AlertResponse:
    flow = PaywallFlow(entitlements)
    return _alert(await flow.restore(), entitlements)


@router.get("/status", response_model=EntitlementStatus, summary="Entitlement Status")
async def entitlement_status(entitlements: EntitlementsDep) -> EntitlementStatus:
    return EntitlementStatus(
        is_premium=entitlements.is_premium,
        active_plan=entitlements.active_plan,
        did_check_premium=entitlements.did_check_premium,
        listening=entitlements.listening,
    )
