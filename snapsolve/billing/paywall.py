"""Paywall purchase/restore flow and its result alerts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .entitlements import EntitlementManager
from .plans import SubscriptionPlan

PURCHASE_SUCCESS_MESSAGE = "You're all set! Purchase successful!"
PURCHASE_FAILED_MESSAGE = "There was a problem processing your purchase. Please try again."
NOTHING_TO_RESTORE_MESSAGE = "No purchases found to restore."


class AlertKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class PaywallAlert:
    kind: AlertKind
    message: str

    @property
    def title(self) -> str:
        return "Success" if self.kind is AlertKind.SUCCESS else "Error"

    @classmethod
    def success(cls) -> "PaywallAlert":
        return cls(AlertKind.SUCCESS, PURCHASE_SUCCESS_MESSAGE)

    @classmethod
    def error(cls, message: str) -> "PaywallAlert":
        return cls(AlertKind.ERROR, message)


class PaywallFlow:
    """State behind the paywall: selected plan, busy flag, last alert."""

    def __init__(self, entitlements: EntitlementManager, selected_plan: SubscriptionPlan = SubscriptionPlan.YEARLY):
        self.entitlements = entitlements
        self.selected_plan = selected_plan
        self.is_purchasing = False
        self.active_alert: Optional[PaywallAlert] = None

    async def purchase(self, plan: Optional[SubscriptionPlan] = None) -> PaywallAlert:
        if plan is not None:
            self.selected_plan = plan
        self.is_purchasing = True
        try:
            ok = await self.entitlements.purchase(self.selected_plan)
        finally:
            self.is_purchasing = False
        self.active_alert = PaywallAlert.success() if ok else PaywallAlert.error(PURCHASE_FAILED_MESSAGE)
        return self.active_alert

    async def restore(self) -> PaywallAlert:
        self.is_purchasing = True
        try:
            await self.entitlements.restore_purchases()
        finally:
            self.is_purchasing = False
        if self.entitlements.is_premium:
            self.active_alert = PaywallAlert.success()
        else:
            self.active_alert = PaywallAlert.error(NOTHING_TO_RESTORE_MESSAGE)
        return self.active_alert
