"""Subscription plans and their store product identifiers."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class SubscriptionPlan(str, Enum):
    """A subscription tier. The value is the store product identifier."""

    WEEKLY = "weekly.infofinder"
    YEARLY = "yearly.infofinder"

    @property
    def product_id(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        if self is SubscriptionPlan.WEEKLY:
            return "Weekly PRO"
        return "Annual PRO"

    @property
    def period(self) -> str:
        return "week" if self is SubscriptionPlan.WEEKLY else "year"


def plan_for_product_id(product_id: str) -> Optional[SubscriptionPlan]:
    """Map a store product identifier to its plan, ``None`` for unknown products."""
    for plan in SubscriptionPlan:
        if plan.value == product_id:
            return plan
    return None
