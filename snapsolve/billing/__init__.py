"""
Free credits, subscription plans, pricing and entitlements.
"""

from .credits import CreditStore
from .entitlements import (
    EntitlementManager,
    LocalStoreBackend,
    Product,
    PurchaseOutcome,
    PurchaseResult,
    StoreBackend,
    StoreBackendError,
    Transaction,
)
from .paywall import AlertKind, PaywallAlert, PaywallFlow
from .plans import SubscriptionPlan, plan_for_product_id
from .pricing import annual_equivalent, best_value_plan, format_price, monthly_equivalent, parse_price, savings_percent

__all__ = [
    "AlertKind",
    "CreditStore",
    "EntitlementManager",
    "LocalStoreBackend",
    "PaywallAlert",
    "PaywallFlow",
    "Product",
    "PurchaseOutcome",
    "PurchaseResult",
    "StoreBackend",
    "StoreBackendError",
    "SubscriptionPlan",
    "Transaction",
    "annual_equivalent",
    "best_value_plan",
    "format_price",
    "monthly_equivalent",
    "parse_price",
    "plan_for_product_id",
    "savings_percent",
]
