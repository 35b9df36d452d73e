"""Subscription entitlements.

The purchase platform sits behind :class:`StoreBackend`. The manager maps
store products to :class:`SubscriptionPlan`, runs purchases, derives the
premium flag from verified, unrevoked transactions and keeps a background
listener on the backend's transaction update stream.

The listener is an ``asyncio.Task`` owned by whoever calls
:meth:`EntitlementManager.start_listener`; the server lifespan starts it on
startup and cancels it on shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import AsyncIterator, Dict, Iterable, List, Optional, Protocol

from pydantic import BaseModel, Field

from .plans import SubscriptionPlan, plan_for_product_id
from .pricing import parse_price

logger = logging.getLogger(__name__)

LOADING_PRICE_TEXT = "Loading..."


class Product(BaseModel):
    """A purchasable product as reported by the store."""

    id: str
    display_name: str = ""
    display_price: str = Field(description="Localized price string, e.g. '$2.99'")

    @property
    def price(self) -> Optional[Decimal]:
        parsed = parse_price(self.display_price)
        return parsed[0] if parsed else None


class Transaction(BaseModel):
    """A store transaction for one product."""

    product_id: str
    purchase_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    revocation_date: Optional[datetime] = None
    verified: bool = True

    @property
    def is_active(self) -> bool:
        return self.verified and self.revocation_date is None


class PurchaseOutcome(str, Enum):
    SUCCESS = "success"
    USER_CANCELLED = "user_cancelled"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class PurchaseResult:
    outcome: PurchaseOutcome
    transaction: Optional[Transaction] = None


class StoreBackendError(Exception):
    """Raised by a :class:`StoreBackend` when the store cannot be reached."""


class StoreBackend(Protocol):
    """The platform purchase API."""

    async def fetch_products(self, product_ids: Iterable[str]) -> List[Product]: ...

    async def purchase(self, product_id: str) -> PurchaseResult: ...

    async def current_entitlements(self) -> List[Transaction]: ...

    def transaction_updates(self) -> AsyncIterator[Transaction]: ...

    async def sync(self) -> None: ...


@dataclass
class LocalStoreBackend(StoreBackend):
    """In-process store with fixed prices.

    Products are listed at the configured prices. Purchases fail unless
    ``purchases_enabled`` is set, in which case they succeed immediately, with
    no payment, and are announced on the update stream. Used when the server
    runs without a real purchase platform.
    """

    prices: Dict[str, str] = field(default_factory=dict)
    purchases_enabled: bool = False
    _entitlements: List[Transaction] = field(default_factory=list)
    _updates: "asyncio.Queue[Transaction]" = field(default_factory=asyncio.Queue)

    @classmethod
    def from_plan_prices(
        cls, weekly_price: Optional[str], yearly_price: Optional[str], *, purchases_enabled: bool = False
    ) -> "LocalStoreBackend":
        prices = {}
        if weekly_price:
            prices[SubscriptionPlan.WEEKLY.product_id] = weekly_price
        if yearly_price:
            prices[SubscriptionPlan.YEARLY.product_id] = yearly_price
        return cls(prices=prices, purchases_enabled=purchases_enabled)

    async def fetch_products(self, product_ids: Iterable[str]) -> List[Product]:
        products = []
        for product_id in product_ids:
            if product_id in self.prices:
                plan = plan_for_product_id(product_id)
                name = plan.display_name if plan else product_id
                products.append(Product(id=product_id, display_name=name, display_price=self.prices[product_id]))
        return products

    async def purchase(self, product_id: str) -> PurchaseResult:
        if not self.purchases_enabled:
            logger.warning("LocalStoreBackend: purchases are disabled, refusing %s", product_id)
            return PurchaseResult(PurchaseOutcome.FAILED)
        if product_id not in self.prices:
            return PurchaseResult(PurchaseOutcome.FAILED)
        transaction = Transaction(product_id=product_id)
        self._entitlements.append(transaction)
        self._updates.put_nowait(transaction)
        return PurchaseResult(PurchaseOutcome.SUCCESS, transaction)

    async def current_entitlements(self) -> List[Transaction]:
        return list(self._entitlements)

    async def transaction_updates(self) -> AsyncIterator[Transaction]:
        while True:
            yield await self._updates.get()

    async def sync(self) -> None:
        return None

    def revoke(self, product_id: str) -> None:
        now = datetime.now(timezone.utc)
        self._entitlements = [
            t.model_copy(update={"revocation_date": now}) if t.product_id == product_id else t
            for t in self._entitlements
        ]


class EntitlementManager:
    """Premium status and purchase flow on top of a :class:`StoreBackend`."""

    def __init__(self, backend: StoreBackend) -> None:
        self.backend = backend
        self.plan_products: Dict[SubscriptionPlan, Product] = {}
        self.is_premium = False
        self.active_plan: Optional[SubscriptionPlan] = None
        self.did_check_premium = False
        self._listener: Optional[asyncio.Task] = None

    @property
    def products_loaded(self) -> bool:
        return bool(self.plan_products)

    async def fetch_products(self) -> Dict[SubscriptionPlan, Product]:
        """Load the products for every plan. Store failures are logged."""
        product_ids = [plan.product_id for plan in SubscriptionPlan]
        logger.debug("EntitlementManager: requesting products %s", product_ids)
        try:
            products = await self.backend.fetch_products(product_ids)
        except StoreBackendError as e:
            logger.error("EntitlementManager: error fetching products: %s", e)
            return self.plan_products

        for product in products:
            plan = plan_for_product_id(product.id)
            if plan is not None:
                self.plan_products[plan] = product
        for plan in SubscriptionPlan:
            if plan not in self.plan_products:
                logger.warning("EntitlementManager: no product found for %s (%s)", plan.display_name, plan.product_id)
        return self.plan_products

    def _grant(self, plan: SubscriptionPlan) -> None:
        self.is_premium = True
        self.active_plan = plan

    async def purchase(self, plan: SubscriptionPlan) -> bool:
        """Buy ``plan``. True only for a verified, unrevoked transaction."""
        if plan not in self.plan_products:
            logger.warning("EntitlementManager: product not found for plan %s", plan.product_id)
            return False
        try:
            result = await self.backend.purchase(plan.product_id)
        except StoreBackendError as e:
            logger.error("EntitlementManager: purchase failed for %s: %s", plan.display_name, e)
            return False

        if result.outcome is not PurchaseOutcome.SUCCESS or result.transaction is None:
            logger.info("EntitlementManager: %s purchase ended with %s", plan.display_name, result.outcome.value)
            return False
        if not result.transaction.is_active:
            logger.info("EntitlementManager: %s purchase was revoked or unverified", plan.display_name)
            return False
        self._grant(plan)
        logger.info("EntitlementManager: %s purchased successfully", plan.display_name)
        return True

    async def check_premium_status(self) -> bool:
        """Recompute premium state from the current entitlements."""
        premium = False
        current_plan = None
        try:
            for transaction in await self.backend.current_entitlements():
                if not transaction.verified:
                    logger.warning("EntitlementManager: unverified transaction for %s", transaction.product_id)
                    continue
                plan = plan_for_product_id(transaction.product_id)
                if plan is not None and transaction.revocation_date is None:
                    premium = True
                    current_plan = plan
                    break
        except StoreBackendError as e:
            logger.error("EntitlementManager: error checking premium status: %s", e)
        self.is_premium = premium
        self.active_plan = current_plan
        self.did_check_premium = True
        logger.info(
            "EntitlementManager: premium=%s, active plan=%s",
            premium,
            current_plan.display_name if current_plan else "None",
        )
        return premium

    async def restore_purchases(self) -> bool:
        try:
            await self.backend.sync()
        except StoreBackendError as e:
            logger.error("EntitlementManager: failed to restore purchases: %s", e)
            return self.is_premium
        return await self.check_premium_status()

    def price_text(self, plan: SubscriptionPlan) -> str:
        product = self.plan_products.get(plan)
        if product is None:
            return LOADING_PRICE_TEXT
        return product.display_price

    def handle_transaction_update(self, transaction: Transaction) -> None:
        if not transaction.verified:
            logger.warning("EntitlementManager: transaction update could not be verified: %s", transaction.product_id)
            return
        plan = plan_for_product_id(transaction.product_id)
        if plan is not None and transaction.revocation_date is None:
            self._grant(plan)
            logger.info("EntitlementManager: %s transaction updated", plan.display_name)

    async def _listen(self) -> None:
        async for transaction in self.backend.transaction_updates():
            self.handle_transaction_update(transaction)

    @property
    def listening(self) -> bool:
        return self._listener is not None and not self._listener.done()

    def start_listener(self) -> asyncio.Task:
        """Start consuming transaction updates in a background task."""
        if self.listening:
            return self._listener
        self._listener = asyncio.create_task(self._listen(), name="entitlement-listener")
        logger.debug("EntitlementManager: transaction listener started")
        return self._listener

    async def stop_listener(self) -> None:
        if self._listener is None:
            return
        task, self._listener = self._listener, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("EntitlementManager: transaction listener stopped")
