"""Price parsing and plan comparison.

Store prices arrive as localized display strings such as ``"$2.99"`` or
``"CA$4.99"``. The comparison shown next to the yearly plan needs the
numeric amount, so the string is split into a currency symbol and a
``Decimal``.
"""

from __future__ import annotations

import re
import sys
import unicodedata
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from .plans import SubscriptionPlan

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
CENT = Decimal("0.01")

_CURRENCY_SYMBOLS = "".join(
    chr(c) for c in range(min(sys.maxunicode, 0xFFFF) + 1) if unicodedata.category(chr(c)) == "Sc"
)
PRICE_RE = re.compile(
    r"(?P<symbol>[A-Za-z]{1,3}\$|[A-Za-z]{1,3}|[" + re.escape(_CURRENCY_SYMBOLS) + r"])?\s*"
    r"(?P<amount>[0-9]+(?:\.[0-9]+)?)"
    r"(?:\s*(?P<suffix>[" + re.escape(_CURRENCY_SYMBOLS) + r"]))?"
)
# A comma followed by exactly two digits is a decimal comma, as in "2,99 €".
DECIMAL_COMMA_RE = re.compile(r"(?<=[0-9]),(?=[0-9]{2}(?![0-9]))")


def _normalize_separators(price_text: str) -> str:
    if DECIMAL_COMMA_RE.search(price_text):
        return DECIMAL_COMMA_RE.sub(".", price_text.replace(".", ""))
    return price_text.replace(",", "")


def parse_price(price_text: str) -> Optional[Tuple[Decimal, str]]:
    """Split ``price_text`` into ``(amount, currency_symbol)``.

    Both ``"1,299.00"`` and ``"1.299,00 €"`` read as 1299.00. The symbol may
    lead or trail the amount and is empty when the string has none. Returns
    ``None`` when no number is found.
    """
    match = PRICE_RE.search(_normalize_separators(price_text))
    if match is None:
        return None
    return Decimal(match.group("amount")), match.group("symbol") or match.group("suffix") or ""


def format_price(amount: Decimal, symbol: str = "") -> str:
    return f"{symbol}{amount.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def annual_equivalent(weekly_price: Decimal) -> Decimal:
    """Cost of paying the weekly price for a whole year."""
    return (weekly_price * WEEKS_PER_YEAR).quantize(CENT, rounding=ROUND_HALF_UP)


def monthly_equivalent(yearly_price: Decimal) -> Decimal:
    return (yearly_price / MONTHS_PER_YEAR).quantize(CENT, rounding=ROUND_HALF_UP)


def savings_percent(weekly_price: Decimal, yearly_price: Decimal) -> int:
    """Whole percent saved by the yearly plan versus 52 weekly payments.

    Rounded down so the advertised saving is never overstated; 0 when the
    yearly plan is not cheaper.
    """
    annual = annual_equivalent(weekly_price)
    if annual <= 0 or yearly_price >= annual:
        return 0
    saving = (Decimal(1) - yearly_price / annual) * 100
    return int(saving.quantize(Decimal(1), rounding=ROUND_DOWN))


def best_value_plan(weekly_price: Decimal, yearly_price: Decimal) -> SubscriptionPlan:
    """The plan that gets the "best value" badge."""
    if yearly_price < annual_equivalent(weekly_price):
        return SubscriptionPlan.YEARLY
    return SubscriptionPlan.WEEKLY
