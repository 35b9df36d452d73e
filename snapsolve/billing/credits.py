"""Free solver credits.

New installs get a small number of free solves. Each successful solve by a
non-premium user consumes one credit.
"""

from __future__ import annotations

import logging

from snapsolve.settings.preferences import PreferencesStore

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_CREDITS = 2


class CreditStore:
    """Credit counter persisted through a :class:`PreferencesStore`."""

    def __init__(self, preferences: PreferencesStore, initial_credits: int = DEFAULT_INITIAL_CREDITS) -> None:
        self._preferences = preferences
        self.initial_credits = initial_credits
        self._load()

    def _load(self) -> None:
        if not self._preferences.data.credits_initialized:
            self._preferences.update(remaining_credits=self.initial_credits, credits_initialized=True)
            logger.info("CreditStore: first launch, granted %d credits", self.initial_credits)
        logger.debug("CreditStore: loaded %d credits", self.remaining_credits)

    @property
    def remaining_credits(self) -> int:
        return self._preferences.data.remaining_credits

    @property
    def has_credits(self) -> bool:
        return self.remaining_credits > 0

    def can_use_solver(self) -> bool:
        return self.has_credits

    def use_credit(self) -> bool:
        """Consume one credit. Returns False, without changing anything, at zero."""
        if self.remaining_credits <= 0:
            logger.info("CreditStore: no credits remaining")
            return False
        self._preferences.update(remaining_credits=self.remaining_credits - 1)
        logger.info("CreditStore: used 1 credit, %d remaining", self.remaining_credits)
        return True

    def add_credits(self, amount: int) -> int:
        if amount < 0:
            raise ValueError("amount must be non-negative")
        self._preferences.update(remaining_credits=self.remaining_credits + amount)
        logger.info("CreditStore: added %d credits, total %d", amount, self.remaining_credits)
        return self.remaining_credits

    def reset(self) -> None:
        self._preferences.update(remaining_credits=self.initial_credits)
        logger.info("CreditStore: reset to %d credits", self.initial_credits)

    def display_text(self) -> str:
        remaining = self.remaining_credits
        if remaining == 0:
            return "No credits"
        if remaining == 1:
            return "1 credit left"
        return f"{remaining} credits left"
