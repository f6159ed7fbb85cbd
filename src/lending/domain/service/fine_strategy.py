"""Fine assessment: a per-category strategy registry.

``FineCalculator`` maps a media category to a ``FineStrategy``.  New
categories are added at runtime with ``register`` so the lending
coordinator never needs to change when a new media type appears.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import Lock

from lending.domain.exceptions import UnsupportedCategory, ValidationError
from lending.domain.model.media_item import normalize_category
from lending.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

DEFAULT_DAILY_RATES = {
    "BOOK": "10.00",
    "CD": "20.00",
}


class FineStrategy(ABC):

    @abstractmethod
    def assess(self, overdue_days: int) -> Money:
        """Fine for returning an item ``overdue_days`` late.

        Must return a zero amount when ``overdue_days <= 0``.
        """


class DailyRateFineStrategy(FineStrategy):
    """A flat charge for every calendar day past the due date."""

    def __init__(self, rate_per_day: Money) -> None:
        if not rate_per_day.is_positive:
            raise ValidationError("Daily fine rate must be greater than zero")
        self.rate_per_day = rate_per_day

    def assess(self, overdue_days: int) -> Money:
        if overdue_days <= 0:
            return Money.zero(self.rate_per_day.currency)
        return self.rate_per_day * overdue_days

    def __repr__(self) -> str:
        return f"DailyRateFineStrategy({self.rate_per_day})"


class FineCalculator:

    def __init__(self) -> None:
        self._strategies: dict[str, FineStrategy] = {}
        self._lock = Lock()

    @classmethod
    def with_defaults(cls) -> FineCalculator:
        """A registry pre-loaded with the standard BOOK and CD rates."""
        calculator = cls()
        for category, rate in DEFAULT_DAILY_RATES.items():
            calculator.register(category, DailyRateFineStrategy(Money.of(rate)))
        return calculator

    def register(self, category: str, strategy: FineStrategy) -> None:
        """Add or replace the strategy used for ``category``."""
        key = normalize_category(category)
        if not key:
            raise UnsupportedCategory("Media category cannot be empty")
        if strategy is None:
            raise ValidationError("Fine strategy is required")
        with self._lock:
            self._strategies[key] = strategy
        logger.info("Registered fine strategy for %s: %r", key, strategy)

    def strategy_for(self, category: str) -> FineStrategy:
        key = normalize_category(category)
        with self._lock:
            strategy = self._strategies.get(key)
        if strategy is None:
            raise UnsupportedCategory(f"Unsupported media category: {category!r}")
        return strategy

    def assess(self, category: str, overdue_days: int) -> Money:
        """Fine owed for an item of ``category`` returned ``overdue_days`` late."""
        strategy = self.strategy_for(category)
        if overdue_days <= 0:
            return Money.zero()
        return strategy.assess(overdue_days)

    def rate_for(self, category: str) -> Money | None:
        """Daily rate for ``category`` when its strategy charges one."""
        strategy = self.strategy_for(category)
        return getattr(strategy, "rate_per_day", None)

    def categories(self) -> list[str]:
        with self._lock:
            return sorted(self._strategies)
