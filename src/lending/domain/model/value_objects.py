"""Money, the one value object the lending domain needs.

Fines are charged per day and summed across loans, so amounts are kept
as Decimal cents from construction onward and never pass through float
arithmetic.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from lending.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "ILS"
CENT = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """Non-negative amount in a single currency, rounded to whole cents."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")
        object.__setattr__(self, "amount", self.amount.quantize(CENT, ROUND_HALF_UP))

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._coerce(other).amount, self.currency)

    def __mul__(self, days: int) -> Money:
        # bool is an int subclass; True * rate is never meant
        if isinstance(days, bool) or not isinstance(days, int):
            raise TypeError(f"Can only multiply Money by int, got {type(days).__name__}")
        if days < 0:
            raise ValidationError("Cannot multiply Money by a negative factor")
        return Money(self.amount * days, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._coerce(other).amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def _coerce(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot combine Money with {type(other).__name__}")
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from any numeric literal; floats go through ``str`` first."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal(0), currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        return sum(amounts, Money.zero(currency))
