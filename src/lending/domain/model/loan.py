"""Loan aggregate: one copy of an item lent to one user.

The loan's state is carried by ``return_date`` alone: a loan with no
return date is ACTIVE, a loan with one is RETURNED.  ``status`` is
derived from it, so the two can never disagree.  "Overdue" is likewise
computed at query time and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from lending.domain.exceptions import AlreadyReturned, ValidationError


class LoanStatus(Enum):
    ACTIVE = "ACTIVE"
    RETURNED = "RETURNED"


@dataclass
class Loan:

    id: int | None
    user_id: int
    item_id: int
    loan_date: date
    due_date: date
    return_date: date | None = None

    @staticmethod
    def open(user_id: int, item_id: int, loan_date: date, due_date: date) -> Loan:
        if due_date < loan_date:
            raise ValidationError("Due date cannot precede the loan date")
        return Loan(
            id=None,
            user_id=user_id,
            item_id=item_id,
            loan_date=loan_date,
            due_date=due_date,
        )

    @property
    def status(self) -> LoanStatus:
        return LoanStatus.ACTIVE if self.return_date is None else LoanStatus.RETURNED

    @property
    def is_active(self) -> bool:
        return self.return_date is None

    def is_overdue(self, today: date) -> bool:
        return self.is_active and self.due_date < today

    def overdue_days(self, on: date) -> int:
        """Calendar days past the due date as of ``on`` (0 if not late)."""
        return max((on - self.due_date).days, 0)

    def mark_returned(self, on: date) -> None:
        """Transition ACTIVE -> RETURNED.  Happens exactly once."""
        if not self.is_active:
            raise AlreadyReturned(f"Loan #{self.id} has already been returned")
        if on < self.loan_date:
            raise ValidationError(
                f"Return date {on.isoformat()} precedes loan date "
                f"{self.loan_date.isoformat()}"
            )
        self.return_date = on
