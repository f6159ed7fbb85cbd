"""Fine aggregate: the charge for returning one loan late.

Like Loan, the payment state is a single field: ``paid_date`` set means
PAID.  A paid fine is never reopened.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from lending.domain.exceptions import AlreadyPaid, ValidationError
from lending.domain.model.value_objects import Money


class FineStatus(Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"


@dataclass
class Fine:

    id: int | None
    loan_id: int
    amount: Money
    issued_date: date
    paid_date: date | None = None

    @staticmethod
    def issue(loan_id: int, amount: Money, issued_date: date) -> Fine:
        if not amount.is_positive:
            raise ValidationError("A fine must have a positive amount")
        return Fine(id=None, loan_id=loan_id, amount=amount, issued_date=issued_date)

    @property
    def status(self) -> FineStatus:
        return FineStatus.UNPAID if self.paid_date is None else FineStatus.PAID

    @property
    def is_paid(self) -> bool:
        return self.paid_date is not None

    def mark_paid(self, on: date) -> None:
        if self.is_paid:
            raise AlreadyPaid(f"Fine #{self.id} has already been paid")
        self.paid_date = on
