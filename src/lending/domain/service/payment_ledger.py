"""Domain service: Payment Ledger.

Settles fines.  A fine belongs to a user through its loan, so per-user
lookups join the user's loans against the fine records.
"""

from __future__ import annotations

import logging
from datetime import date

from lending.domain.exceptions import FineNotFound
from lending.domain.model.fine import Fine, FineStatus
from lending.domain.model.value_objects import Money
from lending.domain.repository.fine_repository import FineRepository
from lending.domain.repository.loan_repository import LoanRepository
from lending.domain.service.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


class PaymentLedger:

    def __init__(self, loan_repo: LoanRepository, fine_repo: FineRepository) -> None:
        self._loan_repo = loan_repo
        self._fine_repo = fine_repo
        self._fine_locks = KeyedLock()

    def pay(self, fine_id: int, today: date | None = None) -> Fine:
        with self._fine_locks.hold(fine_id):
            fine = self._fine_repo.get_by_id(fine_id)
            if fine is None:
                raise FineNotFound(f"Fine #{fine_id} not found")
            fine.mark_paid(today or date.today())
            self._fine_repo.save(fine)
        logger.info("Fine #%s of %s paid", fine.id, fine.amount)
        return fine

    def pay_all(self, user_id: int, today: date | None = None) -> list[Fine]:
        """Settle every unpaid fine on the user's loans; no-op if none."""
        paid_on = today or date.today()
        settled: list[Fine] = []
        for unpaid in self.unpaid_fines_for(user_id):
            with self._fine_locks.hold(unpaid.id):
                # a concurrent pay may have settled it since the listing
                fine = self._fine_repo.get_by_id(unpaid.id)
                if fine is None or fine.is_paid:
                    continue
                fine.mark_paid(paid_on)
                self._fine_repo.save(fine)
            settled.append(fine)
        if settled:
            logger.info(
                "User #%s settled %d fine(s) totalling %s",
                user_id, len(settled), Money.total([f.amount for f in settled]),
            )
        return settled

    def unpaid_fines_for(self, user_id: int) -> list[Fine]:
        loan_ids = {loan.id for loan in self._loan_repo.list_by_user(user_id)}
        fines = [
            fine
            for fine in self._fine_repo.list_by_status(FineStatus.UNPAID)
            if fine.loan_id in loan_ids
        ]
        return sorted(fines, key=lambda f: (f.issued_date, f.id))

    def fines_for(self, user_id: int) -> list[Fine]:
        fines = []
        for loan in self._loan_repo.list_by_user(user_id):
            fine = self._fine_repo.get_by_loan_id(loan.id)
            if fine is not None:
                fines.append(fine)
        return fines

    def total_unpaid(self, user_id: int) -> Money:
        return Money.total([fine.amount for fine in self.unpaid_fines_for(user_id)])
