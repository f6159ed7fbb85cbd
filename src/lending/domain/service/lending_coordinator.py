"""Domain service: Lending Coordinator.

Orchestrates borrow and return across the MediaItem, Loan and Fine
aggregates.  The pool change and the loan write are one logical unit:
if the second step fails, the first is compensated before the error
reaches the caller, so ``total - available`` always equals the number
of ACTIVE loans for the item.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta

from lending.domain.exceptions import (
    InvariantViolation,
    ItemNotFound,
    LoanNotFound,
    NoCopiesAvailable,
    NotEligible,
    UserNotFound,
)
from lending.domain.model.fine import Fine, FineStatus
from lending.domain.model.loan import Loan, LoanStatus
from lending.domain.model.media_item import normalize_category
from lending.domain.model.value_objects import Money
from lending.domain.repository.fine_repository import FineRepository
from lending.domain.repository.loan_repository import LoanRepository
from lending.domain.repository.media_item_repository import MediaItemRepository
from lending.domain.repository.user_repository import UserRepository
from lending.domain.service.fine_strategy import FineCalculator
from lending.domain.service.inventory_pool import InventoryPool
from lending.domain.service.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Loan periods per media category (days)
# ---------------------------------------------------------------------------
LOAN_PERIODS = {
    "BOOK": 28,
    "CD": 7,
}
DEFAULT_LOAN_PERIOD = 14


@dataclass(frozen=True)
class ReturnReceipt:
    """Outcome of a return: the closed loan and the fine it incurred, if any."""

    loan: Loan
    fine: Fine | None = None


class LendingCoordinator:

    def __init__(
        self,
        user_repo: UserRepository,
        item_repo: MediaItemRepository,
        loan_repo: LoanRepository,
        fine_repo: FineRepository,
        pool: InventoryPool,
        fine_calculator: FineCalculator,
    ) -> None:
        self._user_repo = user_repo
        self._item_repo = item_repo
        self._loan_repo = loan_repo
        self._fine_repo = fine_repo
        self._pool = pool
        self._fine_calculator = fine_calculator
        self._loan_locks = KeyedLock()

    # --- Borrow ---------------------------------------------------------------

    def borrow(self, user_id: int, item_id: int, today: date) -> Loan:
        if not self._user_repo.exists(user_id):
            raise UserNotFound(f"User #{user_id} not found")

        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise ItemNotFound(f"Media item #{item_id} not found")
        if not item.is_available:
            raise NoCopiesAvailable(f"No available copies of '{item.title}'")

        if not self.is_eligible(user_id, today):
            raise NotEligible(
                "User is not eligible to borrow. Please return overdue items "
                "or pay outstanding fines."
            )

        due_date = today + timedelta(days=self.loan_period_for(item.category))
        loan = Loan.open(user_id, item_id, today, due_date)

        # Another borrower may have taken the last copy since the check above.
        if not self._pool.try_decrement(item_id):
            raise NoCopiesAvailable(f"No available copies of '{item.title}'")

        try:
            self._loan_repo.save(loan)
        except Exception:
            logger.warning(
                "Saving loan for user #%s on item #%s failed; returning the copy "
                "to the pool", user_id, item_id,
            )
            self._pool.increment(item_id)
            raise

        logger.info(
            "Loan #%s opened: user #%s borrowed item #%s until %s",
            loan.id, user_id, item_id, due_date.isoformat(),
        )
        return loan

    # --- Return ---------------------------------------------------------------

    def return_item(self, loan_id: int, return_date: date) -> ReturnReceipt:
        with self._loan_locks.hold(loan_id):
            loan = self._loan_repo.get_by_id(loan_id)
            if loan is None:
                raise LoanNotFound(f"Loan #{loan_id} not found")

            item = self._item_repo.get_by_id(loan.item_id)
            if item is None:
                raise ItemNotFound(f"Media item #{loan.item_id} not found")

            before = replace(loan)
            loan.mark_returned(return_date)

            # No borrower can take the copy until the whole return has
            # either succeeded or been undone.
            with self._pool.hold(loan.item_id):
                self._loan_repo.save(loan)
                try:
                    self._pool.increment(loan.item_id)
                except Exception:
                    logger.warning(
                        "Returning the copy for loan #%s failed; reopening the loan",
                        loan_id,
                    )
                    self._loan_repo.save(before)
                    raise

                try:
                    fine = self._assess_fine(loan, item.category, return_date)
                except Exception as exc:
                    logger.warning(
                        "Assessing the fine for loan #%s failed; reopening the loan "
                        "and taking the copy back out of the pool", loan_id,
                    )
                    self._take_back(loan, exc)
                    self._loan_repo.save(before)
                    raise

        logger.info("Loan #%s returned on %s", loan_id, return_date.isoformat())
        return ReturnReceipt(loan=loan, fine=fine)

    def _take_back(self, loan: Loan, cause: Exception) -> None:
        if self._pool.try_decrement(loan.item_id):
            return
        logger.error(
            "Inventory invariant violated: the copy returned by loan #%s could "
            "not be taken back out of item #%s", loan.id, loan.item_id,
        )
        raise InvariantViolation(
            f"Loan #{loan.id} cannot be reopened: item #{loan.item_id} has no "
            f"copy on the shelf to give back"
        ) from cause

    def _assess_fine(self, loan: Loan, category: str, return_date: date) -> Fine | None:
        if return_date <= loan.due_date:
            return None
        overdue_days = loan.overdue_days(return_date)
        amount = self._fine_calculator.assess(category, overdue_days)
        if not amount.is_positive:
            return None

        fine = Fine.issue(loan.id, amount, issued_date=return_date)
        self._fine_repo.save(fine)
        logger.info(
            "Fine #%s of %s issued on loan #%s (%d day(s) late)",
            fine.id, amount, loan.id, overdue_days,
        )
        return fine

    # --- Eligibility ----------------------------------------------------------

    def is_eligible(self, user_id: int, today: date) -> bool:
        """No overdue loans and nothing owed in unpaid fines."""
        if any(loan.is_overdue(today) for loan in self._loan_repo.list_by_user(user_id)):
            return False
        return not self._unpaid_total(user_id).is_positive

    def _unpaid_total(self, user_id: int) -> Money:
        loan_ids = {loan.id for loan in self._loan_repo.list_by_user(user_id)}
        return Money.total([
            fine.amount
            for fine in self._fine_repo.list_by_status(FineStatus.UNPAID)
            if fine.loan_id in loan_ids
        ])

    # --- Queries --------------------------------------------------------------

    @staticmethod
    def loan_period_for(category: str) -> int:
        return LOAN_PERIODS.get(normalize_category(category), DEFAULT_LOAN_PERIOD)

    def loans_for(self, user_id: int) -> list[Loan]:
        return self._loan_repo.list_by_user(user_id)

    def active_loans_for(self, user_id: int) -> list[Loan]:
        return [loan for loan in self._loan_repo.list_by_user(user_id) if loan.is_active]

    def overdue_loans(self, today: date) -> list[Loan]:
        return [
            loan
            for loan in self._loan_repo.list_by_status(LoanStatus.ACTIVE)
            if loan.is_overdue(today)
        ]
