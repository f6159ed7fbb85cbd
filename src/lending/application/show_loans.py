"""Application service: loan queries (user loans, eligibility, overdue report)."""

from __future__ import annotations

from datetime import date

from lending.application.dto import LoanDTO
from lending.domain.exceptions import UserNotFound
from lending.domain.repository.user_repository import UserRepository
from lending.domain.service.lending_coordinator import LendingCoordinator
from lending.domain.service.overdue_report import OverdueNotice, OverdueReport


class ShowLoansHandler:

    def __init__(self, coordinator: LendingCoordinator, user_repo: UserRepository) -> None:
        self._coordinator = coordinator
        self._user_repo = user_repo

    def handle(
        self, user_id: int, today: date | None = None, active_only: bool = False
    ) -> list[LoanDTO]:
        if not self._user_repo.exists(user_id):
            raise UserNotFound(f"User #{user_id} not found")
        today = today or date.today()
        if active_only:
            loans = self._coordinator.active_loans_for(user_id)
        else:
            loans = self._coordinator.loans_for(user_id)
        return [LoanDTO.from_domain(loan, today) for loan in loans]


class CheckEligibilityHandler:

    def __init__(self, coordinator: LendingCoordinator, user_repo: UserRepository) -> None:
        self._coordinator = coordinator
        self._user_repo = user_repo

    def handle(self, user_id: int, today: date | None = None) -> bool:
        if not self._user_repo.exists(user_id):
            raise UserNotFound(f"User #{user_id} not found")
        return self._coordinator.is_eligible(user_id, today or date.today())


class OverdueReportHandler:

    def __init__(self, report: OverdueReport) -> None:
        self._report = report

    def handle(self, today: date | None = None) -> list[OverdueNotice]:
        return self._report.notices(today or date.today())
