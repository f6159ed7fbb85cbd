"""Application service: Borrow Item use case."""

from __future__ import annotations

from datetime import date

from lending.application.dto import LoanDTO
from lending.domain.service.lending_coordinator import LendingCoordinator


class BorrowItemHandler:

    def __init__(self, coordinator: LendingCoordinator) -> None:
        self._coordinator = coordinator

    def handle(self, user_id: int, item_id: int, today: date | None = None) -> LoanDTO:
        today = today or date.today()
        loan = self._coordinator.borrow(user_id, item_id, today)
        return LoanDTO.from_domain(loan, today)
