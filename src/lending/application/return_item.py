"""Application service: Return Item use case.

Closes the loan through the lending coordinator and, when a reservation
queue manager is wired in, hands the returned copy's entitlement to the
head of the item's reservation queue.
"""

from __future__ import annotations

from datetime import date, datetime, time

from lending.application.dto import FineDTO, LoanDTO, ReservationDTO, ReturnDTO
from lending.domain.service.lending_coordinator import LendingCoordinator
from lending.domain.service.reservation_queue import ReservationQueueManager


class ReturnItemHandler:

    def __init__(
        self,
        coordinator: LendingCoordinator,
        queue: ReservationQueueManager | None = None,
    ) -> None:
        self._coordinator = coordinator
        self._queue = queue

    def handle(
        self,
        loan_id: int,
        return_date: date | None = None,
        now: datetime | None = None,
    ) -> ReturnDTO:
        return_date = return_date or date.today()
        receipt = self._coordinator.return_item(loan_id, return_date)

        fulfilled = None
        if self._queue is not None:
            now = now or self._handed_back_at(return_date)
            fulfilled = self._queue.fulfill_next(receipt.loan.item_id, now)

        return ReturnDTO(
            loan=LoanDTO.from_domain(receipt.loan, return_date),
            fine=FineDTO.from_domain(receipt.fine) if receipt.fine else None,
            fulfilled=ReservationDTO.from_domain(fulfilled) if fulfilled else None,
        )

    @staticmethod
    def _handed_back_at(return_date: date) -> datetime:
        """The current time for a return made today, else the start of that day."""
        current = datetime.now()
        if return_date == current.date():
            return current
        return datetime.combine(return_date, time.min)
