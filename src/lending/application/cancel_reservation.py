"""Application service: Cancel Reservation use case."""

from __future__ import annotations

from lending.application.dto import ReservationDTO
from lending.domain.service.reservation_queue import ReservationQueueManager


class CancelReservationHandler:

    def __init__(self, queue: ReservationQueueManager) -> None:
        self._queue = queue

    def handle(self, reservation_id: int, user_id: int) -> ReservationDTO:
        return ReservationDTO.from_domain(self._queue.cancel(reservation_id, user_id))
