"""Application service: Reserve Item use case."""

from __future__ import annotations

from datetime import datetime

from lending.application.dto import ReservationDTO
from lending.domain.service.reservation_queue import ReservationQueueManager


class ReserveItemHandler:

    def __init__(self, queue: ReservationQueueManager) -> None:
        self._queue = queue

    def handle(self, user_id: int, item_id: int, now: datetime | None = None) -> ReservationDTO:
        reservation = self._queue.create(user_id, item_id, now or datetime.now())
        return ReservationDTO.from_domain(reservation, self._queue.position(reservation.id))
