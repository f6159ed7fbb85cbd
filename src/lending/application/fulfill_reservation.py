"""Application service: Fulfill Reservation and Expire Reservations use cases.

Both are normally triggered from outside a user session: fulfillment
when a copy comes back, expiry from a periodic sweep.
"""

from __future__ import annotations

from datetime import datetime

from lending.application.dto import ReservationDTO
from lending.domain.service.reservation_queue import ReservationQueueManager


class FulfillReservationHandler:

    def __init__(self, queue: ReservationQueueManager) -> None:
        self._queue = queue

    def handle(self, item_id: int, now: datetime | None = None) -> ReservationDTO | None:
        reservation = self._queue.fulfill_next(item_id, now or datetime.now())
        if reservation is None:
            return None
        return ReservationDTO.from_domain(reservation)


class ExpireReservationsHandler:

    def __init__(self, queue: ReservationQueueManager) -> None:
        self._queue = queue

    def handle(self, now: datetime | None = None) -> int:
        return self._queue.expire_stale(now or datetime.now())
