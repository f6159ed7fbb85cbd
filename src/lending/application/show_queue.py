"""Application service: reservation queues (per item, position, per user).

Holds that have run out are expired before any of these are answered.
"""

from __future__ import annotations

from datetime import datetime

from lending.application.dto import ReservationDTO
from lending.domain.exceptions import ItemNotFound, ReservationNotFound
from lending.domain.repository.media_item_repository import MediaItemRepository
from lending.domain.service.reservation_queue import ReservationQueueManager


class ShowQueueHandler:

    def __init__(self, queue: ReservationQueueManager, item_repo: MediaItemRepository) -> None:
        self._queue = queue
        self._item_repo = item_repo

    def handle(self, item_id: int, now: datetime | None = None) -> list[ReservationDTO]:
        if not self._item_repo.exists(item_id):
            raise ItemNotFound(f"Media item #{item_id} not found")
        queue = self._queue.queue_for(item_id, now or datetime.now())
        return [
            ReservationDTO.from_domain(reservation, position)
            for position, reservation in enumerate(queue, start=1)
        ]


class ReservationPositionHandler:

    def __init__(self, queue: ReservationQueueManager) -> None:
        self._queue = queue

    def handle(self, reservation_id: int, now: datetime | None = None) -> int:
        position = self._queue.position(reservation_id, now or datetime.now())
        if position == -1:
            raise ReservationNotFound(
                f"Reservation #{reservation_id} is not waiting in any queue"
            )
        return position


class ShowUserReservationsHandler:

    def __init__(self, queue: ReservationQueueManager) -> None:
        self._queue = queue

    def handle(
        self, user_id: int, active_only: bool = False, now: datetime | None = None
    ) -> list[ReservationDTO]:
        reservations = self._queue.reservations_for(
            user_id, active_only=active_only, now=now or datetime.now()
        )
        return [
            ReservationDTO.from_domain(r, self._queue.position(r.id)) for r in reservations
        ]
