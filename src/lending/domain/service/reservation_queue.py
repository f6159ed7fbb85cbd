"""Domain service: Reservation Queue Manager.

Keeps one FIFO queue of ACTIVE reservations per item, ordered by
``reservation_date`` with the reservation ID as tie-break.  Queue
mutations for one item are serialized; state changes that may race with
another caller (cancel vs. fulfill) go through the repository's
compare-and-set so a terminal reservation is never overwritten.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from lending.domain.exceptions import (
    DuplicateReservation,
    ItemAvailable,
    ItemNotFound,
    NotActive,
    NotOwner,
    ReservationNotFound,
    UserNotFound,
)
from lending.domain.model.reservation import Reservation, ReservationStatus
from lending.domain.repository.media_item_repository import MediaItemRepository
from lending.domain.repository.reservation_repository import ReservationRepository
from lending.domain.repository.user_repository import UserRepository
from lending.domain.service.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

HOLD_WINDOW = timedelta(hours=48)


class ReservationQueueManager:

    def __init__(
        self,
        reservation_repo: ReservationRepository,
        item_repo: MediaItemRepository,
        user_repo: UserRepository,
        hold_window: timedelta = HOLD_WINDOW,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._item_repo = item_repo
        self._user_repo = user_repo
        self._hold_window = hold_window
        self._locks = KeyedLock()

    # --- Commands -------------------------------------------------------------

    def create(self, user_id: int, item_id: int, now: datetime) -> Reservation:
        """Queue ``user_id`` for ``item_id``, which must be out of stock."""
        if not self._user_repo.exists(user_id):
            raise UserNotFound(f"User #{user_id} not found")

        with self._locks.hold(item_id):
            item = self._item_repo.get_by_id(item_id)
            if item is None:
                raise ItemNotFound(f"Media item #{item_id} not found")
            if item.is_available:
                raise ItemAvailable(
                    f"'{item.title}' is currently available; borrow it directly "
                    f"instead of reserving"
                )
            self._expire_item(item_id, now)
            if any(r.user_id == user_id for r in self._active_for_item(item_id)):
                raise DuplicateReservation(
                    f"User #{user_id} already has an active reservation for "
                    f"'{item.title}'"
                )

            reservation = Reservation.place(user_id, item_id, now, self._hold_window)
            self._reservation_repo.save(reservation)

        logger.info(
            "Reservation #%s created: user #%s queued for item #%s",
            reservation.id, user_id, item_id,
        )
        return reservation

    def cancel(self, reservation_id: int, user_id: int) -> Reservation:
        reservation = self._reservation_repo.get_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFound(f"Reservation #{reservation_id} not found")
        if reservation.user_id != user_id:
            raise NotOwner("You can only cancel your own reservations")

        reservation.cancel()
        if not self._reservation_repo.compare_and_set_status(
            reservation, ReservationStatus.ACTIVE
        ):
            raise NotActive(
                f"Reservation #{reservation_id} is no longer active and "
                f"cannot be cancelled"
            )
        logger.info("Reservation #%s cancelled by user #%s", reservation_id, user_id)
        return reservation

    def fulfill_next(self, item_id: int, now: datetime) -> Reservation | None:
        """Fulfill the head of the item's queue, or return None if empty.

        Stale entries for the item are expired first.  If the head is
        cancelled between selection and update, the next head is tried.
        Does not touch the inventory pool: the pickup is a separate borrow.
        """
        with self._locks.hold(item_id):
            self._expire_item(item_id, now)
            while True:
                queue = self._active_for_item(item_id)
                if not queue:
                    return None
                head = queue[0]
                head.fulfill(now, self._hold_window)
                if self._reservation_repo.compare_and_set_status(
                    head, ReservationStatus.ACTIVE
                ):
                    logger.info(
                        "Reservation #%s fulfilled for user #%s on item #%s; "
                        "pickup by %s",
                        head.id, head.user_id, item_id, head.expiry_date.isoformat(),
                    )
                    return head
                logger.info(
                    "Reservation #%s left the queue before fulfillment, retrying",
                    head.id,
                )

    def expire_stale(self, now: datetime) -> int:
        """Expire every ACTIVE reservation whose hold ran out before ``now``."""
        expired = 0
        for reservation in self._reservation_repo.list_by_status(ReservationStatus.ACTIVE):
            if self._expire_one(reservation, now):
                expired += 1
        if expired:
            logger.info("Expired %d stale reservation(s)", expired)
        return expired

    # --- Queries --------------------------------------------------------------

    def position(self, reservation_id: int, now: datetime | None = None) -> int:
        """1-based rank in the item's ACTIVE queue, or -1.

        With ``now``, holds that ran out before it are expired first.
        """
        reservation = self._reservation_repo.get_by_id(reservation_id)
        if reservation is not None and now is not None:
            with self._locks.hold(reservation.item_id):
                self._expire_item(reservation.item_id, now)
            reservation = self._reservation_repo.get_by_id(reservation_id)
        if reservation is None or not reservation.is_active:
            return -1
        for rank, queued in enumerate(self._active_for_item(reservation.item_id), start=1):
            if queued.id == reservation_id:
                return rank
        return -1

    def queue_for(self, item_id: int, now: datetime | None = None) -> list[Reservation]:
        if now is not None:
            with self._locks.hold(item_id):
                self._expire_item(item_id, now)
        return self._active_for_item(item_id)

    def reservations_for(
        self, user_id: int, active_only: bool = False, now: datetime | None = None
    ) -> list[Reservation]:
        if now is not None:
            queued_items = {
                r.item_id for r in self._reservation_repo.list_by_user(user_id) if r.is_active
            }
            for item_id in queued_items:
                with self._locks.hold(item_id):
                    self._expire_item(item_id, now)
        reservations = sorted(
            self._reservation_repo.list_by_user(user_id), key=lambda r: r.queue_key
        )
        if active_only:
            return [r for r in reservations if r.is_active]
        return reservations

    # --- Internal helpers -----------------------------------------------------

    def _active_for_item(self, item_id: int) -> list[Reservation]:
        active = [r for r in self._reservation_repo.list_by_item(item_id) if r.is_active]
        return sorted(active, key=lambda r: r.queue_key)

    def _expire_item(self, item_id: int, now: datetime) -> None:
        for reservation in self._active_for_item(item_id):
            self._expire_one(reservation, now)

    def _expire_one(self, reservation: Reservation, now: datetime) -> bool:
        if not reservation.is_stale(now):
            return False
        reservation.expire()
        if not self._reservation_repo.compare_and_set_status(
            reservation, ReservationStatus.ACTIVE
        ):
            return False
        logger.info(
            "Reservation #%s for item #%s expired", reservation.id, reservation.item_id
        )
        return True
