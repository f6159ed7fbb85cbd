"""Reservation aggregate: a user's place in an item's FIFO queue.

A reservation starts ACTIVE and moves exactly once to one of the
terminal states CANCELLED, FULFILLED or EXPIRED.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from lending.domain.exceptions import NotActive


class ReservationStatus(Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    FULFILLED = "FULFILLED"
    EXPIRED = "EXPIRED"

    @property
    def is_terminal(self) -> bool:
        return self is not ReservationStatus.ACTIVE


@dataclass
class Reservation:

    id: int | None
    user_id: int
    item_id: int
    reservation_date: datetime
    expiry_date: datetime
    status: ReservationStatus = ReservationStatus.ACTIVE

    @staticmethod
    def place(user_id: int, item_id: int, now: datetime, hold: timedelta) -> Reservation:
        return Reservation(
            id=None,
            user_id=user_id,
            item_id=item_id,
            reservation_date=now,
            expiry_date=now + hold,
        )

    @property
    def is_active(self) -> bool:
        return self.status is ReservationStatus.ACTIVE

    @property
    def queue_key(self) -> tuple[datetime, int]:
        """FIFO order: creation time, then identity for identical timestamps."""
        return (self.reservation_date, self.id if self.id is not None else 0)

    def is_stale(self, now: datetime) -> bool:
        return self.is_active and self.expiry_date < now

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        self._leave_queue(ReservationStatus.CANCELLED)

    def fulfill(self, now: datetime, pickup_window: timedelta) -> None:
        """Mark as FULFILLED and open a fresh pickup window from ``now``."""
        self._leave_queue(ReservationStatus.FULFILLED)
        self.expiry_date = now + pickup_window

    def expire(self) -> None:
        self._leave_queue(ReservationStatus.EXPIRED)

    def _leave_queue(self, target: ReservationStatus) -> None:
        if not self.is_active:
            raise NotActive(
                f"Reservation #{self.id} is {self.status.value} and cannot "
                f"become {target.value}"
            )
        self.status = target
