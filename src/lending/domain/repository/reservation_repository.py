"""Abstract repository for the Reservation aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lending.domain.model.reservation import Reservation, ReservationStatus


class ReservationRepository(ABC):

    @abstractmethod
    def get_by_id(self, reservation_id: int) -> Reservation | None:
        """Return a reservation by ID, or None if not found."""

    @abstractmethod
    def list_by_item(self, item_id: int) -> list[Reservation]:
        """Return every reservation (any status) for an item."""

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Reservation]:
        """Return every reservation (any status) for a user."""

    @abstractmethod
    def list_by_status(self, status: ReservationStatus) -> list[Reservation]:
        """Return every reservation in the given status."""

    @abstractmethod
    def save(self, reservation: Reservation) -> None:
        """Persist a new or updated reservation, assigning IDs in creation order."""

    @abstractmethod
    def compare_and_set_status(
        self, reservation: Reservation, expected: ReservationStatus
    ) -> bool:
        """Store ``reservation`` only if the stored status is still ``expected``.

        Returns False, writing nothing, if another caller moved the stored
        record to a different status in the meantime.
        """
