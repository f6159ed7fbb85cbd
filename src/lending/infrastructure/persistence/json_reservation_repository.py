"""JSON-file-backed implementation of ReservationRepository."""

from __future__ import annotations

from datetime import datetime

from lending.domain.model.reservation import Reservation, ReservationStatus
from lending.domain.repository.reservation_repository import ReservationRepository
from lending.infrastructure.persistence.json_store import JsonRecordStore


class JsonReservationRepository(JsonRecordStore, ReservationRepository):

    # --- ReservationRepository interface --------------------------------------

    def get_by_id(self, reservation_id: int) -> Reservation | None:
        for raw in self._find_raw(lambda r: r["id"] == reservation_id):
            return self._to_domain(raw)
        return None

    def list_by_item(self, item_id: int) -> list[Reservation]:
        return [self._to_domain(r) for r in self._find_raw(lambda r: r["item_id"] == item_id)]

    def list_by_user(self, user_id: int) -> list[Reservation]:
        return [self._to_domain(r) for r in self._find_raw(lambda r: r["user_id"] == user_id)]

    def list_by_status(self, status: ReservationStatus) -> list[Reservation]:
        return [
            self._to_domain(r) for r in self._find_raw(lambda r: r["status"] == status.value)
        ]

    def save(self, reservation: Reservation) -> None:
        reservation.id = self._upsert_raw(self._to_raw(reservation))

    def compare_and_set_status(
        self, reservation: Reservation, expected: ReservationStatus
    ) -> bool:
        replacement = self._to_raw(reservation)

        def swap(raw: dict) -> bool:
            if raw["status"] != expected.value:
                return False
            raw.update(replacement)
            return True

        return self._update_raw(reservation.id, swap)  # type: ignore[arg-type]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(reservation: Reservation) -> dict:
        return {
            "id": reservation.id,
            "user_id": reservation.user_id,
            "item_id": reservation.item_id,
            "reservation_date": reservation.reservation_date.isoformat(),
            "expiry_date": reservation.expiry_date.isoformat(),
            "status": reservation.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Reservation:
        return Reservation(
            id=raw["id"],
            user_id=raw["user_id"],
            item_id=raw["item_id"],
            reservation_date=datetime.fromisoformat(raw["reservation_date"]),
            expiry_date=datetime.fromisoformat(raw["expiry_date"]),
            status=ReservationStatus(raw["status"]),
        )
