"""JSON-file-backed implementation of FineRepository."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from lending.domain.model.fine import Fine, FineStatus
from lending.domain.model.value_objects import DEFAULT_CURRENCY, Money
from lending.domain.repository.fine_repository import FineRepository
from lending.infrastructure.persistence.json_store import JsonRecordStore


class JsonFineRepository(JsonRecordStore, FineRepository):

    # --- FineRepository interface ---------------------------------------------

    def get_by_id(self, fine_id: int) -> Fine | None:
        for raw in self._find_raw(lambda r: r["id"] == fine_id):
            return self._to_domain(raw)
        return None

    def get_by_loan_id(self, loan_id: int) -> Fine | None:
        for raw in self._find_raw(lambda r: r["loan_id"] == loan_id):
            return self._to_domain(raw)
        return None

    def list_by_status(self, status: FineStatus) -> list[Fine]:
        return [fine for fine in map(self._to_domain, self._load_raw()) if fine.status is status]

    def save(self, fine: Fine) -> None:
        fine.id = self._upsert_raw(self._to_raw(fine))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(fine: Fine) -> dict:
        return {
            "id": fine.id,
            "loan_id": fine.loan_id,
            "amount": str(fine.amount.amount),
            "currency": fine.amount.currency,
            "issued_date": fine.issued_date.isoformat(),
            "paid_date": fine.paid_date.isoformat() if fine.paid_date else None,
            "status": fine.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Fine:
        return Fine(
            id=raw["id"],
            loan_id=raw["loan_id"],
            amount=Money(Decimal(raw["amount"]), raw.get("currency", DEFAULT_CURRENCY)),
            issued_date=date.fromisoformat(raw["issued_date"]),
            paid_date=date.fromisoformat(raw["paid_date"]) if raw.get("paid_date") else None,
        )
