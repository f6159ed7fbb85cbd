"""JSON-file-backed implementation of LoanRepository."""

from __future__ import annotations

from datetime import date

from lending.domain.model.loan import Loan, LoanStatus
from lending.domain.repository.loan_repository import LoanRepository
from lending.infrastructure.persistence.json_store import JsonRecordStore


class JsonLoanRepository(JsonRecordStore, LoanRepository):

    # --- LoanRepository interface ---------------------------------------------

    def get_by_id(self, loan_id: int) -> Loan | None:
        for raw in self._find_raw(lambda r: r["id"] == loan_id):
            return self._to_domain(raw)
        return None

    def list_by_user(self, user_id: int) -> list[Loan]:
        return [self._to_domain(r) for r in self._find_raw(lambda r: r["user_id"] == user_id)]

    def list_by_item(self, item_id: int) -> list[Loan]:
        return [self._to_domain(r) for r in self._find_raw(lambda r: r["item_id"] == item_id)]

    def list_by_status(self, status: LoanStatus) -> list[Loan]:
        return [loan for loan in map(self._to_domain, self._load_raw()) if loan.status is status]

    def save(self, loan: Loan) -> None:
        loan.id = self._upsert_raw(self._to_raw(loan))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(loan: Loan) -> dict:
        return {
            "id": loan.id,
            "user_id": loan.user_id,
            "item_id": loan.item_id,
            "loan_date": loan.loan_date.isoformat(),
            "due_date": loan.due_date.isoformat(),
            "return_date": loan.return_date.isoformat() if loan.return_date else None,
            # Derived from return_date; stored for readers of the raw file only.
            "status": loan.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Loan:
        return Loan(
            id=raw["id"],
            user_id=raw["user_id"],
            item_id=raw["item_id"],
            loan_date=date.fromisoformat(raw["loan_date"]),
            due_date=date.fromisoformat(raw["due_date"]),
            return_date=date.fromisoformat(raw["return_date"]) if raw.get("return_date") else None,
        )
