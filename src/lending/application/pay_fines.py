"""Application service: fine payment use cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from lending.application.dto import FineDTO
from lending.domain.exceptions import UserNotFound
from lending.domain.repository.user_repository import UserRepository
from lending.domain.service.payment_ledger import PaymentLedger


@dataclass(frozen=True)
class FineStatementDTO:
    fines: list[FineDTO]
    total_unpaid: str


class PayFineHandler:

    def __init__(self, ledger: PaymentLedger) -> None:
        self._ledger = ledger

    def handle(self, fine_id: int, today: date | None = None) -> FineDTO:
        return FineDTO.from_domain(self._ledger.pay(fine_id, today))


class PayAllFinesHandler:

    def __init__(self, ledger: PaymentLedger, user_repo: UserRepository) -> None:
        self._ledger = ledger
        self._user_repo = user_repo

    def handle(self, user_id: int, today: date | None = None) -> list[FineDTO]:
        if not self._user_repo.exists(user_id):
            raise UserNotFound(f"User #{user_id} not found")
        return [FineDTO.from_domain(f) for f in self._ledger.pay_all(user_id, today)]


class ShowFinesHandler:

    def __init__(self, ledger: PaymentLedger, user_repo: UserRepository) -> None:
        self._ledger = ledger
        self._user_repo = user_repo

    def handle(self, user_id: int, unpaid_only: bool = False) -> FineStatementDTO:
        if not self._user_repo.exists(user_id):
            raise UserNotFound(f"User #{user_id} not found")
        if unpaid_only:
            fines = self._ledger.unpaid_fines_for(user_id)
        else:
            fines = self._ledger.fines_for(user_id)
        return FineStatementDTO(
            fines=[FineDTO.from_domain(f) for f in fines],
            total_unpaid=str(self._ledger.total_unpaid(user_id)),
        )
