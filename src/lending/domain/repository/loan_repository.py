"""Abstract repository for the Loan aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lending.domain.model.loan import Loan, LoanStatus


class LoanRepository(ABC):

    @abstractmethod
    def get_by_id(self, loan_id: int) -> Loan | None:
        """Return a loan by ID, or None if not found."""

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Loan]:
        """Return every loan (any status) for a user, oldest first."""

    @abstractmethod
    def list_by_item(self, item_id: int) -> list[Loan]:
        """Return every loan (any status) for an item, oldest first."""

    @abstractmethod
    def list_by_status(self, status: LoanStatus) -> list[Loan]:
        """Return every loan in the given status."""

    @abstractmethod
    def save(self, loan: Loan) -> None:
        """Persist a new or updated loan, assigning an ID to new ones."""
