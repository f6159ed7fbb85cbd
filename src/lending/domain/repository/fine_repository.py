"""Abstract repository for the Fine aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lending.domain.model.fine import Fine, FineStatus


class FineRepository(ABC):

    @abstractmethod
    def get_by_id(self, fine_id: int) -> Fine | None:
        """Return a fine by ID, or None if not found."""

    @abstractmethod
    def get_by_loan_id(self, loan_id: int) -> Fine | None:
        """Return the fine issued for a loan, or None."""

    @abstractmethod
    def list_by_status(self, status: FineStatus) -> list[Fine]:
        """Return every fine in the given status."""

    @abstractmethod
    def save(self, fine: Fine) -> None:
        """Persist a new or updated fine, assigning an ID to new ones."""
