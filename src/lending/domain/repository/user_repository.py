"""Abstract repository for the User aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lending.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_username(self, username: str) -> User | None:
        """Return a user by case-insensitive username, or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every registered user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user, assigning an ID to new ones."""

    def exists(self, user_id: int) -> bool:
        return self.get_by_id(user_id) is not None
