"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime

from lending.domain.model.user import User, UserRole
from lending.domain.repository.user_repository import UserRepository
from lending.infrastructure.persistence.json_store import JsonRecordStore


class JsonUserRepository(JsonRecordStore, UserRepository):

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: int) -> User | None:
        for raw in self._find_raw(lambda r: r["id"] == user_id):
            return self._to_domain(raw)
        return None

    def get_by_username(self, username: str) -> User | None:
        wanted = username.strip().lower()
        for raw in self._find_raw(lambda r: r["username"].lower() == wanted):
            return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, user: User) -> None:
        user.id = self._upsert_raw(self._to_raw(user))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role.value,
            "created_at": user.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            username=raw["username"],
            email=raw["email"],
            role=UserRole(raw.get("role", "MEMBER")),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
