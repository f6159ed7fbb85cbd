"""Application service: Register User use case and the member listing."""

from __future__ import annotations

from lending.application.dto import UserDTO
from lending.domain.exceptions import ValidationError
from lending.domain.model.user import User, UserRole
from lending.domain.repository.user_repository import UserRepository


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, username: str, email: str, role: str = "MEMBER") -> UserDTO:
        try:
            user_role = UserRole(role.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {role!r}") from exc

        if self._user_repo.get_by_username(username or "") is not None:
            raise ValidationError(f"Username '{username}' is already taken")

        user = User.create(username, email, user_role)
        self._user_repo.save(user)
        return UserDTO.from_domain(user)


class ListUsersHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self) -> list[UserDTO]:
        return [UserDTO.from_domain(user) for user in self._user_repo.list_all()]
