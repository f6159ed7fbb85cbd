"""User aggregate: a library member or administrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from lending.domain.exceptions import ValidationError


class UserRole(Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


@dataclass
class User:

    id: int | None
    username: str
    email: str
    role: UserRole = UserRole.MEMBER
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(username: str, email: str, role: UserRole = UserRole.MEMBER) -> User:
        """Create a new user, validating the required fields."""
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid email address: {email!r}")
        return User(id=None, username=username.strip(), email=email.strip(), role=role)
