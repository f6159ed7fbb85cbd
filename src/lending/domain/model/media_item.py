"""MediaItem aggregate: a catalog title with a finite number of copies.

Each item knows how many physical copies the library owns and how many
are currently on the shelf.  The difference is the number of copies out
on active loans.
"""

from __future__ import annotations

from dataclasses import dataclass

from lending.domain.exceptions import ValidationError


def normalize_category(category: str) -> str:
    """Canonical form used for every category comparison and lookup."""
    return (category or "").strip().upper()


@dataclass
class MediaItem:
    """Aggregate root for copy tracking.

    Invariants:
    - ``0 <= available_copies <= total_copies``
    - ``on_loan`` equals the number of ACTIVE loans for this item

    ``available_copies`` is only changed through ``adjust_available``,
    which repositories call from their conditional-update primitive.
    """

    id: int | None
    title: str
    author: str
    category: str
    total_copies: int
    available_copies: int

    @staticmethod
    def create(title: str, author: str, category: str, copies: int) -> MediaItem:
        """Create a new catalog item with every copy on the shelf."""
        if not title or not title.strip():
            raise ValidationError("Title is required")
        category = normalize_category(category)
        if not category:
            raise ValidationError("Category is required")
        if copies <= 0:
            raise ValidationError("Number of copies must be positive")
        return MediaItem(
            id=None,
            title=title.strip(),
            author=(author or "").strip(),
            category=category,
            total_copies=copies,
            available_copies=copies,
        )

    @property
    def on_loan(self) -> int:
        return self.total_copies - self.available_copies

    @property
    def is_available(self) -> bool:
        return self.available_copies > 0

    def can_adjust(self, delta: int) -> bool:
        return 0 <= self.available_copies + delta <= self.total_copies

    def adjust_available(self, delta: int) -> bool:
        """Apply ``delta`` to the shelf count if it stays within bounds.

        Returns False, leaving the item untouched, when it would not.
        """
        if not self.can_adjust(delta):
            return False
        self.available_copies += delta
        return True

    def matches(self, keyword: str) -> bool:
        needle = keyword.strip().lower()
        return any(
            needle in field_value.lower()
            for field_value in (self.title, self.author, self.category)
        )
