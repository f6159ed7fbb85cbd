"""Abstract repository for the MediaItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lending.domain.model.media_item import MediaItem


class MediaItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: int) -> MediaItem | None:
        """Return an item by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[MediaItem]:
        """Return every catalog item."""

    @abstractmethod
    def save(self, item: MediaItem) -> None:
        """Persist a new or updated item, assigning an ID to new ones."""

    @abstractmethod
    def adjust_available_copies(self, item_id: int, delta: int) -> bool:
        """Atomically add ``delta`` to the stored available-copies count.

        The update applies only when the result stays within
        ``[0, total_copies]``; otherwise nothing is written and False is
        returned.  Equivalent to ``UPDATE ... SET available = available +
        :delta WHERE available + :delta BETWEEN 0 AND total`` followed by
        a rows-affected check.
        """

    def exists(self, item_id: int) -> bool:
        return self.get_by_id(item_id) is not None

    def search(self, keyword: str) -> list[MediaItem]:
        """Items whose title, author or category contains ``keyword``."""
        if not keyword or not keyword.strip():
            return self.list_all()
        return [item for item in self.list_all() if item.matches(keyword)]
