"""Application service: Add Media Item use case."""

from __future__ import annotations

from lending.application.dto import MediaItemDTO
from lending.domain.model.media_item import MediaItem
from lending.domain.repository.media_item_repository import MediaItemRepository


class AddMediaItemHandler:

    def __init__(self, item_repo: MediaItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self, title: str, author: str, category: str, copies: int) -> MediaItemDTO:
        """Add a new title to the catalog with every copy on the shelf."""
        item = MediaItem.create(title, author, category, copies)
        self._item_repo.save(item)
        return MediaItemDTO.from_domain(item)
