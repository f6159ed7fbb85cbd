"""Application service: Show Inventory and Search Items use cases (queries)."""

from __future__ import annotations

from lending.application.dto import MediaItemDTO
from lending.domain.repository.media_item_repository import MediaItemRepository


class ShowInventoryHandler:

    def __init__(self, item_repo: MediaItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self) -> list[MediaItemDTO]:
        return [MediaItemDTO.from_domain(item) for item in self._item_repo.list_all()]


class SearchItemsHandler:

    def __init__(self, item_repo: MediaItemRepository) -> None:
        self._item_repo = item_repo

    def handle(self, keyword: str = "") -> list[MediaItemDTO]:
        """Case-insensitive match on title, author or category."""
        return [MediaItemDTO.from_domain(item) for item in self._item_repo.search(keyword)]
