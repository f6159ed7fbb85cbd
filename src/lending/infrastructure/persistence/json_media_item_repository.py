"""JSON-file-backed implementation of MediaItemRepository."""

from __future__ import annotations

from lending.domain.model.media_item import MediaItem
from lending.domain.repository.media_item_repository import MediaItemRepository
from lending.infrastructure.persistence.json_store import JsonRecordStore


class JsonMediaItemRepository(JsonRecordStore, MediaItemRepository):

    # --- MediaItemRepository interface ----------------------------------------

    def get_by_id(self, item_id: int) -> MediaItem | None:
        for raw in self._find_raw(lambda r: r["id"] == item_id):
            return self._to_domain(raw)
        return None

    def list_all(self) -> list[MediaItem]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, item: MediaItem) -> None:
        item.id = self._upsert_raw(self._to_raw(item))

    def adjust_available_copies(self, item_id: int, delta: int) -> bool:
        def apply(raw: dict) -> bool:
            item = self._to_domain(raw)
            if not item.adjust_available(delta):
                return False
            raw["available_copies"] = item.available_copies
            return True

        return self._update_raw(item_id, apply)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: MediaItem) -> dict:
        return {
            "id": item.id,
            "title": item.title,
            "author": item.author,
            "category": item.category,
            "total_copies": item.total_copies,
            "available_copies": item.available_copies,
        }

    @staticmethod
    def _to_domain(raw: dict) -> MediaItem:
        return MediaItem(
            id=raw["id"],
            title=raw["title"],
            author=raw.get("author", ""),
            category=raw["category"],
            total_copies=raw["total_copies"],
            available_copies=raw.get("available_copies", raw["total_copies"]),
        )
