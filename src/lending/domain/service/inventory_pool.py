"""Domain service: Inventory Pool.

Owns every change to an item's ``available_copies``.  A decrement and an
increment for the same item are serialized by a per-item lock and
applied through the repository's conditional update, so two borrowers
racing for the last copy can never both win.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from lending.domain.exceptions import InvariantViolation, ItemNotFound
from lending.domain.repository.media_item_repository import MediaItemRepository
from lending.domain.service.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


class InventoryPool:

    def __init__(self, item_repo: MediaItemRepository) -> None:
        self._item_repo = item_repo
        self._locks = KeyedLock()

    @contextmanager
    def hold(self, item_id: int) -> Iterator[None]:
        """Keep every other pool change for ``item_id`` waiting until exit."""
        with self._locks.hold(item_id):
            yield

    def available(self, item_id: int) -> int:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise ItemNotFound(f"Media item #{item_id} not found")
        return item.available_copies

    def try_decrement(self, item_id: int) -> bool:
        """Take one copy off the shelf.

        Returns False, changing nothing, when no copy is available.
        """
        with self._locks.hold(item_id):
            if not self._item_repo.exists(item_id):
                raise ItemNotFound(f"Media item #{item_id} not found")
            taken = self._item_repo.adjust_available_copies(item_id, -1)
        if taken:
            logger.debug("Copy of item #%s taken from the pool", item_id)
        return taken

    def increment(self, item_id: int) -> None:
        """Put one copy back on the shelf.

        Raises InvariantViolation if every copy is already on the shelf:
        that means a return was counted twice or a loan was lost.
        """
        with self._locks.hold(item_id):
            item = self._item_repo.get_by_id(item_id)
            if item is None:
                raise ItemNotFound(f"Media item #{item_id} not found")
            if not self._item_repo.adjust_available_copies(item_id, +1):
                logger.error(
                    "Inventory invariant violated: item #%s already has %s of %s "
                    "copies available, refusing increment",
                    item_id, item.available_copies, item.total_copies,
                )
                raise InvariantViolation(
                    f"Item #{item_id} cannot have more than "
                    f"{item.total_copies} available copies"
                )
        logger.debug("Copy of item #%s returned to the pool", item_id)
