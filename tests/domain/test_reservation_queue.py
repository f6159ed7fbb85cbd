"""Unit tests for the ReservationQueueManager domain service."""

import threading
from datetime import datetime, timedelta

import pytest

from lending.domain.exceptions import (
    DuplicateReservation,
    ItemAvailable,
    ItemNotFound,
    NotActive,
    NotOwner,
    ReservationNotFound,
    UserNotFound,
)
from lending.domain.model.media_item import MediaItem
from lending.domain.model.reservation import ReservationStatus
from lending.domain.model.user import User
from lending.domain.service.reservation_queue import ReservationQueueManager
from tests.fakes import (
    CancellingReservationRepository,
    FakeMediaItemRepository,
    FakeReservationRepository,
    FakeUserRepository,
)

T0 = datetime(2026, 3, 1, 9, 0)
HOLD = timedelta(hours=48)


def _setup(reservation_repo=None):
    users = FakeUserRepository([
        User(id=i, username=f"user{i}", email=f"user{i}@example.org") for i in (1, 2, 3)
    ])
    items = FakeMediaItemRepository([
        MediaItem(id=1, title="Dune", author="Herbert", category="BOOK",
                  total_copies=2, available_copies=0),
        MediaItem(id=2, title="Kind of Blue", author="Davis", category="CD",
                  total_copies=1, available_copies=1),
        MediaItem(id=3, title="Solaris", author="Lem", category="BOOK",
                  total_copies=1, available_copies=0),
    ])
    reservations = reservation_repo or FakeReservationRepository()
    return ReservationQueueManager(reservations, items, users), reservations


class TestCreate:

    def test_creates_active_reservation_with_hold_window(self):
        queue, repo = _setup()
        r = queue.create(user_id=1, item_id=1, now=T0)
        stored = repo.get_by_id(r.id)
        assert stored.status == ReservationStatus.ACTIVE
        assert stored.reservation_date == T0
        assert stored.expiry_date == T0 + HOLD

    def test_available_item_cannot_be_reserved(self):
        queue, repo = _setup()
        with pytest.raises(ItemAvailable, match="borrow it directly"):
            queue.create(user_id=1, item_id=2, now=T0)
        assert repo.list_by_item(2) == []

    def test_duplicate_active_reservation_rejected(self):
        queue, _ = _setup()
        queue.create(1, 1, T0)
        with pytest.raises(DuplicateReservation):
            queue.create(1, 1, T0 + timedelta(minutes=5))

    def test_new_reservation_allowed_after_cancel(self):
        queue, _ = _setup()
        first = queue.create(1, 1, T0)
        queue.cancel(first.id, user_id=1)
        second = queue.create(1, 1, T0 + timedelta(minutes=5))
        assert second.id != first.id
        assert queue.position(second.id) == 1

    def test_user_may_reserve_again_once_their_hold_lapsed(self):
        queue, repo = _setup()
        first = queue.create(1, 1, T0)
        assert queue.position(first.id) == 1

        second = queue.create(1, 1, T0 + timedelta(hours=49))

        assert repo.get_by_id(first.id).status == ReservationStatus.EXPIRED
        assert queue.position(second.id) == 1

    def test_lapsed_hold_is_not_ranked(self):
        queue, repo = _setup()
        lapsed = queue.create(1, 1, T0)
        behind = queue.create(2, 1, T0 + timedelta(hours=40))
        later = T0 + timedelta(hours=49)

        assert queue.position(lapsed.id, later) == -1
        assert queue.position(behind.id, later) == 1
        assert [r.id for r in queue.queue_for(1, later)] == [behind.id]
        assert repo.get_by_id(lapsed.id).status == ReservationStatus.EXPIRED

    def test_same_user_may_reserve_different_items(self):
        queue, _ = _setup()
        queue.create(1, 1, T0)
        queue.create(1, 3, T0)
        assert len(queue.reservations_for(1, active_only=True)) == 2

    def test_unknown_user(self):
        queue, _ = _setup()
        with pytest.raises(UserNotFound):
            queue.create(99, 1, T0)

    def test_unknown_item(self):
        queue, _ = _setup()
        with pytest.raises(ItemNotFound):
            queue.create(1, 99, T0)

    def test_concurrent_duplicates_yield_one_active_reservation(self):
        queue, repo = _setup()
        barrier = threading.Barrier(8)
        errors: list[Exception] = []

        def reserve() -> None:
            barrier.wait()
            try:
                queue.create(1, 1, T0)
            except DuplicateReservation as exc:
                errors.append(exc)

        threads = [threading.Thread(target=reserve) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        active = [r for r in repo.list_by_item(1) if r.is_active]
        assert len(active) == 1
        assert len(errors) == 7


class TestCancel:

    def test_cancel_own_reservation(self):
        queue, repo = _setup()
        r = queue.create(1, 1, T0)
        queue.cancel(r.id, user_id=1)
        assert repo.get_by_id(r.id).status == ReservationStatus.CANCELLED

    def test_not_found(self):
        queue, _ = _setup()
        with pytest.raises(ReservationNotFound):
            queue.cancel(42, user_id=1)

    def test_not_owner(self):
        queue, repo = _setup()
        r = queue.create(1, 1, T0)
        with pytest.raises(NotOwner):
            queue.cancel(r.id, user_id=2)
        assert repo.get_by_id(r.id).status == ReservationStatus.ACTIVE

    def test_cancel_twice_rejected(self):
        queue, _ = _setup()
        r = queue.create(1, 1, T0)
        queue.cancel(r.id, user_id=1)
        with pytest.raises(NotActive):
            queue.cancel(r.id, user_id=1)

    def test_cancel_fulfilled_rejected(self):
        queue, _ = _setup()
        r = queue.create(1, 1, T0)
        queue.fulfill_next(1, T0 + timedelta(hours=1))
        with pytest.raises(NotActive):
            queue.cancel(r.id, user_id=1)


class TestFifoOrdering:

    def test_positions_follow_creation_time(self):
        queue, _ = _setup()
        r1 = queue.create(1, 1, T0)
        r2 = queue.create(2, 1, T0 + timedelta(minutes=1))
        r3 = queue.create(3, 1, T0 + timedelta(minutes=2))
        assert [queue.position(r.id) for r in (r1, r2, r3)] == [1, 2, 3]

    def test_cancelled_head_is_skipped_by_fulfill(self):
        queue, _ = _setup()
        r1 = queue.create(1, 1, T0)
        r2 = queue.create(2, 1, T0 + timedelta(minutes=1))
        queue.create(3, 1, T0 + timedelta(minutes=2))
        queue.cancel(r1.id, user_id=1)
        assert queue.fulfill_next(1, T0 + timedelta(hours=1)).id == r2.id

    def test_identical_timestamps_ordered_by_creation(self):
        queue, _ = _setup()
        ids = [queue.create(u, 1, T0).id for u in (3, 1, 2)]
        assert [r.id for r in queue.queue_for(1)] == ids
        assert [queue.position(i) for i in ids] == [1, 2, 3]

    def test_position_of_unknown_or_inactive_is_minus_one(self):
        queue, _ = _setup()
        r = queue.create(1, 1, T0)
        queue.cancel(r.id, user_id=1)
        assert queue.position(r.id) == -1
        assert queue.position(999) == -1

    def test_queues_are_per_item(self):
        queue, _ = _setup()
        queue.create(1, 1, T0)
        r = queue.create(2, 3, T0 + timedelta(minutes=1))
        assert queue.position(r.id) == 1


class TestFulfillNext:

    def test_empty_queue_returns_none(self):
        queue, _ = _setup()
        assert queue.fulfill_next(1, T0) is None

    def test_fulfills_head_with_fresh_pickup_window(self):
        queue, repo = _setup()
        r1 = queue.create(1, 1, T0)
        queue.create(2, 1, T0 + timedelta(minutes=1))
        later = T0 + timedelta(hours=20)

        fulfilled = queue.fulfill_next(1, later)

        assert fulfilled.id == r1.id
        stored = repo.get_by_id(r1.id)
        assert stored.status == ReservationStatus.FULFILLED
        assert stored.expiry_date == later + HOLD

    def test_touches_only_the_head(self):
        queue, repo = _setup()
        queue.create(1, 1, T0)
        r2 = queue.create(2, 1, T0 + timedelta(minutes=1))
        queue.fulfill_next(1, T0 + timedelta(hours=1))
        assert repo.get_by_id(r2.id).status == ReservationStatus.ACTIVE
        assert queue.position(r2.id) == 1

    def test_stale_head_is_expired_not_fulfilled(self):
        queue, repo = _setup()
        r1 = queue.create(1, 1, T0)
        r2 = queue.create(2, 1, T0 + timedelta(hours=10))

        fulfilled = queue.fulfill_next(1, T0 + timedelta(hours=49))

        assert fulfilled.id == r2.id
        assert repo.get_by_id(r1.id).status == ReservationStatus.EXPIRED

    def test_head_cancelled_mid_fulfillment_moves_to_next(self):
        queue, repo = _setup(CancellingReservationRepository())
        r1 = queue.create(1, 1, T0)
        r2 = queue.create(2, 1, T0 + timedelta(minutes=1))
        repo.cancel_before_swap = r1.id

        fulfilled = queue.fulfill_next(1, T0 + timedelta(hours=1))

        assert fulfilled.id == r2.id
        assert repo.get_by_id(r1.id).status == ReservationStatus.CANCELLED
        assert repo.get_by_id(r2.id).status == ReservationStatus.FULFILLED


class TestExpireStale:

    def test_expires_only_past_holds(self):
        queue, repo = _setup()
        old = queue.create(1, 1, T0)
        fresh = queue.create(2, 1, T0 + timedelta(hours=30))

        count = queue.expire_stale(T0 + timedelta(hours=49))

        assert count == 1
        assert repo.get_by_id(old.id).status == ReservationStatus.EXPIRED
        assert repo.get_by_id(fresh.id).status == ReservationStatus.ACTIVE
        assert queue.position(fresh.id) == 1

    def test_terminal_reservations_are_left_alone(self):
        queue, repo = _setup()
        r = queue.create(1, 1, T0)
        queue.cancel(r.id, user_id=1)
        assert queue.expire_stale(T0 + timedelta(days=10)) == 0
        assert repo.get_by_id(r.id).status == ReservationStatus.CANCELLED

    def test_exactly_at_expiry_is_not_stale(self):
        queue, _ = _setup()
        queue.create(1, 1, T0)
        assert queue.expire_stale(T0 + HOLD) == 0


class TestQueueScenario:

    def test_three_reserve_one_cancels_head_fulfilled(self):
        """0 of 2 copies available; U1, U2, U3 reserve; U2 cancels."""
        queue, repo = _setup()
        r1 = queue.create(1, 1, T0)
        r2 = queue.create(2, 1, T0 + timedelta(minutes=1))
        r3 = queue.create(3, 1, T0 + timedelta(minutes=2))

        queue.cancel(r2.id, user_id=2)
        assert [r.user_id for r in queue.queue_for(1)] == [1, 3]

        now = T0 + timedelta(hours=5)
        fulfilled = queue.fulfill_next(1, now)
        assert fulfilled.id == r1.id
        assert repo.get_by_id(r1.id).expiry_date == now + HOLD
        assert queue.position(r3.id) == 1
