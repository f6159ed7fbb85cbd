"""Catalog and membership use cases."""

from datetime import date

import pytest

from lending.application.add_media_item import AddMediaItemHandler
from lending.application.borrow_item import BorrowItemHandler
from lending.application.pay_fines import PayAllFinesHandler, ShowFinesHandler
from lending.application.register_user import ListUsersHandler, RegisterUserHandler
from lending.application.show_inventory import SearchItemsHandler, ShowInventoryHandler
from lending.domain.exceptions import UserNotFound, ValidationError
from lending.domain.service.fine_strategy import FineCalculator
from lending.domain.service.inventory_pool import InventoryPool
from lending.domain.service.lending_coordinator import LendingCoordinator
from lending.domain.service.payment_ledger import PaymentLedger
from tests.fakes import (
    FakeFineRepository,
    FakeLoanRepository,
    FakeMediaItemRepository,
    FakeUserRepository,
)


class TestAddMediaItem:

    def test_new_item_has_every_copy_available(self):
        dto = AddMediaItemHandler(FakeMediaItemRepository()).handle(
            "  Dune ", "Frank Herbert", " book", 3
        )
        assert dto.id == 1
        assert dto.title == "Dune"
        assert dto.category == "BOOK"
        assert (dto.total, dto.available, dto.on_loan) == (3, 3, 0)

    @pytest.mark.parametrize("title, category, copies", [
        ("", "BOOK", 1),
        ("Dune", "  ", 1),
        ("Dune", "BOOK", 0),
        ("Dune", "BOOK", -2),
    ])
    def test_invalid_input_rejected(self, title, category, copies):
        repo = FakeMediaItemRepository()
        with pytest.raises(ValidationError):
            AddMediaItemHandler(repo).handle(title, "someone", category, copies)
        assert repo.list_all() == []


class TestRegisterUser:

    def test_defaults_to_member(self):
        dto = RegisterUserHandler(FakeUserRepository()).handle("alice", "alice@example.org")
        assert dto.role == "MEMBER"

    def test_admin_role_is_case_insensitive(self):
        dto = RegisterUserHandler(FakeUserRepository()).handle("root", "root@example.org", "admin")
        assert dto.role == "ADMIN"

    def test_unknown_role(self):
        with pytest.raises(ValidationError, match="Unknown role"):
            RegisterUserHandler(FakeUserRepository()).handle("bob", "bob@example.org", "guest")

    def test_username_taken(self):
        repo = FakeUserRepository()
        RegisterUserHandler(repo).handle("alice", "alice@example.org")
        with pytest.raises(ValidationError, match="already taken"):
            RegisterUserHandler(repo).handle("alice", "other@example.org")

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterUserHandler(FakeUserRepository()).handle("carol", "carol.example.org")

    def test_list_users(self):
        repo = FakeUserRepository()
        RegisterUserHandler(repo).handle("alice", "alice@example.org")
        RegisterUserHandler(repo).handle("bob", "bob@example.org", "ADMIN")
        assert [(u.username, u.role) for u in ListUsersHandler(repo).handle()] == [
            ("alice", "MEMBER"), ("bob", "ADMIN"),
        ]


class TestInventoryQueries:

    @pytest.fixture
    def items(self):
        repo = FakeMediaItemRepository()
        add = AddMediaItemHandler(repo)
        add.handle("Dune", "Frank Herbert", "BOOK", 2)
        add.handle("Children of Dune", "Frank Herbert", "BOOK", 1)
        add.handle("Kind of Blue", "Miles Davis", "CD", 1)
        return repo

    def test_inventory_lists_everything(self, items):
        assert [i.title for i in ShowInventoryHandler(items).handle()] == [
            "Dune", "Children of Dune", "Kind of Blue",
        ]

    @pytest.mark.parametrize("keyword, expected", [
        ("dune", {"Dune", "Children of Dune"}),
        ("HERBERT", {"Dune", "Children of Dune"}),
        ("cd", {"Kind of Blue"}),
        ("", {"Dune", "Children of Dune", "Kind of Blue"}),
        ("tolkien", set()),
    ])
    def test_search(self, items, keyword, expected):
        assert {i.title for i in SearchItemsHandler(items).handle(keyword)} == expected

    def test_on_loan_reflected_in_inventory(self, items):
        users = FakeUserRepository()
        user = RegisterUserHandler(users).handle("alice", "alice@example.org")
        coordinator = LendingCoordinator(
            users, items, FakeLoanRepository(), FakeFineRepository(),
            InventoryPool(items), FineCalculator.with_defaults(),
        )
        BorrowItemHandler(coordinator).handle(user.id, 1, date(2026, 3, 1))

        dune = ShowInventoryHandler(items).handle()[0]
        assert (dune.available, dune.on_loan) == (1, 1)


class TestFineHandlersForUnknownUsers:

    def test_statement(self):
        ledger = PaymentLedger(FakeLoanRepository(), FakeFineRepository())
        with pytest.raises(UserNotFound):
            ShowFinesHandler(ledger, FakeUserRepository()).handle(7)

    def test_pay_all(self):
        ledger = PaymentLedger(FakeLoanRepository(), FakeFineRepository())
        with pytest.raises(UserNotFound):
            PayAllFinesHandler(ledger, FakeUserRepository()).handle(7)

    def test_user_without_fines(self):
        users = FakeUserRepository()
        user = RegisterUserHandler(users).handle("alice", "alice@example.org")
        ledger = PaymentLedger(FakeLoanRepository(), FakeFineRepository())
        statement = ShowFinesHandler(ledger, users).handle(user.id)
        assert statement.fines == []
        assert statement.total_unpaid == "0.00 ILS"
        assert PayAllFinesHandler(ledger, users).handle(user.id) == []
