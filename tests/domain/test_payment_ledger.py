"""Unit tests for the PaymentLedger and OverdueReport domain services."""

import threading
from datetime import date

import pytest

from lending.domain.exceptions import AlreadyPaid, FineNotFound
from lending.domain.model.fine import Fine, FineStatus
from lending.domain.model.loan import Loan
from lending.domain.model.user import User
from lending.domain.model.value_objects import Money
from lending.domain.service.overdue_report import OverdueReport
from lending.domain.service.payment_ledger import PaymentLedger
from tests.fakes import FakeFineRepository, FakeLoanRepository, FakeUserRepository

PAY_DAY = date(2026, 5, 1)


def _loan(loan_id: int, user_id: int, due: date, returned: date | None = None) -> Loan:
    return Loan(
        id=loan_id, user_id=user_id, item_id=1,
        loan_date=date(2026, 3, 1), due_date=due, return_date=returned,
    )


def _setup():
    loans = FakeLoanRepository([
        _loan(1, user_id=1, due=date(2026, 3, 29), returned=date(2026, 4, 1)),
        _loan(2, user_id=1, due=date(2026, 3, 8), returned=date(2026, 3, 10)),
        _loan(3, user_id=2, due=date(2026, 3, 8), returned=date(2026, 3, 9)),
    ])
    fines = FakeFineRepository([
        Fine(id=1, loan_id=1, amount=Money.of("30.00"), issued_date=date(2026, 4, 1)),
        Fine(id=2, loan_id=2, amount=Money.of("40.00"), issued_date=date(2026, 3, 10)),
        Fine(id=3, loan_id=3, amount=Money.of("20.00"), issued_date=date(2026, 3, 9)),
    ])
    return PaymentLedger(loans, fines), fines


class TestPay:

    def test_marks_paid_with_date(self):
        ledger, fines = _setup()
        ledger.pay(1, PAY_DAY)
        stored = fines.get_by_id(1)
        assert stored.status == FineStatus.PAID
        assert stored.paid_date == PAY_DAY

    def test_defaults_to_today(self):
        ledger, fines = _setup()
        ledger.pay(1)
        assert fines.get_by_id(1).paid_date == date.today()

    def test_unknown_fine(self):
        ledger, _ = _setup()
        with pytest.raises(FineNotFound):
            ledger.pay(99, PAY_DAY)

    def test_paid_fine_is_never_reopened(self):
        ledger, fines = _setup()
        ledger.pay(1, PAY_DAY)
        with pytest.raises(AlreadyPaid):
            ledger.pay(1, date(2026, 5, 2))
        assert fines.get_by_id(1).paid_date == PAY_DAY

    def test_concurrent_payments_settle_a_fine_once(self):
        ledger, fines = _setup()
        barrier = threading.Barrier(4)
        paid: list = []
        refused: list = []

        def pay(day: int) -> None:
            barrier.wait()
            try:
                paid.append(ledger.pay(1, date(2026, 5, day)))
            except AlreadyPaid as exc:
                refused.append(exc)

        threads = [threading.Thread(target=pay, args=(d,)) for d in (1, 2, 3, 4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(paid) == 1
        assert len(refused) == 3
        assert fines.get_by_id(1).paid_date == paid[0].paid_date


class TestPayAll:

    def test_pays_only_this_users_fines(self):
        ledger, fines = _setup()
        paid = ledger.pay_all(1, PAY_DAY)
        assert sorted(f.id for f in paid) == [1, 2]
        assert fines.get_by_id(3).status == FineStatus.UNPAID
        assert ledger.total_unpaid(1) == Money.zero()

    def test_skips_already_paid_fines(self):
        ledger, fines = _setup()
        ledger.pay(2, date(2026, 4, 1))
        paid = ledger.pay_all(1, PAY_DAY)
        assert [f.id for f in paid] == [1]
        assert fines.get_by_id(2).paid_date == date(2026, 4, 1)

    def test_no_op_when_nothing_owed(self):
        ledger, _ = _setup()
        ledger.pay_all(1, PAY_DAY)
        assert ledger.pay_all(1, PAY_DAY) == []

    def test_user_without_loans(self):
        ledger, _ = _setup()
        assert ledger.pay_all(42, PAY_DAY) == []


class TestQueries:

    def test_unpaid_fines_oldest_first(self):
        ledger, _ = _setup()
        assert [f.id for f in ledger.unpaid_fines_for(1)] == [2, 1]

    def test_total_unpaid(self):
        ledger, _ = _setup()
        assert ledger.total_unpaid(1) == Money.of("70.00")
        ledger.pay(1, PAY_DAY)
        assert ledger.total_unpaid(1) == Money.of("40.00")

    def test_fines_for_includes_paid(self):
        ledger, _ = _setup()
        ledger.pay(1, PAY_DAY)
        assert sorted(f.id for f in ledger.fines_for(1)) == [1, 2]


class TestOverdueReport:

    def test_one_notice_per_user_with_counts(self):
        users = FakeUserRepository([
            User(id=1, username="alice", email="alice@example.org"),
            User(id=2, username="bob", email="bob@example.org"),
            User(id=3, username="carol", email="carol@example.org"),
        ])
        loans = FakeLoanRepository([
            _loan(1, user_id=1, due=date(2026, 3, 8)),
            _loan(2, user_id=1, due=date(2026, 3, 10)),
            _loan(3, user_id=2, due=date(2026, 3, 9)),
            _loan(4, user_id=2, due=date(2026, 3, 9), returned=date(2026, 3, 20)),
            _loan(5, user_id=3, due=date(2026, 4, 30)),
        ])

        notices = OverdueReport(loans, users).notices(date(2026, 3, 15))

        assert [(n.user_id, n.overdue_count) for n in notices] == [(1, 2), (2, 1)]
        assert notices[0].email == "alice@example.org"
        assert notices[0].message == "You have 2 overdue item(s)."

    def test_no_overdue_loans(self):
        report = OverdueReport(FakeLoanRepository(), FakeUserRepository())
        assert report.notices(date(2026, 3, 15)) == []
