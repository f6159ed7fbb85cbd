"""Money: Decimal cents, one currency per amount."""

from decimal import Decimal

import pytest

from lending.domain.exceptions import ValidationError
from lending.domain.model.value_objects import Money


def test_defaults_to_shekels():
    assert Money(Decimal("10.50")).currency == "ILS"


@pytest.mark.parametrize("raw, cents", [
    ("25.99", "25.99"),
    (30, "30.00"),
    (0.1, "0.10"),
    ("2.005", "2.01"),
])
def test_amounts_are_held_in_cents(raw, cents):
    assert Money.of(raw).amount == Decimal(cents)


def test_float_inputs_do_not_drift():
    assert Money.of(0.1) + Money.of(0.2) == Money.of("0.3")


def test_garbage_rejected():
    with pytest.raises(ValidationError, match="Invalid money amount"):
        Money.of("ten")


def test_negative_rejected():
    with pytest.raises(ValidationError, match="cannot be negative"):
        Money(Decimal("-1"))


def test_float_amount_must_go_through_of():
    with pytest.raises(ValidationError, match="must be a Decimal"):
        Money(10.5)


class TestDailyMultiplication:

    def test_by_days(self):
        assert Money.of("20.00") * 3 == Money.of("60.00")

    @pytest.mark.parametrize("factor", [1.5, True, "2"])
    def test_non_integer_factor(self, factor):
        with pytest.raises(TypeError):
            Money.of("10.00") * factor

    def test_negative_factor(self):
        with pytest.raises(ValidationError, match="negative factor"):
            Money.of("10.00") * -1


class TestTotals:

    def test_sum_of_many_small_fines(self):
        assert Money.total([Money.of("0.10")] * 30) == Money.of("3.00")

    def test_empty_total_is_zero(self):
        total = Money.total([])
        assert total == Money.zero()
        assert not total.is_positive

    def test_mixed_currencies_refused(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.total([Money.of("10"), Money.of("5", "EUR")])


def test_ordering():
    assert Money.of("5") < Money.of("10")
    assert Money.of("10") >= Money.of("10.00")
    assert max(Money.of("3"), Money.of("7"), Money.of("1")) == Money.of("7")


def test_display():
    assert str(Money.of("30")) == "30.00 ILS"
    assert str(Money.zero("EUR")) == "0.00 EUR"
