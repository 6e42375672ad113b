"""Unit tests for domain value objects."""

import pytest

from vending.domain.exceptions import ValidationError
from vending.domain.model.value_objects import Denomination, Money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        assert Money(150).cents == 150

    def test_of_factory_from_string(self):
        assert Money.of("120") == Money(120)

    @pytest.mark.parametrize("raw", [149.99, 150.0, True])
    def test_of_factory_rejects_non_integers(self, raw):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of(raw)

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("1.2x")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Money(1.5)

    def test_addition(self):
        assert Money(100) + Money(50) == Money(150)

    def test_subtraction(self):
        assert Money(200) - Money(150) == Money(50)

    def test_subtraction_below_zero_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            Money(10) - Money(150)

    def test_comparison(self):
        assert Money(10) < Money(150)
        assert Money(150) >= Money(150)

    def test_str_formats_dollars(self):
        assert str(Money(120)) == "$1.20"
        assert str(Money(5)) == "$0.05"
        assert str(Money(0)) == "$0.00"
        assert str(Money(12345)) == "$123.45"

    def test_sum_of_coins(self):
        coins = [Denomination.ONE_DOLLAR, Denomination.FIFTY_CENTS]
        assert Money.sum_of(coins) == Money(150)


# ── Denomination ─────────────────────────────────────────────────────────────


class TestDenomination:

    def test_iterates_largest_first(self):
        assert [d.value for d in Denomination] == [200, 100, 50, 20, 10]

    def test_parse_int(self):
        assert Denomination.parse(50) is Denomination.FIFTY_CENTS

    def test_parse_string(self):
        assert Denomination.parse("200") is Denomination.TWO_DOLLARS

    @pytest.mark.parametrize("raw", [5, 25, 0, -10, "abc", None, 100.5, 50.0, True, "100.5"])
    def test_parse_unknown_rejected(self, raw):
        with pytest.raises(ValidationError, match="Invalid denomination"):
            Denomination.parse(raw)
