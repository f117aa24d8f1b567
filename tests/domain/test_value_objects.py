"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import InvalidArgumentError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity, round2, to_decimal


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_float_rejected(self):
        with pytest.raises(InvalidArgumentError, match="floats"):
            Money.of(19.99)

    def test_raw_float_amount_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Decimal"):
            Money(19.99)

    def test_garbage_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Invalid decimal"):
            Money.of("ten dollars")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction(self):
        assert Money.of("10") - Money.of("3") == Money.of("7")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1", "USD") + Money.of("1", "EUR")

    def test_comparisons(self):
        assert Money.of("1") < Money.of("2")
        assert Money.of("2") >= Money.of("2")

    def test_str_shows_two_decimals(self):
        assert str(Money.of("5")) == "$5.00"
        assert str(Money.of("5.5")) == "$5.50"

    def test_rounded_is_half_up(self):
        assert Money.of("2.345").rounded() == Money.of("2.35")
        assert Money.of("2.344").rounded() == Money.of("2.34")

    def test_zero(self):
        assert Money.zero().is_zero


class TestDecimalHelpers:

    def test_round2_half_up(self):
        assert round2(Decimal("0.005")) == Decimal("0.01")
        assert round2(Decimal("1.125")) == Decimal("1.13")

    def test_to_decimal_rejects_bool(self):
        with pytest.raises(InvalidArgumentError):
            to_decimal(True)


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(-2)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            Quantity("3")

    def test_addition(self):
        assert Quantity(2) + Quantity(3) == Quantity(5)
