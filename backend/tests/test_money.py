"""
Tests for salary coercion and rounding helpers.
"""

from decimal import Decimal

import pytest

from gajicore.core.money import (
    MAX_SALARY,
    ceil_to,
    ceil_to_five_sen,
    round_half_up,
    round_to_nearest_five_sen,
    to_money,
)


class TestToMoney:
    @pytest.mark.parametrize("value", [None, True, "abc", "", float("nan"), "Infinity", -5, "1e27"])
    def test_invalid_input_is_zero(self, value):
        assert to_money(value) == 0

    def test_float_keeps_short_form(self):
        assert to_money(3000.1) == Decimal("3000.1")

    def test_upper_limit(self):
        assert to_money(MAX_SALARY) == MAX_SALARY
        assert to_money(MAX_SALARY + 1) == 0


class TestRounding:
    def test_half_up(self):
        assert round_half_up(Decimal("2.345")) == Decimal("2.35")
        assert round_half_up(Decimal("2.5"), 0) == Decimal("3")

    def test_ceiling(self):
        assert ceil_to(Decimal("330.01")) == Decimal("331")

    def test_five_sen(self):
        assert round_to_nearest_five_sen(Decimal("123.47")) == Decimal("123.45")
        assert ceil_to_five_sen(Decimal("123.41")) == Decimal("123.45")

    def test_values_wider_than_context_precision(self):
        value = Decimal("1000000000000000000000000000000.005")
        assert round_half_up(value) == Decimal("1000000000000000000000000000000.01")
        assert ceil_to(Decimal("1000000000000000000000000000000.5")) == Decimal("1000000000000000000000000000001")
