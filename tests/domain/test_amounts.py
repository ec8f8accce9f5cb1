"""Tests for Decimal amount helpers."""

from decimal import Decimal

import pytest

from devcost_kernel.domain.amounts import (
    ZERO,
    percent,
    round_amount,
    safe_divide,
    sum_amounts,
    to_amount,
)


class TestToAmount:

    def test_decimal_passes_through(self):
        value = Decimal("123.45")
        assert to_amount(value) is value

    def test_int_and_str(self):
        assert to_amount(10000000) == Decimal("10000000")
        assert to_amount("2500000") == Decimal("2500000")

    def test_float_goes_through_str(self):
        assert to_amount(0.1) == Decimal("0.1")

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            to_amount(True)

    def test_unsupported_type_rejected(self):
        with pytest.raises(TypeError):
            to_amount([1])


class TestRoundAmount:

    def test_half_up_to_whole_yen(self):
        assert round_amount(Decimal("166666.5")) == Decimal("166667")
        assert round_amount(Decimal("166666.4")) == Decimal("166666")

    def test_negative_half_rounds_away_from_zero(self):
        assert round_amount(Decimal("-2.5")) == Decimal("-3")


class TestDivision:

    def test_safe_divide_zero_denominator(self):
        assert safe_divide(Decimal("5"), ZERO) == ZERO

    def test_percent(self):
        assert percent(Decimal("25"), Decimal("200")) == Decimal("12.5")

    def test_percent_of_zero_whole(self):
        assert percent(Decimal("25"), ZERO) == ZERO

    def test_sum_amounts_empty_is_decimal_zero(self):
        total = sum_amounts([])
        assert isinstance(total, Decimal)
        assert total == ZERO
