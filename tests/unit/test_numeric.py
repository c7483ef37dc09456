"""Tests for shared rounding and clamping helpers"""

import math

import pytest

from signal_engine.utils.numeric import clamp, non_negative, round_half_up


class TestRoundHalfUp:
    """Test half-up rounding"""

    @pytest.mark.parametrize("value,digits,expected", [
        (2.5, 0, 3),
        (-2.5, 0, -2),
        (12.5, 0, 13),
        (1.125, 2, 1.13),
        (0.333, 2, 0.33),
    ])
    def test_halves_round_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_infinity_passes_through(self):
        assert round_half_up(math.inf, 2) == math.inf
        assert round_half_up(-math.inf) == -math.inf

    def test_nan_passes_through(self):
        assert math.isnan(round_half_up(math.nan, 2))


class TestNonNegative:
    """Test observation guard"""

    @pytest.mark.parametrize("value", [None, -1.0, math.nan, math.inf, -math.inf])
    def test_unusable_values_become_zero(self, value):
        assert non_negative(value) == 0.0

    def test_valid_value_unchanged(self):
        assert non_negative(1250.5) == 1250.5


def test_clamp():
    assert clamp(150, 0, 100) == 100
    assert clamp(-5, 0, 100) == 0
    assert clamp(42, 0, 100) == 42
