"""
Unit tests for linear decay.

Tests cover:
1. Boundary positions and no-op decay
2. Role-aware rounding
3. Ordering validation (IncorrectAmounts, EndTimeBeforeStartTime)
4. Range and monotonicity properties
"""

import pytest

from dap.core.decay import Role, Rounding, decay_input, decay_linear, decay_output, linear_decay
from dap.core.errors import (
    ArithmeticOverflowError,
    EndTimeBeforeStartTimeError,
    IncorrectAmountsError,
)
from dap.core.math import UINT256_MAX

E18 = 10**18

RANGES = [
    (E18, 2 * E18, 100, 200),
    (2 * E18, E18, 100, 200),
    (0, 10, 0, 3),
    (10, 0, 0, 3),
    (12345, 67890, 1_700_000_000, 1_700_000_777),
    (5, 5, 0, 10),
]


class TestBoundaries:
    """Tests for positions outside the decay window."""

    def test_midpoint(self):
        assert decay_linear(E18, 2 * E18, 100, 200, 150, Role.INPUT) == 1_500_000_000_000_000_000

    def test_after_end_is_end_amount(self):
        assert decay_linear(E18, 2 * E18, 100, 200, 250, Role.INPUT) == 2 * E18
        assert decay_linear(E18, 2 * E18, 100, 200, 200, Role.INPUT) == 2 * E18

    def test_before_start_is_start_amount(self):
        assert decay_linear(E18, 2 * E18, 100, 200, 50, Role.OUTPUT) == E18
        assert decay_linear(E18, 2 * E18, 100, 200, 100, Role.OUTPUT) == E18

    def test_constant_amount(self):
        """start == end never decays."""
        for position in (0, 99, 150, 10**9):
            assert decay_linear(7, 7, 100, 200, position, Role.INPUT) == 7
            assert decay_linear(7, 7, 100, 200, position, Role.OUTPUT) == 7

    def test_zero_length_window(self):
        assert decay_linear(1, 2, 100, 100, 99, Role.INPUT) == 1
        assert decay_linear(1, 2, 100, 100, 100, Role.INPUT) == 2

    def test_end_before_start_raises(self):
        with pytest.raises(EndTimeBeforeStartTimeError):
            decay_linear(1, 2, 200, 100, 150, Role.INPUT)

    def test_end_before_start_raises_even_without_decay(self):
        with pytest.raises(EndTimeBeforeStartTimeError):
            decay_linear(5, 5, 200, 100, 150, Role.OUTPUT)


class TestRounding:
    """Tests for direction-aware rounding."""

    def test_input_rounds_down(self):
        # 10 * 1/3 = 3.33
        assert decay_input(0, 10, 0, 3, 1) == 3

    def test_output_rounds_up(self):
        # 10 - 3.33 = 6.67
        assert decay_output(10, 0, 0, 3, 1) == 7

    def test_rounding_follows_role_not_direction(self):
        assert decay_linear(0, 10, 0, 3, 1, Role.OUTPUT) == 4
        assert decay_linear(10, 0, 0, 3, 1, Role.INPUT) == 6

    def test_signed_interpolation(self):
        assert linear_decay(0, 3, 1, 0, -10, Rounding.DOWN) == -4
        assert linear_decay(0, 3, 1, 0, -10, Rounding.UP) == -3

    def test_interpolation_overflow_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            linear_decay(0, 4, 2, 0, UINT256_MAX, Rounding.DOWN)


class TestOrdering:
    """Tests for role ordering validation."""

    def test_input_must_not_fall(self):
        with pytest.raises(IncorrectAmountsError):
            decay_input(2 * E18, E18, 100, 200, 150)

    def test_output_must_not_rise(self):
        with pytest.raises(IncorrectAmountsError):
            decay_output(E18, 2 * E18, 100, 200, 150)

    def test_valid_orderings(self):
        assert decay_input(E18, 2 * E18, 100, 200, 150) == 1_500_000_000_000_000_000
        assert decay_output(2 * E18, E18, 100, 200, 150) == 1_500_000_000_000_000_000


class TestProperties:
    """Range and monotonicity over a sweep of positions."""

    @pytest.mark.parametrize("start,end,start_pos,end_pos", RANGES)
    def test_result_within_amounts(self, start, end, start_pos, end_pos):
        lo, hi = min(start, end), max(start, end)
        for position in range(start_pos - 5, end_pos + 5):
            for role in Role:
                assert lo <= decay_linear(start, end, start_pos, end_pos, position, role) <= hi

    def test_input_non_decreasing(self):
        values = [decay_input(1000, 1777, 10, 63, p) for p in range(0, 80)]
        assert values == sorted(values)

    def test_output_non_increasing(self):
        values = [decay_output(1777, 1000, 10, 63, p) for p in range(0, 80)]
        assert values == sorted(values, reverse=True)
