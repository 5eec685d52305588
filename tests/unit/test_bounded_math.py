"""
Unit tests for bounded arithmetic.

Tests cover:
1. Strict signed subtraction
2. Saturating subtraction and clamping
3. Signed differences
4. Checked multiply/divide
"""

import pytest

from dap.core.errors import ArithmeticOverflowError, NegativeUintError
from dap.core.math import (
    INT256_MAX,
    INT256_MIN,
    UINT256_MAX,
    bound,
    bounded_sub,
    checked_add,
    checked_mul,
    diff_signed,
    mul_div_down,
    mul_div_up,
    sub_signed,
)


EXTREMES_UNSIGNED = [0, 1, 7, 10**18, INT256_MAX, UINT256_MAX - 1, UINT256_MAX]
EXTREMES_SIGNED = [INT256_MIN, -(10**18), -1, 0, 1, 10**18, INT256_MAX]


class TestSubSigned:
    """Tests for strict uint - int subtraction."""

    def test_positive_subtrahend(self):
        assert sub_signed(10, 3) == 7

    def test_negative_subtrahend_adds(self):
        assert sub_signed(10, -3) == 13

    def test_exact_zero(self):
        assert sub_signed(5, 5) == 0

    def test_negative_result_raises(self):
        """Should fail instead of wrapping."""
        with pytest.raises(NegativeUintError):
            sub_signed(3, 10)

    def test_overflow_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            sub_signed(UINT256_MAX, -1)


class TestBoundedSub:
    """Tests for saturating subtraction."""

    def test_within_bounds(self):
        assert bounded_sub(100, 30, 0, 1000) == 70

    def test_underflow_saturates_to_min(self):
        assert bounded_sub(3, 10, 0, 100) == 0
        assert bounded_sub(3, 10, 5, 100) == 5

    def test_overflow_saturates_to_max(self):
        assert bounded_sub(UINT256_MAX, -1, 0, UINT256_MAX) == UINT256_MAX
        assert bounded_sub(UINT256_MAX, -1, 0, 1000) == 1000

    def test_result_clamped(self):
        assert bounded_sub(50, -100, 0, 120) == 120
        assert bounded_sub(50, 10, 45, 100) == 45

    def test_never_raises_and_stays_in_range(self):
        """Should hold for every combination of extreme operands."""
        bounds = [(0, UINT256_MAX), (0, 0), (10**18, 2 * 10**18), (UINT256_MAX, UINT256_MAX)]
        for a in EXTREMES_UNSIGNED:
            for b in EXTREMES_SIGNED:
                for lo, hi in bounds:
                    result = bounded_sub(a, b, lo, hi)
                    assert lo <= result <= hi


class TestBound:
    def test_clamps(self):
        assert bound(5, 10, 20) == 10
        assert bound(25, 10, 20) == 20
        assert bound(15, 10, 20) == 15

    def test_degenerate_range(self):
        assert bound(0, 7, 7) == 7


class TestDiffSigned:
    """Tests for signed difference of two uint256 values."""

    def test_positive(self):
        assert diff_signed(5, 3) == 2

    def test_negative(self):
        assert diff_signed(3, 5) == -2

    def test_int256_max_fits(self):
        assert diff_signed(INT256_MAX, 0) == INT256_MAX
        assert diff_signed(0, INT256_MAX) == -INT256_MAX

    def test_unrepresentable_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            diff_signed(UINT256_MAX, 0)
        with pytest.raises(ArithmeticOverflowError):
            diff_signed(0, UINT256_MAX)


class TestFixedPoint:
    """Tests for checked mul/div."""

    def test_mul_div_rounding(self):
        assert mul_div_down(10, 3, 4) == 7
        assert mul_div_up(10, 3, 4) == 8

    def test_exact_division_same_both_ways(self):
        assert mul_div_down(10, 4, 4) == mul_div_up(10, 4, 4) == 10

    def test_zero_product(self):
        assert mul_div_up(0, 5, 3) == 0

    def test_product_overflow_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            mul_div_down(UINT256_MAX, 2, 4)
        with pytest.raises(ArithmeticOverflowError):
            mul_div_up(UINT256_MAX, 2, 4)

    def test_zero_denominator_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            mul_div_down(1, 1, 0)

    def test_checked_add_mul(self):
        assert checked_add(1, 2) == 3
        assert checked_mul(3, 4) == 12
        with pytest.raises(ArithmeticOverflowError):
            checked_add(UINT256_MAX, 1)
        with pytest.raises(ArithmeticOverflowError):
            checked_mul(2**200, 2**100)
