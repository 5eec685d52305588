"""
Unit tests for curve decay.

Tests cover:
1. Curve position lookup
2. Piecewise interpolation and flat extrapolation
3. Role-aware rounding of the curve delta
4. Curve validation (InvalidDecayCurve)
5. Saturation of positions and amounts
6. Packed uint16 position arrays
"""

import pytest

from dap.core.decay import (
    DecayCurve,
    Role,
    decay_curve,
    decay_input,
    decay_output,
    locate_curve_position,
)
from dap.core.decay import uint16_array
from dap.core.errors import (
    IndexOutOfBoundsError,
    InvalidArrLengthError,
    InvalidDecayCurveError,
)
from dap.core.math import INT256_MAX, INT256_MIN, UINT16_MAX, UINT256_MAX

E18 = 10**18


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def three_point_curve():
    return DecayCurve.from_points([(10, 100), (20, 150), (30, 300)])


def decay_full_range(curve, start, decay_start, current, role=Role.OUTPUT):
    return decay_curve(curve, start, decay_start, current, 0, UINT256_MAX, role)


# =============================================================================
# Curve Position Tests
# =============================================================================


class TestLocateCurvePosition:
    """Tests for segment lookup."""

    def test_before_first_point(self, three_point_curve):
        assert locate_curve_position(three_point_curve, 5) == (0, 10, 0, 100)

    def test_on_first_point(self, three_point_curve):
        assert locate_curve_position(three_point_curve, 10) == (0, 10, 0, 100)

    def test_inside_segment(self, three_point_curve):
        assert locate_curve_position(three_point_curve, 15) == (10, 20, 100, 150)
        assert locate_curve_position(three_point_curve, 29) == (20, 30, 150, 300)

    def test_exact_interior_point_returns_same_point(self, three_point_curve):
        assert locate_curve_position(three_point_curve, 20) == (20, 20, 150, 150)

    def test_after_last_point(self, three_point_curve):
        assert locate_curve_position(three_point_curve, 30) == (30, 30, 300, 300)
        assert locate_curve_position(three_point_curve, 1000) == (30, 30, 300, 300)

    def test_straddles_delta(self, three_point_curve):
        """start_point <= delta <= end_point inside the curve."""
        for delta in range(11, 30):
            start, end, _, _ = locate_curve_position(three_point_curve, delta)
            assert start <= delta <= end

    def test_single_point_curve(self):
        curve = DecayCurve.from_points([(100, -E18)])
        assert locate_curve_position(curve, 50) == (0, 100, 0, -E18)
        assert locate_curve_position(curve, 150) == (100, 100, -E18, -E18)


# =============================================================================
# Decay Tests
# =============================================================================


class TestCurveDecay:
    """Tests for piecewise-linear decay."""

    def test_single_point_extrapolates_flat(self):
        curve = DecayCurve.from_points([(100, -E18)])
        assert decay_full_range(curve, E18, 100, 250) == 2 * E18

    def test_single_point_interpolates_from_zero(self):
        curve = DecayCurve.from_points([(100, -E18)])
        assert decay_full_range(curve, E18, 100, 150) == 1_500_000_000_000_000_000

    @pytest.mark.parametrize(
        "current,expected",
        [(5, 950), (10, 900), (15, 875), (20, 850), (25, 775), (30, 700), (31, 700), (10_000, 700)],
    )
    def test_multi_point(self, three_point_curve, current, expected):
        assert decay_full_range(three_point_curve, 1000, 0, current) == expected

    def test_before_decay_start_returns_start(self, three_point_curve):
        assert decay_full_range(three_point_curve, 1000, 50, 50) == 1000
        assert decay_full_range(three_point_curve, 1000, 50, 10) == 1000

    def test_start_amount_bounded_before_decay(self, three_point_curve):
        assert decay_curve(three_point_curve, 50, 100, 100, 60, 80, Role.OUTPUT) == 60
        assert decay_curve(three_point_curve, 90, 100, 100, 60, 80, Role.OUTPUT) == 80

    def test_empty_curve_returns_bounded_start(self):
        assert decay_curve(DecayCurve(), 1000, 0, 500, 0, 900, Role.INPUT) == 900

    def test_result_respects_min(self, three_point_curve):
        assert decay_curve(three_point_curve, 1000, 0, 30, 800, UINT256_MAX, Role.OUTPUT) == 800

    def test_input_curve_non_decreasing(self):
        curve = DecayCurve.from_points([(7, -100), (20, -150), (33, -400)])
        values = [decay_full_range(curve, 1000, 0, c, Role.INPUT) for c in range(0, 50)]
        assert values == sorted(values)

    def test_output_curve_non_increasing(self):
        curve = DecayCurve.from_points([(7, 100), (20, 150), (33, 400)])
        values = [decay_full_range(curve, 1000, 0, c, Role.OUTPUT) for c in range(0, 50)]
        assert values == sorted(values, reverse=True)


class TestCurveRounding:
    """Tests for rounding of the interpolated delta."""

    def test_negative_delta(self):
        # exact delta -3.33; input rises to 103.33
        curve = DecayCurve.from_points([(3, -10)])
        assert decay_full_range(curve, 100, 0, 1, Role.INPUT) == 103
        assert decay_full_range(curve, 100, 0, 1, Role.OUTPUT) == 104

    def test_positive_delta(self):
        # exact delta 3.33; output falls to 96.67
        curve = DecayCurve.from_points([(3, 10)])
        assert decay_full_range(curve, 100, 0, 1, Role.INPUT) == 96
        assert decay_full_range(curve, 100, 0, 1, Role.OUTPUT) == 97

    @pytest.mark.parametrize("current", [1, 2, 4, 5, 6])
    def test_single_point_input_matches_linear(self, current):
        curve = DecayCurve.from_points([(7, -10)])
        expected = decay_input(100, 110, 0, 7, current)
        assert decay_full_range(curve, 100, 0, current, Role.INPUT) == expected

    @pytest.mark.parametrize("current", [1, 2, 4, 5, 6])
    def test_single_point_output_matches_linear(self, current):
        curve = DecayCurve.from_points([(7, 10)])
        expected = decay_output(100, 90, 0, 7, current)
        assert decay_full_range(curve, 100, 0, current, Role.OUTPUT) == expected


class TestCurveValidation:
    """Tests for malformed curves."""

    def test_seventeen_points_rejected(self):
        curve = DecayCurve.from_points([(i + 1, i) for i in range(17)])
        with pytest.raises(InvalidDecayCurveError):
            decay_full_range(curve, 1000, 0, 5)

    def test_rejected_even_before_decay_starts(self):
        curve = DecayCurve.from_points([(i + 1, i) for i in range(17)])
        with pytest.raises(InvalidDecayCurveError):
            decay_full_range(curve, 1000, 100, 50)

    def test_sixteen_points_accepted(self):
        curve = DecayCurve.from_points([(i + 1, i) for i in range(16)])
        assert decay_full_range(curve, 1000, 0, 100) == 985

    def test_non_increasing_positions_rejected(self):
        curve = DecayCurve.from_points([(10, 1), (10, 2)])
        with pytest.raises(InvalidDecayCurveError):
            decay_full_range(curve, 1000, 0, 5)

    def test_position_wider_than_uint16_rejected(self):
        curve = DecayCurve.from_points([(UINT16_MAX + 1, 1)])
        with pytest.raises(InvalidDecayCurveError):
            decay_full_range(curve, 1000, 0, 5)

    def test_mismatched_lengths_rejected(self):
        curve = DecayCurve(relative_positions=(1, 2), relative_amounts=(5,))
        with pytest.raises(InvalidDecayCurveError):
            decay_full_range(curve, 1000, 0, 5)


class TestCurveSaturation:
    """Tests for extreme positions and amounts."""

    def test_position_beyond_uint16_is_fully_decayed(self):
        curve = DecayCurve.from_points([(UINT16_MAX, -5)])
        at_end = decay_full_range(curve, 100, 0, UINT16_MAX)
        assert at_end == 105
        assert decay_full_range(curve, 100, 0, 10**12) == at_end

    def test_position_offset_does_not_wrap(self):
        """An offset of 2**16 + 1 must not behave like an offset of 1."""
        curve = DecayCurve.from_points([(2, 0), (UINT16_MAX, -1000)])
        assert decay_full_range(curve, 100, 0, 2**16 + 1) == 1100

    def test_extreme_negative_delta_saturates_to_max(self):
        curve = DecayCurve.from_points([(1, INT256_MIN)])
        assert decay_curve(curve, 10, 0, 5, 0, 1000, Role.OUTPUT) == 1000

    def test_extreme_positive_delta_saturates_to_min(self):
        curve = DecayCurve.from_points([(1, INT256_MAX)])
        assert decay_curve(curve, 10, 0, 5, 3, 1000, Role.INPUT) == 3

    def test_overflowing_sum_saturates(self):
        curve = DecayCurve.from_points([(1, -5)])
        assert decay_curve(curve, UINT256_MAX - 1, 0, 5, 0, UINT256_MAX, Role.OUTPUT) == UINT256_MAX


# =============================================================================
# Packed Array Tests
# =============================================================================


class TestUint16Array:
    """Tests for 16x16-bit packing."""

    def test_pack_layout(self):
        """Index 0 is the least significant 16 bits."""
        assert uint16_array.pack([1, 2]) == 1 | (2 << 16)

    def test_get_element(self):
        packed = uint16_array.pack([5, 0, UINT16_MAX])
        assert uint16_array.get_element(packed, 0) == 5
        assert uint16_array.get_element(packed, 1) == 0
        assert uint16_array.get_element(packed, 2) == UINT16_MAX
        assert uint16_array.get_element(packed, 15) == 0

    def test_unpack(self):
        values = list(range(100, 1700, 100))
        assert uint16_array.unpack(uint16_array.pack(values), 16) == values

    def test_index_out_of_bounds(self):
        with pytest.raises(IndexOutOfBoundsError):
            uint16_array.get_element(0, 16)

    def test_too_many_values(self):
        with pytest.raises(InvalidArrLengthError):
            uint16_array.pack(list(range(17)))

    def test_value_too_wide(self):
        with pytest.raises(InvalidArrLengthError):
            uint16_array.pack([UINT16_MAX + 1])

    def test_curve_packed_form(self, three_point_curve):
        assert three_point_curve.packed_positions == 10 | (20 << 16) | (30 << 32)
        rebuilt = DecayCurve.from_packed(three_point_curve.packed_positions, [100, 150, 300])
        assert rebuilt == three_point_curve

    def test_from_packed_rejects_seventeen_amounts(self):
        with pytest.raises(InvalidDecayCurveError):
            DecayCurve.from_packed(0, [1] * 17)
