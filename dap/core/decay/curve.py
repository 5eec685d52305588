"""
Curve Decay - piecewise-linear decay over a compact curve.

A curve is a list of at most 16 points

    (relative_position: uint16, relative_amount: int256)

where `relative_position` counts blocks (or seconds) since the decay
start and `relative_amount` is the cumulative signed change subtracted
from the start amount at that offset. Between points the delta is
interpolated linearly; before the first point it ramps from 0, after
the last point it stays flat.

The final amount is always computed with the saturating `bounded_sub`,
so the caller-supplied [min_amount, max_amount] range is never left and
the last step cannot fail however extreme the curve is.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from dap.core.decay import uint16_array
from dap.core.decay.linear import Role, Rounding, linear_decay
from dap.core.errors import InvalidDecayCurveError
from dap.core.math import INT256_MAX, INT256_MIN, UINT16_MAX, bound, bounded_sub

MAX_CURVE_POINTS = 16


# =============================================================================
# Curve
# =============================================================================


@dataclass(frozen=True)
class DecayCurve:
    """
    Immutable decay curve.

    Construction does not validate; a malformed curve fails on the first
    decay that touches it.

    Attributes:
        relative_positions: strictly increasing uint16 offsets
        relative_amounts: cumulative int256 deltas, same length
    """
    relative_positions: Tuple[int, ...] = field(default_factory=tuple)
    relative_amounts: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "relative_positions", tuple(self.relative_positions))
        object.__setattr__(self, "relative_amounts", tuple(self.relative_amounts))

    @classmethod
    def from_points(cls, points: Sequence[Tuple[int, int]]) -> "DecayCurve":
        return cls(
            relative_positions=tuple(p for p, _ in points),
            relative_amounts=tuple(a for _, a in points),
        )

    @classmethod
    def from_packed(cls, packed_positions: int, relative_amounts: Sequence[int]) -> "DecayCurve":
        """
        Build from the on-chain form: the amounts array decides the length.

        Raises:
            InvalidDecayCurveError: more than 16 amounts
        """
        if len(relative_amounts) > MAX_CURVE_POINTS:
            raise InvalidDecayCurveError(f"curve has {len(relative_amounts)} points, max {MAX_CURVE_POINTS}")
        return cls(
            relative_positions=tuple(uint16_array.unpack(packed_positions, len(relative_amounts))),
            relative_amounts=tuple(relative_amounts),
        )

    @property
    def points(self) -> List[Tuple[int, int]]:
        return list(zip(self.relative_positions, self.relative_amounts))

    @property
    def packed_positions(self) -> int:
        """16x16-bit packed relative positions (index 0 = least significant)."""
        return uint16_array.pack(self.relative_positions)

    def __len__(self) -> int:
        return len(self.relative_amounts)

    def validate(self) -> None:
        """
        Raises:
            InvalidDecayCurveError: too many points, mismatched lengths,
                positions not strictly increasing uint16, or deltas
                outside int256
        """
        if len(self.relative_amounts) > MAX_CURVE_POINTS:
            raise InvalidDecayCurveError(
                f"curve has {len(self.relative_amounts)} points, max {MAX_CURVE_POINTS}"
            )
        if len(self.relative_positions) != len(self.relative_amounts):
            raise InvalidDecayCurveError(
                f"{len(self.relative_positions)} positions for {len(self.relative_amounts)} amounts"
            )

        previous = -1
        for position in self.relative_positions:
            if not 0 <= position <= UINT16_MAX:
                raise InvalidDecayCurveError(f"relative position {position} does not fit in uint16")
            if position <= previous:
                raise InvalidDecayCurveError("relative positions must be strictly increasing")
            previous = position

        for amount in self.relative_amounts:
            if not INT256_MIN <= amount <= INT256_MAX:
                raise InvalidDecayCurveError(f"relative amount {amount} does not fit in int256")


# =============================================================================
# Decay
# =============================================================================


def locate_curve_position(curve: DecayCurve, delta: int) -> Tuple[int, int, int, int]:
    """
    Find the segment containing `delta`.

    Returns:
        (start_point, end_point, start_delta, end_delta) such that
        start_point <= delta <= end_point, except:
        - at or before the first point: (0, first_position, 0, first_amount)
        - at or after the last point: (last_position, last_position,
          last_amount, last_amount)
        An exact hit on an interior point returns that point twice.
    """
    positions = curve.relative_positions
    amounts = curve.relative_amounts

    if positions[0] >= delta:
        return 0, positions[0], 0, amounts[0]

    last = len(positions) - 1
    if positions[last] <= delta:
        return positions[last], positions[last], amounts[last], amounts[last]

    for i in range(1, last + 1):
        if positions[i] == delta:
            return positions[i], positions[i], amounts[i], amounts[i]
        if positions[i] > delta:
            return positions[i - 1], positions[i], amounts[i - 1], amounts[i]

    # unreachable: positions[last] > delta
    raise InvalidDecayCurveError("curve position not found")


def decay(
    curve: DecayCurve,
    start_amount: int,
    decay_start_position: int,
    current_position: int,
    min_amount: int,
    max_amount: int,
    role: Role,
) -> int:
    """
    Amount at `current_position` under `curve`, clamped to [min, max].

    The interpolated delta is subtracted from the start amount, so it is
    rounded against the role: up for INPUT, down for OUTPUT. The
    resulting amount then rounds the same way as linear decay.

    Raises:
        InvalidDecayCurveError: malformed curve (see DecayCurve.validate)
    """
    curve.validate()

    if decay_start_position >= current_position or len(curve) == 0:
        return bound(start_amount, min_amount, max_amount)

    # Offsets past the uint16 range saturate to "fully decayed"
    delta = min(current_position - decay_start_position, UINT16_MAX)

    start_point, end_point, start_delta, end_delta = locate_curve_position(curve, delta)
    curve_delta = linear_decay(
        start_point,
        end_point,
        delta,
        start_delta,
        end_delta,
        Rounding.UP if role is Role.INPUT else Rounding.DOWN,
    )

    return bounded_sub(start_amount, curve_delta, min_amount, max_amount)
