"""
Linear Decay - two-point interpolation over time or block height.

An amount moves from `start_amount` at `start_point` to `end_amount` at
`end_point` and is flat outside that range. Rounding depends on who
the amount belongs to:

    INPUT  (paid by the swapper)     -> rounded down
    OUTPUT (received by the swapper) -> rounded up

so that every rounding step resolves in the swapper's favour.
"""

from enum import Enum

from dap.core.errors import (
    ArithmeticOverflowError,
    EndTimeBeforeStartTimeError,
    IncorrectAmountsError,
)
from dap.core.math import UINT256_MAX


class Rounding(Enum):
    DOWN = "down"
    UP = "up"


class Role(Enum):
    """Which side of the trade an amount is on."""
    INPUT = "input"
    OUTPUT = "output"

    @property
    def rounding(self) -> Rounding:
        """Rounding applied to a decayed amount of this role."""
        return Rounding.DOWN if self is Role.INPUT else Rounding.UP


def _div(numerator: int, denominator: int, rounding: Rounding) -> int:
    # Python // floors toward -inf; -(-n // d) is the ceiling
    if rounding is Rounding.DOWN:
        return numerator // denominator
    return -(-numerator // denominator)


def linear_decay(
    start_point: int,
    end_point: int,
    current_point: int,
    start_amount: int,
    end_amount: int,
    rounding: Rounding,
) -> int:
    """
    Interpolate between two (possibly signed) amounts.

    The interpolated value itself is rounded in the given direction,
    whichever way the amounts move. Callers guarantee
    `start_point <= end_point`.

    Raises:
        ArithmeticOverflowError: |end - start| * elapsed exceeds uint256
    """
    if current_point >= end_point:
        return end_amount
    if current_point <= start_point:
        return start_amount

    elapsed = current_point - start_point
    duration = end_point - start_point

    if abs(end_amount - start_amount) * elapsed > UINT256_MAX:
        raise ArithmeticOverflowError("decay interpolation overflows uint256")

    return start_amount + _div((end_amount - start_amount) * elapsed, duration, rounding)


def decay(
    start_amount: int,
    end_amount: int,
    start_position: int,
    end_position: int,
    current_position: int,
    role: Role,
) -> int:
    """
    Decayed amount at `current_position`.

    Args:
        start_amount: amount at or before `start_position`
        end_amount: amount at or after `end_position`
        start_position: decay start (timestamp or block)
        end_position: decay end (timestamp or block)
        current_position: evaluation snapshot
        role: INPUT rounds down, OUTPUT rounds up

    Raises:
        EndTimeBeforeStartTimeError: end_position < start_position
    """
    if end_position < start_position:
        raise EndTimeBeforeStartTimeError(
            f"decay end {end_position} precedes start {start_position}"
        )

    if start_amount == end_amount:
        return start_amount

    return linear_decay(
        start_position,
        end_position,
        current_position,
        start_amount,
        end_amount,
        role.rounding,
    )


def decay_input(
    start_amount: int,
    end_amount: int,
    start_position: int,
    end_position: int,
    current_position: int,
) -> int:
    """Decay an input amount; inputs may only rise over time."""
    if start_amount > end_amount:
        raise IncorrectAmountsError(
            f"input start {start_amount} exceeds end {end_amount}"
        )
    return decay(start_amount, end_amount, start_position, end_position, current_position, Role.INPUT)


def decay_output(
    start_amount: int,
    end_amount: int,
    start_position: int,
    end_position: int,
    current_position: int,
) -> int:
    """Decay an output amount; outputs may only fall over time."""
    if start_amount < end_amount:
        raise IncorrectAmountsError(
            f"output start {start_amount} below end {end_amount}"
        )
    return decay(start_amount, end_amount, start_position, end_position, current_position, Role.OUTPUT)
