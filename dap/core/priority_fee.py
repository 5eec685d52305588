"""
Priority fee scaling.

A filler competing on priority fee passes part of that fee back to the
swapper. Each wei of priority fee moves the price by
`mps_per_priority_fee_wei` milli-bips (MPS = 1e7 is 100%):

    input  -> amount * (MPS - fee * rate) / MPS, floored at 0, rounded down
    output -> amount * (MPS + fee * rate) / MPS, rounded up

Output scaling overflow is a hard failure: it means the order was built
with an absurd rate, not that the runtime input was hostile.
"""

from typing import Sequence, Tuple

from dap.core.math import checked_add, checked_mul, mul_div_down, mul_div_up
from dap.core.types import InputToken, OutputToken

MPS = 10_000_000


def effective_priority_fee(priority_fee: int, baseline_priority_fee: int = 0) -> int:
    """
    Priority fee above the order's baseline.

    The first `baseline_priority_fee` wei of priority fee earn nothing.
    """
    if priority_fee > baseline_priority_fee:
        return priority_fee - baseline_priority_fee
    return 0


def scale_input_amount(amount: int, priority_fee: int, mps_per_priority_fee_wei: int) -> int:
    """Input scaled down by the priority fee, floored at 0 instead of overflowing."""
    scaling = priority_fee * mps_per_priority_fee_wei
    if scaling >= MPS:
        return 0
    return mul_div_down(amount, MPS - scaling, MPS)


def scale_output_amount(amount: int, priority_fee: int, mps_per_priority_fee_wei: int) -> int:
    """
    Raises:
        ArithmeticOverflowError: the scaled amount does not fit in uint256
    """
    scaling = checked_add(MPS, checked_mul(priority_fee, mps_per_priority_fee_wei))
    return mul_div_up(amount, scaling, MPS)


def scale_input(
    token: bytes,
    amount: int,
    priority_fee: int,
    mps_per_priority_fee_wei: int,
) -> InputToken:
    """Scaled input; the scaled amount is also the maximum charged."""
    scaled = scale_input_amount(amount, priority_fee, mps_per_priority_fee_wei)
    return InputToken(token=token, amount=scaled, max_amount=scaled)


def scale_output(
    token: bytes,
    amount: int,
    recipient: bytes,
    priority_fee: int,
    mps_per_priority_fee_wei: int,
) -> OutputToken:
    return OutputToken(
        token=token,
        amount=scale_output_amount(amount, priority_fee, mps_per_priority_fee_wei),
        recipient=recipient,
    )


def scale_outputs(outputs: Sequence, priority_fee: int) -> Tuple[OutputToken, ...]:
    """Scale PriorityOutput-like values (token, amount, recipient, rate)."""
    return tuple(
        scale_output(o.token, o.amount, o.recipient, priority_fee, o.mps_per_priority_fee_wei)
        for o in outputs
    )
