"""
Order-level decay: turn order inputs/outputs into settlement tokens.

Linear (v1/v2) amounts decay between two positions; curve (v3) amounts
follow their own curve from a common decay start block. Inputs round
down, outputs round up.
"""

from typing import Sequence, Tuple

from dap.core.decay import Role, decay_curve, decay_input, decay_output
from dap.core.math import UINT256_MAX
from dap.core.order.types import DutchInput, DutchOutput, V3DutchInput, V3DutchOutput
from dap.core.types import InputToken, OutputToken


def decay_dutch_input(
    input_: DutchInput,
    decay_start: int,
    decay_end: int,
    current: int,
) -> InputToken:
    """The maximum charged is the fully decayed (end) amount."""
    amount = decay_input(input_.start_amount, input_.end_amount, decay_start, decay_end, current)
    return InputToken(token=input_.token, amount=amount, max_amount=input_.end_amount)


def decay_dutch_outputs(
    outputs: Sequence[DutchOutput],
    decay_start: int,
    decay_end: int,
    current: int,
) -> Tuple[OutputToken, ...]:
    return tuple(
        OutputToken(
            token=output.token,
            amount=decay_output(output.start_amount, output.end_amount, decay_start, decay_end, current),
            recipient=output.recipient,
        )
        for output in outputs
    )


def decay_v3_input(input_: V3DutchInput, decay_start_block: int, current_block: int) -> InputToken:
    """Bounded to [0, max_amount]."""
    amount = decay_curve(
        input_.curve,
        input_.start_amount,
        decay_start_block,
        current_block,
        0,
        input_.max_amount,
        Role.INPUT,
    )
    return InputToken(token=input_.token, amount=amount, max_amount=input_.max_amount)


def decay_v3_outputs(
    outputs: Sequence[V3DutchOutput],
    decay_start_block: int,
    current_block: int,
) -> Tuple[OutputToken, ...]:
    """Each output is bounded to [min_amount, UINT256_MAX]."""
    return tuple(
        OutputToken(
            token=output.token,
            amount=decay_curve(
                output.curve,
                output.start_amount,
                decay_start_block,
                current_block,
                output.min_amount,
                UINT256_MAX,
                Role.OUTPUT,
            ),
            recipient=output.recipient,
        )
        for output in outputs
    )
