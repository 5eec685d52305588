"""
Exclusivity - price override for fills inside an exclusivity window.

Until `exclusivity_end` only the exclusive filler may fill at the
decayed price. Anyone else must either wait or pay a premium: every
output is scaled up by `(BPS + override_bps) / BPS`, rounded up. An
override of 0 means strict exclusivity and nobody else may fill.
"""

from typing import Sequence, Tuple

from dap.core.errors import NoExclusiveOverrideError
from dap.core.math import mul_div_up
from dap.core.types import OutputToken, ResolvedOrder
from dap.crypto import ZERO_ADDRESS

BPS = 10_000
STRICT_EXCLUSIVITY = 0


def has_filling_rights(
    caller: bytes,
    exclusive: bytes,
    exclusivity_end: int,
    current_position: int,
) -> bool:
    """
    True if `caller` may fill at the unscaled price.

    Holds when there is no exclusive filler, the window is over
    (strictly after `exclusivity_end`), or the caller is the exclusive
    filler.
    """
    return (
        exclusive == ZERO_ADDRESS
        or current_position > exclusivity_end
        or caller == exclusive
    )


def apply_override(
    outputs: Sequence[OutputToken],
    caller: bytes,
    exclusive: bytes,
    exclusivity_end: int,
    override_bps: int,
    current_position: int,
) -> Tuple[OutputToken, ...]:
    """
    Outputs as `caller` must deliver them.

    Returns:
        The outputs unchanged if the caller has filling rights,
        otherwise each amount scaled by the override premium (rounded up)

    Raises:
        NoExclusiveOverrideError: caller lacks rights and override_bps == 0
    """
    if has_filling_rights(caller, exclusive, exclusivity_end, current_position):
        return tuple(outputs)

    if override_bps == STRICT_EXCLUSIVITY:
        raise NoExclusiveOverrideError(
            f"exclusive until {exclusivity_end}, now {current_position}"
        )

    return tuple(
        output.with_amount(mul_div_up(output.amount, BPS + override_bps, BPS))
        for output in outputs
    )


def handle_exclusive_override(
    order: ResolvedOrder,
    caller: bytes,
    exclusive: bytes,
    exclusivity_end: int,
    override_bps: int,
    current_position: int,
) -> ResolvedOrder:
    """ResolvedOrder counterpart of `apply_override`."""
    outputs = apply_override(
        order.outputs, caller, exclusive, exclusivity_end, override_bps, current_position
    )
    return order.with_outputs(outputs)
