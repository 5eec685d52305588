"""
Order variants.

Four flavours share the same settlement types (dap.core.types):

    ExclusiveDutchOrder  linear decay by timestamp, exclusivity, no cosigner
    V2DutchOrder         linear decay by timestamp, cosigned overrides
    V3DutchOrder         curve decay by block, cosigned overrides,
                         base-fee adjustment
    PriorityOrder        priority-fee scaling by block, optional cosigner

All of them are immutable; resolvers never modify an order in place.
"""

from dataclasses import dataclass, field
from typing import Tuple

from dap.core.cosigner.data import PriorityCosignerData, V2CosignerData, V3CosignerData
from dap.core.decay.curve import DecayCurve
from dap.core.types import OrderInfo
from dap.crypto import ZERO_ADDRESS


def _freeze(obj, name: str) -> None:
    object.__setattr__(obj, name, tuple(getattr(obj, name)))


# =============================================================================
# Linear (v1 / v2)
# =============================================================================


@dataclass(frozen=True)
class DutchInput:
    token: bytes
    start_amount: int
    end_amount: int


@dataclass(frozen=True)
class DutchOutput:
    token: bytes
    start_amount: int
    end_amount: int
    recipient: bytes


@dataclass(frozen=True)
class ExclusiveDutchOrder:
    """
    Linear Dutch order decaying over timestamps.

    The exclusivity window ends at `decay_start_time`.
    """
    info: OrderInfo
    decay_start_time: int
    decay_end_time: int
    input: DutchInput
    outputs: Tuple[DutchOutput, ...] = field(default_factory=tuple)
    exclusive_filler: bytes = ZERO_ADDRESS
    exclusivity_override_bps: int = 0

    def __post_init__(self):
        _freeze(self, "outputs")


@dataclass(frozen=True)
class V2DutchOrder:
    """
    Cosigned linear Dutch order.

    Decay window, exclusivity and amount overrides all come from the
    cosigner payload; the swapper only signs the base amounts.
    """
    info: OrderInfo
    cosigner: bytes
    base_input: DutchInput
    base_outputs: Tuple[DutchOutput, ...]
    cosigner_data: V2CosignerData
    cosignature: bytes = b""

    def __post_init__(self):
        _freeze(self, "base_outputs")


# =============================================================================
# Curve (v3)
# =============================================================================


@dataclass(frozen=True)
class V3DutchInput:
    token: bytes
    start_amount: int
    curve: DecayCurve
    max_amount: int
    adjustment_per_gwei_base_fee: int = 0


@dataclass(frozen=True)
class V3DutchOutput:
    token: bytes
    start_amount: int
    curve: DecayCurve
    recipient: bytes
    min_amount: int
    adjustment_per_gwei_base_fee: int = 0


@dataclass(frozen=True)
class V3DutchOrder:
    """
    Cosigned curve Dutch order decaying over blocks.

    `starting_base_fee` is the base fee the swapper priced against;
    inputs and outputs with a non-zero `adjustment_per_gwei_base_fee`
    move with the difference to the current base fee.
    """
    info: OrderInfo
    cosigner: bytes
    starting_base_fee: int
    base_input: V3DutchInput
    base_outputs: Tuple[V3DutchOutput, ...]
    cosigner_data: V3CosignerData
    cosignature: bytes = b""

    def __post_init__(self):
        _freeze(self, "base_outputs")


# =============================================================================
# Priority
# =============================================================================


@dataclass(frozen=True)
class PriorityInput:
    token: bytes
    amount: int
    mps_per_priority_fee_wei: int = 0


@dataclass(frozen=True)
class PriorityOutput:
    token: bytes
    amount: int
    recipient: bytes
    mps_per_priority_fee_wei: int = 0


@dataclass(frozen=True)
class PriorityOrder:
    """
    Order priced by the priority fee the filler pays.

    Only the input or the outputs may scale, never both. A cosigner is
    optional (ZERO_ADDRESS disables it) and may only move the auction
    start earlier.
    """
    info: OrderInfo
    auction_start_block: int
    input: PriorityInput
    outputs: Tuple[PriorityOutput, ...]
    baseline_priority_fee_wei: int = 0
    cosigner: bytes = ZERO_ADDRESS
    cosigner_data: PriorityCosignerData = field(default_factory=lambda: PriorityCosignerData(0))
    cosignature: bytes = b""

    def __post_init__(self):
        _freeze(self, "outputs")
