"""
Cosigner payloads.

A cosigner signs a small, order-hash-bound payload at (or near) fill
time. A zero value in an override field means "absent, keep the signed
base value"; an empty output override list means no output overrides.
"""

from dataclasses import dataclass, field
from typing import Tuple

from dap.core.abi import encode_address, encode_struct_with_uint_array, encode_uint
from dap.crypto import ZERO_ADDRESS


@dataclass(frozen=True)
class V2CosignerData:
    """Overrides for linear, timestamp-based orders."""
    decay_start_time: int
    decay_end_time: int
    exclusive_filler: bytes = ZERO_ADDRESS
    exclusivity_override_bps: int = 0
    input_override: int = 0
    output_overrides: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "output_overrides", tuple(self.output_overrides))

    def abi_encode(self) -> bytes:
        return encode_struct_with_uint_array(
            [
                encode_uint(self.decay_start_time),
                encode_uint(self.decay_end_time),
                encode_address(self.exclusive_filler),
                encode_uint(self.exclusivity_override_bps),
                encode_uint(self.input_override),
            ],
            self.output_overrides,
        )


@dataclass(frozen=True)
class V3CosignerData:
    """Overrides for curve, block-based orders."""
    decay_start_block: int
    exclusive_filler: bytes = ZERO_ADDRESS
    exclusivity_override_bps: int = 0
    input_override: int = 0
    output_overrides: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "output_overrides", tuple(self.output_overrides))

    def abi_encode(self) -> bytes:
        return encode_struct_with_uint_array(
            [
                encode_uint(self.decay_start_block),
                encode_address(self.exclusive_filler),
                encode_uint(self.exclusivity_override_bps),
                encode_uint(self.input_override),
            ],
            self.output_overrides,
        )


@dataclass(frozen=True)
class PriorityCosignerData:
    """Lets the cosigner pull the auction start earlier."""
    auction_target_block: int

    def abi_encode(self) -> bytes:
        return encode_uint(self.auction_target_block)
