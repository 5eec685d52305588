"""
Packed uint16 array - up to 16 values in one 256-bit word.

Element i occupies bits [16*i, 16*i + 16); index 0 is the least
significant 16 bits. This is the layout signed orders carry their
relative curve positions in.
"""

from typing import List, Sequence

from dap.core.errors import IndexOutOfBoundsError, InvalidArrLengthError
from dap.core.math import UINT16_MAX

SLOTS = 16
SLOT_BITS = 16


def pack(values: Sequence[int]) -> int:
    """Pack up to 16 uint16 values into a single word."""
    if len(values) > SLOTS:
        raise InvalidArrLengthError(f"cannot pack {len(values)} values into {SLOTS} slots")

    packed = 0
    for i, value in enumerate(values):
        if not 0 <= value <= UINT16_MAX:
            raise InvalidArrLengthError(f"value {value} at index {i} does not fit in uint16")
        packed |= value << (i * SLOT_BITS)
    return packed


def get_element(packed: int, index: int) -> int:
    """Read slot `index` of a packed word."""
    if not 0 <= index < SLOTS:
        raise IndexOutOfBoundsError(f"index {index} out of range [0, {SLOTS})")
    return (packed >> (index * SLOT_BITS)) & UINT16_MAX


def unpack(packed: int, length: int) -> List[int]:
    """Read the first `length` slots of a packed word."""
    if not 0 <= length <= SLOTS:
        raise InvalidArrLengthError(f"length {length} out of range [0, {SLOTS}]")
    return [get_element(packed, i) for i in range(length)]
