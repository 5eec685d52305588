"""
Legacy cosigner extra-data encoding.

Layout (bit exact):

    byte 0         flag
                   bit 7 -> exclusive filler present
                   bit 6 -> input override present
                   bit 5 -> output overrides present
                   bits 0-4 -> number of output overrides (0..31)
    [20 bytes]     exclusive filler
    [32 bytes]     input override
    [N x 32 bytes] output overrides

Present fields follow the flag byte in that order, with no padding.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from dap.core.errors import InvalidCosignerDataError
from dap.core.math import UINT256_MAX

FILLER_FLAG = 0x80
INPUT_FLAG = 0x40
OUTPUTS_FLAG = 0x20
LENGTH_MASK = 0x1F
MAX_OUTPUT_OVERRIDES = LENGTH_MASK

ADDRESS_BYTES = 20
AMOUNT_BYTES = 32


@dataclass(frozen=True)
class CosignerExtraData:
    exclusive_filler: Optional[bytes] = None
    input_override: Optional[int] = None
    output_overrides: Optional[Tuple[int, ...]] = None


def encode_extra_data(data: CosignerExtraData) -> bytes:
    """
    Raises:
        InvalidCosignerDataError: a field cannot be represented
    """
    flag = 0
    body = b""

    if data.exclusive_filler is not None:
        if len(data.exclusive_filler) != ADDRESS_BYTES:
            raise InvalidCosignerDataError("exclusive filler must be 20 bytes")
        flag |= FILLER_FLAG
        body += data.exclusive_filler

    if data.input_override is not None:
        if not 0 <= data.input_override <= UINT256_MAX:
            raise InvalidCosignerDataError(f"input override {data.input_override} is not a uint256")
        flag |= INPUT_FLAG
        body += data.input_override.to_bytes(AMOUNT_BYTES, byteorder="big")

    if data.output_overrides is not None:
        if len(data.output_overrides) > MAX_OUTPUT_OVERRIDES:
            raise InvalidCosignerDataError(
                f"{len(data.output_overrides)} output overrides, max {MAX_OUTPUT_OVERRIDES}"
            )
        flag |= OUTPUTS_FLAG | len(data.output_overrides)
        for amount in data.output_overrides:
            if not 0 <= amount <= UINT256_MAX:
                raise InvalidCosignerDataError(f"output override {amount} is not a uint256")
            body += amount.to_bytes(AMOUNT_BYTES, byteorder="big")

    return bytes([flag]) + body


def decode_extra_data(data: bytes) -> CosignerExtraData:
    """
    Raises:
        InvalidCosignerDataError: truncated data, trailing bytes, or a
            length without the output flag
    """
    if not data:
        return CosignerExtraData()

    flag = data[0]
    offset = 1

    def take(size: int) -> bytes:
        nonlocal offset
        if offset + size > len(data):
            raise InvalidCosignerDataError(
                f"extra data truncated: need {offset + size} bytes, have {len(data)}"
            )
        chunk = data[offset:offset + size]
        offset += size
        return chunk

    exclusive_filler = take(ADDRESS_BYTES) if flag & FILLER_FLAG else None

    input_override = None
    if flag & INPUT_FLAG:
        input_override = int.from_bytes(take(AMOUNT_BYTES), byteorder="big")

    output_overrides = None
    length = flag & LENGTH_MASK
    if flag & OUTPUTS_FLAG:
        output_overrides = tuple(
            int.from_bytes(take(AMOUNT_BYTES), byteorder="big") for _ in range(length)
        )
    elif length:
        raise InvalidCosignerDataError("output override length set without output flag")

    if offset != len(data):
        raise InvalidCosignerDataError(f"{len(data) - offset} trailing bytes in extra data")

    return CosignerExtraData(
        exclusive_filler=exclusive_filler,
        input_override=input_override,
        output_overrides=output_overrides,
    )


def merge_extra_data(cosigner_data, extra: CosignerExtraData):
    """
    Copy of a V2/V3 cosigner payload with the present extra-data fields
    written over it; absent fields keep the payload's values.
    """
    changes = {}
    if extra.exclusive_filler is not None:
        changes["exclusive_filler"] = extra.exclusive_filler
    if extra.input_override is not None:
        changes["input_override"] = extra.input_override
    if extra.output_overrides is not None:
        changes["output_overrides"] = extra.output_overrides
    return replace(cosigner_data, **changes)
