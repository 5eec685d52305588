"""
Minimal ABI word encoding.

Only the shapes the order hashes and cosigner digests need: 32-byte
words for uint256 / int256 / address / bytes32, packed arrays, and a
tuple of static words followed by one trailing dynamic uint256 array.
"""

from typing import Sequence

from dap.core.errors import ArithmeticOverflowError
from dap.core.math import INT256_MAX, INT256_MIN, UINT256_MAX

WORD = 32


def encode_uint(value: int) -> bytes:
    if not 0 <= value <= UINT256_MAX:
        raise ArithmeticOverflowError(f"{value} is not a uint256")
    return value.to_bytes(WORD, byteorder="big")


def encode_int(value: int) -> bytes:
    """Two's complement int256 word."""
    if not INT256_MIN <= value <= INT256_MAX:
        raise ArithmeticOverflowError(f"{value} is not an int256")
    return value.to_bytes(WORD, byteorder="big", signed=True)


def encode_address(address: bytes) -> bytes:
    if len(address) != 20:
        raise ValueError(f"address must be 20 bytes, got {len(address)}")
    return address.rjust(WORD, b"\x00")


def encode_bytes32(value: bytes) -> bytes:
    if len(value) != WORD:
        raise ValueError(f"bytes32 must be 32 bytes, got {len(value)}")
    return value


def encode_packed_uint_array(values: Sequence[int]) -> bytes:
    """abi.encodePacked(uint256[]): elements only, no length."""
    return b"".join(encode_uint(v) for v in values)


def encode_packed_int_array(values: Sequence[int]) -> bytes:
    """abi.encodePacked(int256[]): elements only, no length."""
    return b"".join(encode_int(v) for v in values)


def encode_struct_with_uint_array(static_words: Sequence[bytes], array: Sequence[int]) -> bytes:
    """
    abi.encode(struct) for a struct of static fields ending in uint256[].

    A struct holding a dynamic array is itself dynamic, so the encoding
    starts with the offset of the tuple (0x20), then the static head,
    then the offset of the array inside the tuple, then length and
    elements.
    """
    head = b"".join(static_words)
    array_offset = WORD * (len(static_words) + 1)
    return (
        encode_uint(WORD)
        + head
        + encode_uint(array_offset)
        + encode_uint(len(array))
        + encode_packed_uint_array(array)
    )
