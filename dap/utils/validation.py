"""
Input Validation - checks for values arriving from outside the core.

Order files and CLI arguments are checked here before any dataclass is
built, so that the pricing core only ever sees EVM-representable words.
Every validator returns (is_valid, error_message) and never raises.
"""

from typing import Any, Optional, Sequence, Tuple

from dap.core.math import INT256_MAX, INT256_MIN, UINT16_MAX, UINT256_MAX

ADDRESS_SIZE = 20
SIGNATURE_SIZE = 65
MAX_CURVE_POINTS = 16


# =============================================================================
# Integers
# =============================================================================


def validate_integer(
    value: Any,
    name: str,
    min_val: int = 0,
    max_val: int = UINT256_MAX,
) -> Tuple[bool, str]:
    """
    Validate an integer within [min_val, max_val].

    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"

    if value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def validate_uint256(value: Any, name: str = "amount") -> Tuple[bool, str]:
    return validate_integer(value, name, 0, UINT256_MAX)


def validate_int256(value: Any, name: str = "relative amount") -> Tuple[bool, str]:
    return validate_integer(value, name, INT256_MIN, INT256_MAX)


def validate_uint16(value: Any, name: str = "relative block") -> Tuple[bool, str]:
    return validate_integer(value, name, 0, UINT16_MAX)


# =============================================================================
# Hex strings
# =============================================================================


def validate_hex_string(value: Any, name: str, expected_bytes: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate a hex string (with or without 0x prefix).

    Args:
        value: Value to validate
        name: Field name
        expected_bytes: Expected byte length when decoded

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    hex_str = value[2:] if value.startswith(("0x", "0X")) else value

    if len(hex_str) % 2 != 0:
        return False, f"{name} has odd length, invalid hex"

    try:
        bytes.fromhex(hex_str)
    except ValueError:
        return False, f"{name} contains invalid hex characters"

    if expected_bytes is not None:
        actual_bytes = len(hex_str) // 2
        if actual_bytes != expected_bytes:
            return False, f"{name} must be {expected_bytes} bytes, got {actual_bytes}"

    return True, ""


def validate_address_hex(value: Any, name: str = "address") -> Tuple[bool, str]:
    return validate_hex_string(value, name, ADDRESS_SIZE)


def validate_signature_hex(value: Any, name: str = "cosignature") -> Tuple[bool, str]:
    """A cosignature is either absent (empty) or 65 bytes."""
    valid, err = validate_hex_string(value, name)
    if not valid:
        return valid, err
    hex_str = value[2:] if value.startswith(("0x", "0X")) else value
    if hex_str and len(hex_str) // 2 != SIGNATURE_SIZE:
        return False, f"{name} must be empty or {SIGNATURE_SIZE} bytes, got {len(hex_str) // 2}"
    return True, ""


# =============================================================================
# Curves
# =============================================================================


def validate_curve_points(positions: Sequence[int], amounts: Sequence[int]) -> Tuple[bool, str]:
    """
    Shape check for a decay curve: matching lengths, at most 16 points,
    strictly increasing positions.
    """
    if len(positions) != len(amounts):
        return False, f"curve has {len(positions)} blocks but {len(amounts)} amounts"

    if len(amounts) > MAX_CURVE_POINTS:
        return False, f"curve exceeds {MAX_CURVE_POINTS} points, got {len(amounts)}"

    for previous, current in zip(positions, positions[1:]):
        if current <= previous:
            return False, f"curve blocks must be strictly increasing, got {previous} then {current}"

    return True, ""


__all__ = [
    "validate_integer",
    "validate_uint256",
    "validate_int256",
    "validate_uint16",
    "validate_hex_string",
    "validate_address_hex",
    "validate_signature_hex",
    "validate_curve_points",
    "ADDRESS_SIZE",
    "SIGNATURE_SIZE",
    "MAX_CURVE_POINTS",
]
