"""
Bounded Arithmetic - signed/unsigned conversion and clamping.

Python integers never wrap, so the EVM word limits are enforced
explicitly here. Two families exist:

- Strict: `sub_signed`, `diff_signed`. Leaving the representable range
  raises, because silently clamping would hide a real bug in
  authoritative amount math.
- Saturating: `bounded_sub`, `bound`. These never raise for
  representable inputs; underflow lands on `min_value`, overflow lands
  on `max_value`. Curve deltas come from order authors and cosigners,
  so an extreme curve must not be able to abort an auction here.
"""

from dap.core.errors import ArithmeticOverflowError, NegativeUintError


# =============================================================================
# Constants
# =============================================================================

UINT256_MAX = 2**256 - 1
INT256_MAX = 2**255 - 1
INT256_MIN = -(2**255)
UINT16_MAX = 2**16 - 1


# =============================================================================
# Strict
# =============================================================================


def sub_signed(a: int, b: int) -> int:
    """
    Compute `a - b` for uint256 `a` and int256 `b`.

    A negative `b` is added. Raises NegativeUintError if the unsigned
    result would be negative, ArithmeticOverflowError past UINT256_MAX.
    """
    if b < 0:
        result = a + (-b)
        if result > UINT256_MAX:
            raise ArithmeticOverflowError(f"{a} - ({b}) overflows uint256")
        return result

    if a < b:
        raise NegativeUintError(f"{a} - {b} is negative")
    return a - b


def diff_signed(a: int, b: int) -> int:
    """
    Signed difference `a - b` of two uint256 values as an int256.

    Raises ArithmeticOverflowError when the magnitude does not fit in
    int256 (only possible when an operand is above INT256_MAX).
    """
    if a < b:
        magnitude = b - a
        if magnitude > INT256_MAX:
            raise ArithmeticOverflowError(f"{a} - {b} does not fit in int256")
        return -magnitude

    magnitude = a - b
    if magnitude > INT256_MAX:
        raise ArithmeticOverflowError(f"{a} - {b} does not fit in int256")
    return magnitude


# =============================================================================
# Saturating
# =============================================================================


def bound(value: int, min_value: int, max_value: int) -> int:
    """Clamp `value` to [min_value, max_value]; the upper bound wins."""
    return min(max(value, min_value), max_value)


def bounded_sub(a: int, b: int, min_value: int, max_value: int) -> int:
    """
    Saturating `a - b` clamped to [min_value, max_value].

    Args:
        a: uint256 minuend
        b: int256 subtrahend (negative values are added)
        min_value: result on unsigned underflow, and lower clamp
        max_value: result on uint256 overflow, and upper clamp

    Returns:
        The clamped difference. Never raises.
    """
    if b < 0:
        abs_b = -b
        if a > UINT256_MAX - abs_b:
            return max_value
        result = a + abs_b
    else:
        if a < b:
            return min_value
        result = a - b

    return bound(result, min_value, max_value)
