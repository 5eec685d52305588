"""
Checked uint256 multiply/divide helpers.

Same semantics as the usual on-chain fixed point library: the
intermediate product must fit in 256 bits, otherwise the call fails.
"""

from dap.core.errors import ArithmeticOverflowError
from dap.core.math.bounded import UINT256_MAX


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflowError(f"{a} + {b} overflows uint256")
    return result


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflowError(f"{a} * {b} overflows uint256")
    return result


def mul_div_down(x: int, y: int, denominator: int) -> int:
    """floor(x * y / denominator)"""
    if denominator == 0:
        raise ArithmeticOverflowError("division by zero")
    return checked_mul(x, y) // denominator


def mul_div_up(x: int, y: int, denominator: int) -> int:
    """ceil(x * y / denominator)"""
    if denominator == 0:
        raise ArithmeticOverflowError("division by zero")
    product = checked_mul(x, y)
    if product == 0:
        return 0
    return (product - 1) // denominator + 1
