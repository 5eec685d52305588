"""Fixed-width integer arithmetic"""
from dap.core.math.bounded import (
    UINT256_MAX,
    INT256_MAX,
    INT256_MIN,
    UINT16_MAX,
    sub_signed,
    bounded_sub,
    bound,
    diff_signed,
)
from dap.core.math.fixed_point import (
    mul_div_down,
    mul_div_up,
    checked_add,
    checked_mul,
)

__all__ = [
    "UINT256_MAX",
    "INT256_MAX",
    "INT256_MIN",
    "UINT16_MAX",
    "sub_signed",
    "bounded_sub",
    "bound",
    "diff_signed",
    "mul_div_down",
    "mul_div_up",
    "checked_add",
    "checked_mul",
]
