"""Decay engines"""
from dap.core.decay.linear import (
    Role,
    Rounding,
    linear_decay,
    decay as decay_linear,
    decay_input,
    decay_output,
)
from dap.core.decay.curve import (
    DecayCurve,
    MAX_CURVE_POINTS,
    locate_curve_position,
    decay as decay_curve,
)

__all__ = [
    "Role",
    "Rounding",
    "linear_decay",
    "decay_linear",
    "decay_input",
    "decay_output",
    "DecayCurve",
    "MAX_CURVE_POINTS",
    "locate_curve_position",
    "decay_curve",
]
