"""
Error taxonomy for the pricing core.

Every error aborts the whole evaluation; there is no partial result and
no local recovery. Callers should surface the concrete subclass so that
tooling can tell a malformed curve from a bad cosignature from a missing
fill right.
"""

from typing import Any, Dict, Optional


class PricingError(ValueError):
    """Base class for all pricing core failures."""

    def __init__(self, message: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.__class__.__name__)
        self.context = context or {}


# =============================================================================
# Numeric safety
# =============================================================================


class ArithmeticOverflowError(PricingError):
    """Checked uint256/int256 arithmetic left the representable range."""


class NegativeUintError(ArithmeticOverflowError):
    """Strict unsigned subtraction produced a negative result."""


class IndexOutOfBoundsError(PricingError):
    """Packed uint16 array accessed past its 16 slots."""


class InvalidArrLengthError(PricingError):
    """Array too long (or a value too wide) to pack into a uint16 word."""


# =============================================================================
# Structural / configuration errors
# =============================================================================


class InvalidDecayCurveError(PricingError):
    """Curve has more than 16 points or malformed relative positions."""


class IncorrectAmountsError(PricingError):
    """Start/end amounts ordered the wrong way for their role."""


class EndTimeBeforeStartTimeError(PricingError):
    """Decay end position precedes the decay start position."""


class DeadlineReachedError(PricingError):
    """Order deadline has passed."""


class DeadlineBeforeEndTimeError(PricingError):
    """Order deadline precedes the end of its decay."""


class OrderNotFillableError(PricingError):
    """Auction has not started yet."""


class InputOutputScalingError(PricingError):
    """Both the input and an output opted into priority fee scaling."""


# =============================================================================
# Cosigner errors
# =============================================================================


class InvalidCosignatureError(PricingError):
    """Cosignature does not recover to the order's cosigner."""


class InvalidCosignerInputError(PricingError):
    """Input override would make the swapper pay more than signed for."""


class InvalidCosignerOutputError(PricingError):
    """Output overrides malformed or worse than the signed base amounts."""


class InvalidCosignerDataError(PricingError):
    """Packed cosigner extra data could not be decoded."""


# =============================================================================
# Exclusivity
# =============================================================================


class NoExclusiveOverrideError(PricingError):
    """Strict exclusivity: caller has no fill rights and no override exists."""


class InputAndOutputDecayError(PricingError):
    """Input and an output both decay in the same linear order."""
