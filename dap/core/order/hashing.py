"""
Order hashing - EIP-712 struct hashes for every order variant.

The type strings and field order match the deployed settlement
contracts byte for byte; a hash computed here is the `orderHash` the
swapper's signature and the cosigner digest are bound to. Referenced
struct types are appended to a type string in alphabetical order.
"""

from typing import Sequence

from dap.core.abi import (
    encode_address,
    encode_bytes32,
    encode_packed_int_array,
    encode_uint,
)
from dap.core.decay.curve import DecayCurve
from dap.core.order.types import (
    DutchOutput,
    ExclusiveDutchOrder,
    PriorityInput,
    PriorityOrder,
    PriorityOutput,
    V2DutchOrder,
    V3DutchInput,
    V3DutchOrder,
    V3DutchOutput,
)
from dap.core.types import OrderInfo
from dap.crypto import keccak256


# =============================================================================
# Type strings
# =============================================================================

ORDER_INFO_TYPE = (
    b"OrderInfo("
    b"address reactor,"
    b"address swapper,"
    b"uint256 nonce,"
    b"uint256 deadline,"
    b"address additionalValidationContract,"
    b"bytes additionalValidationData)"
)

DUTCH_OUTPUT_TYPE = (
    b"DutchOutput("
    b"address token,"
    b"uint256 startAmount,"
    b"uint256 endAmount,"
    b"address recipient)"
)

EXCLUSIVE_DUTCH_ORDER_TYPE = (
    b"ExclusiveDutchOrder("
    b"OrderInfo info,"
    b"uint256 decayStartTime,"
    b"uint256 decayEndTime,"
    b"address exclusiveFiller,"
    b"uint256 exclusivityOverrideBps,"
    b"address inputToken,"
    b"uint256 inputStartAmount,"
    b"uint256 inputEndAmount,"
    b"DutchOutput[] outputs)"
)

V2_DUTCH_ORDER_TYPE = (
    b"V2DutchOrder("
    b"OrderInfo info,"
    b"address cosigner,"
    b"address baseInputToken,"
    b"uint256 baseInputStartAmount,"
    b"uint256 baseInputEndAmount,"
    b"DutchOutput[] baseOutputs)"
)

NON_LINEAR_DECAY_TYPE = (
    b"NonlinearDutchDecay("
    b"uint256 relativeBlocks,"
    b"int256[] relativeAmounts)"
)

V3_DUTCH_INPUT_TYPE = (
    b"V3DutchInput("
    b"address token,"
    b"uint256 startAmount,"
    b"NonlinearDutchDecay curve,"
    b"uint256 maxAmount,"
    b"uint256 adjustmentPerGweiBaseFee)"
)

V3_DUTCH_OUTPUT_TYPE = (
    b"V3DutchOutput("
    b"address token,"
    b"uint256 startAmount,"
    b"NonlinearDutchDecay curve,"
    b"address recipient,"
    b"uint256 minAmount,"
    b"uint256 adjustmentPerGweiBaseFee)"
)

V3_DUTCH_ORDER_TYPE = (
    b"V3DutchOrder("
    b"OrderInfo info,"
    b"address cosigner,"
    b"uint256 startingBaseFee,"
    b"V3DutchInput baseInput,"
    b"V3DutchOutput[] baseOutputs)"
)

PRIORITY_INPUT_TYPE = b"PriorityInput(address token,uint256 amount,uint256 mpsPerPriorityFeeWei)"

PRIORITY_OUTPUT_TYPE = (
    b"PriorityOutput(address token,uint256 amount,uint256 mpsPerPriorityFeeWei,address recipient)"
)

PRIORITY_ORDER_TYPE = (
    b"PriorityOrder("
    b"OrderInfo info,"
    b"address cosigner,"
    b"uint256 auctionStartBlock,"
    b"uint256 baselinePriorityFeeWei,"
    b"PriorityInput input,"
    b"PriorityOutput[] outputs)"
)

ORDER_INFO_TYPE_HASH = keccak256(ORDER_INFO_TYPE)
DUTCH_OUTPUT_TYPE_HASH = keccak256(DUTCH_OUTPUT_TYPE)
NON_LINEAR_DECAY_TYPE_HASH = keccak256(NON_LINEAR_DECAY_TYPE)
V3_DUTCH_INPUT_TYPE_HASH = keccak256(V3_DUTCH_INPUT_TYPE + NON_LINEAR_DECAY_TYPE)
V3_DUTCH_OUTPUT_TYPE_HASH = keccak256(V3_DUTCH_OUTPUT_TYPE + NON_LINEAR_DECAY_TYPE)
PRIORITY_INPUT_TYPE_HASH = keccak256(PRIORITY_INPUT_TYPE)
PRIORITY_OUTPUT_TYPE_HASH = keccak256(PRIORITY_OUTPUT_TYPE)

EXCLUSIVE_DUTCH_ORDER_TYPE_HASH = keccak256(
    EXCLUSIVE_DUTCH_ORDER_TYPE + DUTCH_OUTPUT_TYPE + ORDER_INFO_TYPE
)
V2_DUTCH_ORDER_TYPE_HASH = keccak256(V2_DUTCH_ORDER_TYPE + DUTCH_OUTPUT_TYPE + ORDER_INFO_TYPE)
V3_DUTCH_ORDER_TYPE_HASH = keccak256(
    V3_DUTCH_ORDER_TYPE
    + NON_LINEAR_DECAY_TYPE
    + ORDER_INFO_TYPE
    + V3_DUTCH_INPUT_TYPE
    + V3_DUTCH_OUTPUT_TYPE
)
PRIORITY_ORDER_TYPE_HASH = keccak256(
    PRIORITY_ORDER_TYPE + ORDER_INFO_TYPE + PRIORITY_INPUT_TYPE + PRIORITY_OUTPUT_TYPE
)


# =============================================================================
# Struct hashes
# =============================================================================


def hash_order_info(info: OrderInfo) -> bytes:
    return keccak256(
        ORDER_INFO_TYPE_HASH
        + encode_address(info.reactor)
        + encode_address(info.swapper)
        + encode_uint(info.nonce)
        + encode_uint(info.deadline)
        + encode_address(info.additional_validation_contract)
        + keccak256(info.additional_validation_data)
    )


def _hash_array(hashes: Sequence[bytes]) -> bytes:
    return keccak256(b"".join(encode_bytes32(h) for h in hashes))


def hash_dutch_output(output: DutchOutput) -> bytes:
    return keccak256(
        DUTCH_OUTPUT_TYPE_HASH
        + encode_address(output.token)
        + encode_uint(output.start_amount)
        + encode_uint(output.end_amount)
        + encode_address(output.recipient)
    )


def hash_dutch_outputs(outputs: Sequence[DutchOutput]) -> bytes:
    return _hash_array([hash_dutch_output(o) for o in outputs])


def hash_curve(curve: DecayCurve) -> bytes:
    """relativeBlocks is hashed in its packed uint16 form."""
    return keccak256(
        NON_LINEAR_DECAY_TYPE_HASH
        + encode_uint(curve.packed_positions)
        + keccak256(encode_packed_int_array(curve.relative_amounts))
    )


def hash_v3_input(input_: V3DutchInput) -> bytes:
    return keccak256(
        V3_DUTCH_INPUT_TYPE_HASH
        + encode_address(input_.token)
        + encode_uint(input_.start_amount)
        + hash_curve(input_.curve)
        + encode_uint(input_.max_amount)
        + encode_uint(input_.adjustment_per_gwei_base_fee)
    )


def hash_v3_output(output: V3DutchOutput) -> bytes:
    return keccak256(
        V3_DUTCH_OUTPUT_TYPE_HASH
        + encode_address(output.token)
        + encode_uint(output.start_amount)
        + hash_curve(output.curve)
        + encode_address(output.recipient)
        + encode_uint(output.min_amount)
        + encode_uint(output.adjustment_per_gwei_base_fee)
    )


def hash_priority_input(input_: PriorityInput) -> bytes:
    return keccak256(
        PRIORITY_INPUT_TYPE_HASH
        + encode_address(input_.token)
        + encode_uint(input_.amount)
        + encode_uint(input_.mps_per_priority_fee_wei)
    )


def hash_priority_output(output: PriorityOutput) -> bytes:
    return keccak256(
        PRIORITY_OUTPUT_TYPE_HASH
        + encode_address(output.token)
        + encode_uint(output.amount)
        + encode_uint(output.mps_per_priority_fee_wei)
        + encode_address(output.recipient)
    )


# =============================================================================
# Order hashes
# =============================================================================


def hash_exclusive_dutch_order(order: ExclusiveDutchOrder) -> bytes:
    return keccak256(
        EXCLUSIVE_DUTCH_ORDER_TYPE_HASH
        + hash_order_info(order.info)
        + encode_uint(order.decay_start_time)
        + encode_uint(order.decay_end_time)
        + encode_address(order.exclusive_filler)
        + encode_uint(order.exclusivity_override_bps)
        + encode_address(order.input.token)
        + encode_uint(order.input.start_amount)
        + encode_uint(order.input.end_amount)
        + hash_dutch_outputs(order.outputs)
    )


def hash_v2_order(order: V2DutchOrder) -> bytes:
    """Cosigner fields are not part of the hash; they are bound by the cosigner digest."""
    return keccak256(
        V2_DUTCH_ORDER_TYPE_HASH
        + hash_order_info(order.info)
        + encode_address(order.cosigner)
        + encode_address(order.base_input.token)
        + encode_uint(order.base_input.start_amount)
        + encode_uint(order.base_input.end_amount)
        + hash_dutch_outputs(order.base_outputs)
    )


def hash_v3_order(order: V3DutchOrder) -> bytes:
    return keccak256(
        V3_DUTCH_ORDER_TYPE_HASH
        + hash_order_info(order.info)
        + encode_address(order.cosigner)
        + encode_uint(order.starting_base_fee)
        + hash_v3_input(order.base_input)
        + _hash_array([hash_v3_output(o) for o in order.base_outputs])
    )


def hash_priority_order(order: PriorityOrder) -> bytes:
    return keccak256(
        PRIORITY_ORDER_TYPE_HASH
        + hash_order_info(order.info)
        + encode_address(order.cosigner)
        + encode_uint(order.auction_start_block)
        + encode_uint(order.baseline_priority_fee_wei)
        + hash_priority_input(order.input)
        + _hash_array([hash_priority_output(o) for o in order.outputs])
    )


_ORDER_HASHERS = {
    ExclusiveDutchOrder: hash_exclusive_dutch_order,
    V2DutchOrder: hash_v2_order,
    V3DutchOrder: hash_v3_order,
    PriorityOrder: hash_priority_order,
}


def hash_order(order) -> bytes:
    """Struct hash of any supported order variant."""
    try:
        hasher = _ORDER_HASHERS[type(order)]
    except KeyError:
        raise TypeError(f"Unsupported order type: {type(order).__name__}") from None
    return hasher(order)
