"""
Resolvers - evaluate an order against one execution snapshot.

Every resolver is a pure function of (order, context). The stages run
in a fixed order and any failure aborts the whole evaluation:

    1. validate deadline and decay window
    2. verify the cosignature and merge cosigner overrides
    3. (v3) apply the base-fee adjustment
    4. decay inputs and outputs to the current position
    5. apply the exclusivity override for the filler
    6. (priority orders) scale by the priority fee
"""

from dataclasses import replace
from typing import Callable, Dict, Iterable, List

from dap.core.cosigner import (
    apply_input_override,
    apply_output_overrides,
    cosigner_digest,
    verify_cosignature,
)
from dap.core.errors import (
    DeadlineBeforeEndTimeError,
    DeadlineReachedError,
    EndTimeBeforeStartTimeError,
    InputAndOutputDecayError,
    InputOutputScalingError,
    OrderNotFillableError,
)
from dap.core.exclusivity import handle_exclusive_override
from dap.core.math import UINT256_MAX, bounded_sub, diff_signed, mul_div_down, mul_div_up
from dap.core.order.context import ExecutionContext
from dap.core.order.decay import (
    decay_dutch_input,
    decay_dutch_outputs,
    decay_v3_input,
    decay_v3_outputs,
)
from dap.core.order.hashing import (
    hash_exclusive_dutch_order,
    hash_priority_order,
    hash_v2_order,
    hash_v3_order,
)
from dap.core.order.types import (
    ExclusiveDutchOrder,
    PriorityOrder,
    V2DutchOrder,
    V3DutchOrder,
)
from dap.core.priority_fee import effective_priority_fee, scale_input, scale_outputs
from dap.core.types import OrderInfo, ResolvedOrder
from dap.crypto import ZERO_ADDRESS, bytes_to_hex
from dap.utils.logger import get_logger

logger = get_logger("resolver")

GWEI = 10**9


# =============================================================================
# Shared checks
# =============================================================================


def _check_deadline(info: OrderInfo, ctx: ExecutionContext) -> None:
    if info.deadline < ctx.timestamp:
        raise DeadlineReachedError(f"deadline {info.deadline} passed at {ctx.timestamp}")


def _check_cosignature(order, order_hash: bytes, ctx: ExecutionContext) -> None:
    digest = cosigner_digest(order_hash, ctx.chain_id, order.cosigner_data)
    verify_cosignature(order.cosigner, digest, order.cosignature)


# =============================================================================
# Exclusive Dutch (v1)
# =============================================================================


def resolve_exclusive_dutch(order: ExclusiveDutchOrder, ctx: ExecutionContext) -> ResolvedOrder:
    """
    Linear decay by timestamp; exclusivity lasts until decay start.

    Raises:
        DeadlineReachedError, DeadlineBeforeEndTimeError,
        EndTimeBeforeStartTimeError, InputAndOutputDecayError,
        IncorrectAmountsError, NoExclusiveOverrideError
    """
    _check_deadline(order.info, ctx)
    if order.info.deadline < order.decay_end_time:
        raise DeadlineBeforeEndTimeError(
            f"deadline {order.info.deadline} before decay end {order.decay_end_time}"
        )
    if order.decay_end_time < order.decay_start_time:
        raise EndTimeBeforeStartTimeError(
            f"decay end {order.decay_end_time} precedes start {order.decay_start_time}"
        )
    if order.input.start_amount != order.input.end_amount:
        for output in order.outputs:
            if output.start_amount != output.end_amount:
                raise InputAndOutputDecayError("input and outputs cannot both decay")

    order_hash = hash_exclusive_dutch_order(order)
    resolved = ResolvedOrder(
        info=order.info,
        input=decay_dutch_input(order.input, order.decay_start_time, order.decay_end_time, ctx.timestamp),
        outputs=decay_dutch_outputs(order.outputs, order.decay_start_time, order.decay_end_time, ctx.timestamp),
        hash=order_hash,
    )
    resolved = handle_exclusive_override(
        resolved,
        ctx.filler,
        order.exclusive_filler,
        order.decay_start_time,
        order.exclusivity_override_bps,
        ctx.timestamp,
    )

    logger.debug(f"Resolved exclusive dutch order: {resolved}")
    return resolved


# =============================================================================
# V2 Dutch
# =============================================================================


def resolve_v2(order: V2DutchOrder, ctx: ExecutionContext) -> ResolvedOrder:
    """
    Cosigned linear decay by timestamp.

    Raises:
        DeadlineReachedError, DeadlineBeforeEndTimeError,
        InvalidCosignatureError, InvalidCosignerInputError,
        InvalidCosignerOutputError, EndTimeBeforeStartTimeError,
        IncorrectAmountsError, NoExclusiveOverrideError
    """
    data = order.cosigner_data
    _check_deadline(order.info, ctx)
    if order.info.deadline < data.decay_end_time:
        raise DeadlineBeforeEndTimeError(
            f"deadline {order.info.deadline} before decay end {data.decay_end_time}"
        )

    order_hash = hash_v2_order(order)
    _check_cosignature(order, order_hash, ctx)

    base_input = replace(
        order.base_input,
        start_amount=apply_input_override(order.base_input.start_amount, data.input_override),
    )
    output_starts = apply_output_overrides(
        [o.start_amount for o in order.base_outputs], data.output_overrides
    )
    base_outputs = [
        replace(output, start_amount=start)
        for output, start in zip(order.base_outputs, output_starts)
    ]

    resolved = ResolvedOrder(
        info=order.info,
        input=decay_dutch_input(base_input, data.decay_start_time, data.decay_end_time, ctx.timestamp),
        outputs=decay_dutch_outputs(base_outputs, data.decay_start_time, data.decay_end_time, ctx.timestamp),
        hash=order_hash,
    )
    resolved = handle_exclusive_override(
        resolved,
        ctx.filler,
        data.exclusive_filler,
        data.decay_start_time,
        data.exclusivity_override_bps,
        ctx.timestamp,
    )

    logger.debug(f"Resolved v2 order: {resolved}")
    return resolved


# =============================================================================
# V3 Dutch
# =============================================================================


def compute_base_fee_delta(adjustment_per_gwei_base_fee: int, gas_delta_wei: int) -> int:
    """
    Amount change for a base fee move of `gas_delta_wei`.

    Rounded in the swapper's favour: a rise rounds down, a fall rounds
    the magnitude up.
    """
    if gas_delta_wei >= 0:
        return mul_div_down(adjustment_per_gwei_base_fee, gas_delta_wei, GWEI)
    return -mul_div_up(adjustment_per_gwei_base_fee, -gas_delta_wei, GWEI)


def apply_base_fee_adjustment(order: V3DutchOrder, base_fee: int) -> V3DutchOrder:
    """
    Shift start amounts with the base fee.

    A base fee rise makes the swapper pay more input (capped at
    max_amount) and receive less output (floored at min_amount).
    """
    gas_delta_wei = diff_signed(base_fee, order.starting_base_fee)

    base_input = order.base_input
    if base_input.adjustment_per_gwei_base_fee != 0:
        input_delta = compute_base_fee_delta(base_input.adjustment_per_gwei_base_fee, gas_delta_wei)
        base_input = replace(
            base_input,
            start_amount=bounded_sub(base_input.start_amount, -input_delta, 0, base_input.max_amount),
        )

    base_outputs = []
    for output in order.base_outputs:
        if output.adjustment_per_gwei_base_fee != 0:
            output_delta = compute_base_fee_delta(output.adjustment_per_gwei_base_fee, gas_delta_wei)
            output = replace(
                output,
                start_amount=bounded_sub(output.start_amount, output_delta, output.min_amount, UINT256_MAX),
            )
        base_outputs.append(output)

    return replace(order, base_input=base_input, base_outputs=tuple(base_outputs))


def resolve_v3(order: V3DutchOrder, ctx: ExecutionContext) -> ResolvedOrder:
    """
    Cosigned curve decay by block, with base-fee adjustment.

    Raises:
        DeadlineReachedError, InvalidCosignatureError,
        InvalidCosignerInputError, InvalidCosignerOutputError,
        InvalidDecayCurveError, NoExclusiveOverrideError
    """
    data = order.cosigner_data
    _check_deadline(order.info, ctx)

    order_hash = hash_v3_order(order)
    _check_cosignature(order, order_hash, ctx)

    base_input = replace(
        order.base_input,
        start_amount=apply_input_override(order.base_input.start_amount, data.input_override),
    )
    output_starts = apply_output_overrides(
        [o.start_amount for o in order.base_outputs], data.output_overrides
    )
    merged = replace(
        order,
        base_input=base_input,
        base_outputs=tuple(
            replace(output, start_amount=start)
            for output, start in zip(order.base_outputs, output_starts)
        ),
    )
    merged = apply_base_fee_adjustment(merged, ctx.base_fee)

    resolved = ResolvedOrder(
        info=order.info,
        input=decay_v3_input(merged.base_input, data.decay_start_block, ctx.block_number),
        outputs=decay_v3_outputs(merged.base_outputs, data.decay_start_block, ctx.block_number),
        hash=order_hash,
    )
    resolved = handle_exclusive_override(
        resolved,
        ctx.filler,
        data.exclusive_filler,
        data.decay_start_block,
        data.exclusivity_override_bps,
        ctx.block_number,
    )

    logger.debug(f"Resolved v3 order: {resolved}")
    return resolved


# =============================================================================
# Priority
# =============================================================================


def resolve_priority(order: PriorityOrder, ctx: ExecutionContext) -> ResolvedOrder:
    """
    Priority-fee scaled order.

    Raises:
        DeadlineReachedError, InputOutputScalingError,
        InvalidCosignatureError, OrderNotFillableError,
        ArithmeticOverflowError
    """
    _check_deadline(order.info, ctx)

    if order.input.mps_per_priority_fee_wei > 0:
        for output in order.outputs:
            if output.mps_per_priority_fee_wei > 0:
                raise InputOutputScalingError("input and outputs cannot both scale")

    order_hash = hash_priority_order(order)

    auction_start_block = order.auction_start_block
    if order.cosigner != ZERO_ADDRESS:
        _check_cosignature(order, order_hash, ctx)
        target = order.cosigner_data.auction_target_block
        if target != 0 and target < auction_start_block:
            auction_start_block = target

    if ctx.block_number < auction_start_block:
        raise OrderNotFillableError(
            f"auction starts at block {auction_start_block}, now {ctx.block_number}"
        )

    priority_fee = effective_priority_fee(ctx.priority_fee, order.baseline_priority_fee_wei)
    resolved = ResolvedOrder(
        info=order.info,
        input=scale_input(
            order.input.token,
            order.input.amount,
            priority_fee,
            order.input.mps_per_priority_fee_wei,
        ),
        outputs=scale_outputs(order.outputs, priority_fee),
        hash=order_hash,
    )

    logger.debug(f"Resolved priority order at fee {priority_fee}: {resolved}")
    return resolved


# =============================================================================
# Dispatch
# =============================================================================

_RESOLVERS: Dict[type, Callable[..., ResolvedOrder]] = {
    ExclusiveDutchOrder: resolve_exclusive_dutch,
    V2DutchOrder: resolve_v2,
    V3DutchOrder: resolve_v3,
    PriorityOrder: resolve_priority,
}


def resolve(order, ctx: ExecutionContext) -> ResolvedOrder:
    """Resolve any supported order variant."""
    try:
        resolver = _RESOLVERS[type(order)]
    except KeyError:
        raise TypeError(f"Unsupported order type: {type(order).__name__}") from None
    return resolver(order, ctx)


def resolve_batch(orders: Iterable, ctx: ExecutionContext) -> List[ResolvedOrder]:
    """
    Resolve many orders against one snapshot.

    All orders see the same context; the first failure propagates.
    """
    resolved = [resolve(order, ctx) for order in orders]
    logger.info(f"Resolved {len(resolved)} orders at block {ctx.block_number}")
    return resolved
