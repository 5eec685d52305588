"""Order variants, hashing and resolution"""
from dap.core.order.types import (
    DutchInput,
    DutchOutput,
    ExclusiveDutchOrder,
    V2DutchOrder,
    V3DutchInput,
    V3DutchOutput,
    V3DutchOrder,
    PriorityInput,
    PriorityOutput,
    PriorityOrder,
)
from dap.core.order.context import ExecutionContext
from dap.core.order.hashing import hash_order
from dap.core.order.resolvers import (
    resolve,
    resolve_batch,
    resolve_exclusive_dutch,
    resolve_v2,
    resolve_v3,
    resolve_priority,
)

__all__ = [
    "DutchInput",
    "DutchOutput",
    "ExclusiveDutchOrder",
    "V2DutchOrder",
    "V3DutchInput",
    "V3DutchOutput",
    "V3DutchOrder",
    "PriorityInput",
    "PriorityOutput",
    "PriorityOrder",
    "ExecutionContext",
    "hash_order",
    "resolve",
    "resolve_batch",
    "resolve_exclusive_dutch",
    "resolve_v2",
    "resolve_v3",
    "resolve_priority",
]
