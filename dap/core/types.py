"""
Settlement types shared by every order variant.

An order of any flavour resolves into a ResolvedOrder: concrete input
and output amounts at one evaluation snapshot. All types here are
immutable; transformations return new instances.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple

from dap.crypto import ZERO_ADDRESS, bytes_to_hex


@dataclass(frozen=True)
class OrderInfo:
    """
    Fields common to every order.

    Attributes:
        reactor: contract that settles the order (20 bytes)
        swapper: order owner (20 bytes)
        nonce: replay protection, tracked by the settlement layer
        deadline: timestamp after which the order is void
        additional_validation_contract: optional hook (20 bytes)
        additional_validation_data: opaque hook payload
    """
    reactor: bytes
    swapper: bytes
    nonce: int
    deadline: int
    additional_validation_contract: bytes = ZERO_ADDRESS
    additional_validation_data: bytes = b""


@dataclass(frozen=True)
class InputToken:
    """Token the swapper pays, with the most they may be charged."""
    token: bytes
    amount: int
    max_amount: int


@dataclass(frozen=True)
class OutputToken:
    """Token the swapper (or a fee recipient) receives."""
    token: bytes
    amount: int
    recipient: bytes

    def with_amount(self, amount: int) -> "OutputToken":
        return replace(self, amount=amount)


@dataclass(frozen=True)
class ResolvedOrder:
    """Concrete amounts for one evaluation."""
    info: OrderInfo
    input: InputToken
    outputs: Tuple[OutputToken, ...] = field(default_factory=tuple)
    hash: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "outputs", tuple(self.outputs))

    def with_outputs(self, outputs) -> "ResolvedOrder":
        return replace(self, outputs=tuple(outputs))

    def __repr__(self) -> str:
        oid = bytes_to_hex(self.hash)[:10] + "..." if self.hash else "unhashed"
        amounts = ", ".join(str(o.amount) for o in self.outputs)
        return f"ResolvedOrder(hash={oid}, input={self.input.amount}, outputs=[{amounts}])"
