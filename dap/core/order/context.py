"""Execution snapshot"""

from dataclasses import dataclass

from dap.crypto import ZERO_ADDRESS


@dataclass(frozen=True)
class ExecutionContext:
    """
    Read-only environment of one evaluation.

    Captured once and passed through the whole call graph so that
    nothing is re-read mid-computation; evaluating the same order
    against the same context always gives the same result.

    Attributes:
        block_number: current block height
        timestamp: current block timestamp
        base_fee: current block base fee (wei)
        gas_price: effective gas price of the fill (wei)
        chain_id: chain the fill happens on
        filler: address attempting the fill
    """
    block_number: int
    timestamp: int
    chain_id: int = 1
    base_fee: int = 0
    gas_price: int = 0
    filler: bytes = ZERO_ADDRESS

    @property
    def priority_fee(self) -> int:
        return max(self.gas_price - self.base_fee, 0)
