"""
Cosigner Protocol - authenticate and merge last-mile auction parameters.

The swapper signs the base order, naming a cosigner. The cosigner then
signs

    digest = keccak256(order_hash || uint256(chain_id) || abi.encode(data))

binding its payload to exactly one order on exactly one chain. A
payload is verified and consumed within a single evaluation; nothing
is persisted.

Overrides may only improve the swapper's price: an input override must
not exceed the signed start amount, output overrides must not fall
below the signed start amounts.
"""

from typing import Sequence, Tuple

from dap.core.abi import encode_bytes32, encode_uint
from dap.core.errors import (
    InvalidCosignatureError,
    InvalidCosignerInputError,
    InvalidCosignerOutputError,
)
from dap.crypto import ZERO_ADDRESS, bytes_to_hex, keccak256, recover_address, sign
from dap.utils.logger import get_logger

logger = get_logger("cosigner")


# =============================================================================
# Digest & Signature
# =============================================================================


def cosigner_digest(order_hash: bytes, chain_id: int, cosigner_data) -> bytes:
    """
    Digest the cosigner signs.

    Args:
        order_hash: 32-byte struct hash of the base order
        chain_id: chain the order settles on
        cosigner_data: payload exposing `abi_encode()`, or raw encoded bytes
    """
    payload = cosigner_data if isinstance(cosigner_data, (bytes, bytearray)) else cosigner_data.abi_encode()
    return keccak256(encode_bytes32(order_hash) + encode_uint(chain_id) + bytes(payload))


def cosign(order_hash: bytes, chain_id: int, cosigner_data, private_key: bytes) -> bytes:
    """Produce a 65-byte cosignature over the digest."""
    return sign(cosigner_digest(order_hash, chain_id, cosigner_data), private_key)


def verify_cosignature(cosigner: bytes, digest: bytes, signature: bytes) -> None:
    """
    Check that `signature` over `digest` was made by `cosigner`.

    Raises:
        InvalidCosignatureError: recovered signer differs from `cosigner`,
            or recovery yields the zero address
    """
    signer = recover_address(digest, signature)
    if signer == ZERO_ADDRESS or signer != cosigner:
        logger.warning(
            f"Cosignature rejected: expected {bytes_to_hex(cosigner)}, recovered {bytes_to_hex(signer)}"
        )
        raise InvalidCosignatureError(
            "cosignature does not match cosigner",
            context={"cosigner": bytes_to_hex(cosigner), "recovered": bytes_to_hex(signer)},
        )


# =============================================================================
# Merge
# =============================================================================


def apply_input_override(base_start_amount: int, input_override: int) -> int:
    """
    Effective input start amount.

    Raises:
        InvalidCosignerInputError: override exceeds the signed start amount
    """
    if input_override == 0:
        return base_start_amount
    if input_override > base_start_amount:
        raise InvalidCosignerInputError(
            f"input override {input_override} exceeds signed start {base_start_amount}"
        )
    return input_override


def apply_output_overrides(
    base_start_amounts: Sequence[int],
    output_overrides: Sequence[int],
) -> Tuple[int, ...]:
    """
    Effective output start amounts.

    An empty override list leaves every output alone; otherwise it must
    match the outputs one-to-one and a zero entry keeps that output.

    Raises:
        InvalidCosignerOutputError: length mismatch, or an override below
            its signed start amount
    """
    if not output_overrides:
        return tuple(base_start_amounts)

    if len(output_overrides) != len(base_start_amounts):
        raise InvalidCosignerOutputError(
            f"{len(output_overrides)} output overrides for {len(base_start_amounts)} outputs"
        )

    merged = []
    for i, (base, override) in enumerate(zip(base_start_amounts, output_overrides)):
        if override == 0:
            merged.append(base)
            continue
        if override < base:
            raise InvalidCosignerOutputError(
                f"output {i} override {override} below signed start {base}"
            )
        merged.append(override)
    return tuple(merged)
