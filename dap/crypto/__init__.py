"""
Cryptographic primitives for DAP.

This module provides:
- Keccak-256 hashing (EVM compatible)
- Key generation and address derivation
- Recoverable ECDSA signatures on secp256k1 (r || s || v, 65 bytes)
- Signer recovery, the primitive behind cosignature verification

Design Notes:
-------------
Addresses are raw 20-byte values (last 20 bytes of keccak256(pubkey)).
The all-zero address is what a failed or degenerate recovery yields, so
callers must treat it as "no signer" rather than as a real address.
"""

import secrets
from dataclasses import dataclass
from typing import Optional

from Crypto.Hash import keccak
from py_ecc.secp256k1 import secp256k1


# =============================================================================
# Constants
# =============================================================================

# secp256k1 curve order (number of points on the curve)
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

ADDRESS_SIZE = 20
SIGNATURE_SIZE = 65

ZERO_ADDRESS = b"\x00" * ADDRESS_SIZE


# =============================================================================
# Hashing
# =============================================================================


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).

    Used for: order hashes, cosigner digests, address derivation.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


# =============================================================================
# Key Generation
# =============================================================================


@dataclass
class KeyPair:
    """
    An ECDSA keypair on secp256k1.

    Attributes:
        private_key: 32-byte secret key (integer in [1, order-1])
        public_key: 64-byte uncompressed public key (x || y coordinates)
    """
    private_key: bytes  # 32 bytes
    public_key: bytes   # 64 bytes (uncompressed, no 0x04 prefix)

    @property
    def address(self) -> bytes:
        """20-byte address derived from the public key."""
        return public_key_to_address(self.public_key)

    @property
    def address_hex(self) -> str:
        return bytes_to_hex(self.address)

    @property
    def private_key_hex(self) -> str:
        """Return private key as hex string."""
        return self.private_key.hex()


def generate_keypair() -> KeyPair:
    """
    Generate a new random keypair.

    Uses cryptographically secure random number generator.
    """
    private_key_int = secrets.randbelow(SECP256K1_ORDER - 1) + 1
    private_key = private_key_int.to_bytes(32, byteorder="big")
    return KeyPair(private_key=private_key, public_key=private_key_to_public_key(private_key))


def private_key_to_public_key(private_key: bytes) -> bytes:
    """
    Derive public key from private key.

    Args:
        private_key: 32-byte private key

    Returns:
        64-byte uncompressed public key
    """
    if len(private_key) != 32:
        raise ValueError("Private key must be 32 bytes")

    public_key_point = secp256k1.privtopub(private_key)
    x_bytes = public_key_point[0].to_bytes(32, byteorder="big")
    y_bytes = public_key_point[1].to_bytes(32, byteorder="big")
    return x_bytes + y_bytes


def public_key_to_address(public_key: bytes) -> bytes:
    """Address = last 20 bytes of keccak256(public_key)."""
    if len(public_key) != 64:
        raise ValueError("Public key must be 64 bytes")
    return keccak256(public_key)[-ADDRESS_SIZE:]


def private_key_to_address(private_key: bytes) -> bytes:
    return public_key_to_address(private_key_to_public_key(private_key))


# =============================================================================
# Digital Signatures (ECDSA)
# =============================================================================


def sign(message_hash: bytes, private_key: bytes) -> bytes:
    """
    Sign a 32-byte digest.

    Args:
        message_hash: 32-byte digest to sign
        private_key: 32-byte private key

    Returns:
        65-byte signature (r || s || v) with v in {27, 28}

    Note: py_ecc already produces low-s signatures and sets v accordingly.
    """
    if len(message_hash) != 32:
        raise ValueError("Message hash must be 32 bytes")
    if len(private_key) != 32:
        raise ValueError("Private key must be 32 bytes")

    v, r, s = secp256k1.ecdsa_raw_sign(message_hash, private_key)

    return r.to_bytes(32, byteorder="big") + s.to_bytes(32, byteorder="big") + bytes([v])


def recover_address(message_hash: bytes, signature: bytes) -> bytes:
    """
    Recover the signer address of a 65-byte signature.

    Mirrors `ecrecover`: any malformed or degenerate signature recovers
    to ZERO_ADDRESS instead of raising.

    Args:
        message_hash: 32-byte digest
        signature: 65-byte signature (r || s || v), v in {0, 1, 27, 28}

    Returns:
        20-byte address, ZERO_ADDRESS if recovery fails
    """
    if len(message_hash) != 32 or len(signature) != SIGNATURE_SIZE:
        return ZERO_ADDRESS

    r = int.from_bytes(signature[:32], byteorder="big")
    s = int.from_bytes(signature[32:64], byteorder="big")
    v = signature[64]
    if v < 27:
        v += 27
    if v not in (27, 28):
        return ZERO_ADDRESS
    if not (0 < r < SECP256K1_ORDER) or not (0 < s < SECP256K1_ORDER):
        return ZERO_ADDRESS

    try:
        recovered = secp256k1.ecdsa_raw_recover(message_hash, (v, r, s))
    except (ValueError, ZeroDivisionError):
        return ZERO_ADDRESS
    if not recovered or recovered == (0, 0):
        return ZERO_ADDRESS

    public_key = recovered[0].to_bytes(32, byteorder="big") + recovered[1].to_bytes(32, byteorder="big")
    return public_key_to_address(public_key)


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


def is_valid_address(address: str) -> bool:
    """Check if string is a valid address format."""
    if not address.startswith("0x"):
        return False
    if len(address) != 42:  # 0x + 40 hex chars
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def address_from_hex(address: Optional[str]) -> bytes:
    """Parse a 0x address; None maps to ZERO_ADDRESS."""
    if address is None:
        return ZERO_ADDRESS
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address}")
    return hex_to_bytes(address)
