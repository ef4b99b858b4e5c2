# src/payloadkit/core/hashing.py
"""
Content hashing for payload integrity verification.

Digest: keccak-256 over the raw bytes, rendered as 0x-prefixed lowercase hex.
This is the format an on-chain bytes32 field expects, and it is the system's
real compatibility boundary: any external verifier recomputes exactly this.
It must not change without coordinating with that consumer.

NOTE: keccak-256 is NOT hashlib.sha3_256. SHA-3 adds different padding, so
the two produce different digests for the same input.
"""

import hmac
import re

from Crypto.Hash import keccak

from payloadkit.contracts.payload import ZERO_HASH

__all__ = [
    "ZERO_HASH",
    "compute_content_hash",
    "is_content_hash",
    "is_zero_hash",
    "to_bytes",
    "verify_content_hash",
]

# 0x + exactly 64 hex characters (either case accepted on input)
_CONTENT_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def to_bytes(content: bytes | str) -> bytes:
    """Normalize content to bytes. Strings are UTF-8 encoded."""
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


def compute_content_hash(content: bytes | str) -> str:
    """Compute the keccak-256 content hash.

    Deterministic across processes and implementations: the same bytes
    always produce the same digest.

    Args:
        content: Raw bytes, or a string (hashed as its UTF-8 encoding)

    Returns:
        0x-prefixed lowercase hex digest (66 characters)
    """
    digest = keccak.new(digest_bits=256)
    digest.update(to_bytes(content))
    return "0x" + digest.hexdigest()


def is_content_hash(value: str) -> bool:
    """Check that value is a well-formed content hash (0x + 64 hex chars)."""
    return bool(_CONTENT_HASH_PATTERN.match(value))


def is_zero_hash(content_hash: str) -> bool:
    """Check whether content_hash is the ZERO_HASH sentinel."""
    return content_hash.lower() == ZERO_HASH


def verify_content_hash(content: bytes | str, expected_hash: str) -> bool:
    """Verify content against an expected hash.

    Never raises. ZERO_HASH never verifies, even if the bytes happened to
    hash to zero: absence of a real hash means there is nothing
    authoritative to check against.

    Args:
        content: Candidate bytes
        expected_hash: 0x-prefixed hex digest (case-insensitive)

    Returns:
        True only if expected_hash is a real, well-formed hash that matches
    """
    if not is_content_hash(expected_hash) or is_zero_hash(expected_hash):
        return False
    actual_hash = compute_content_hash(content)
    # Timing-safe comparison
    return hmac.compare_digest(actual_hash, expected_hash.lower())
