# src/payloadkit/contracts/payload.py
"""Payload value types shared by producers, consumers and backends.

A Payload is the interoperability contract: any resolver holding an
equivalent backend configuration must be able to resolve a Payload produced
by any other resolver. Instances are immutable once created.
"""

from __future__ import annotations

from dataclasses import dataclass

from payloadkit.contracts.enums import PayloadType

# 32 zero bytes, 0x-prefixed hex. Not the digest of any content (keccak-256
# of empty input is 0xc5d2...a470); a sentinel for "no hash was supplied".
ZERO_HASH = "0x" + "0" * 64


@dataclass(frozen=True, slots=True)
class Payload:
    """Reference to stored content.

    Fields:
        content_hash: 0x-prefixed keccak-256 hex digest of the raw bytes
        uri: Locator. Empty for inline payloads, otherwise one of
            data:, ipfs://, http(s):// or an object-storage URL
    """

    content_hash: str
    uri: str = ""

    @property
    def is_inline(self) -> bool:
        """Whether the bytes travel out-of-band (no locator)."""
        return not self.uri


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Result of a backend upload.

    content_id is backend-specific: a CID for IPFS, the object key for
    object storage, the content hash for data URIs.
    """

    uri: str
    content_id: str


@dataclass(frozen=True, slots=True)
class ResolveResult:
    """Content fetched for a Payload, with its integrity verdict.

    verified is True only when a non-zero hash was available AND it
    matched the fetched bytes.
    """

    content: bytes
    verified: bool
    type: PayloadType

    @property
    def text(self) -> str:
        """Content decoded as UTF-8."""
        return self.content.decode("utf-8")
