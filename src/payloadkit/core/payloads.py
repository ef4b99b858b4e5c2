"""Payload construction and classification helpers.

Pure functions: no I/O, no backend lookups. Consumers use these to decide
how to treat a Payload without invoking a storage backend, and producers
use the factories when they already know the final locator.
"""

from __future__ import annotations

import re
from urllib.parse import unquote

from payloadkit.contracts import Payload, PayloadType, UnsupportedLocatorError
from payloadkit.core.codec import DEFAULT_MIME_TYPE, encode_data_uri, encode_inline
from payloadkit.core.hashing import compute_content_hash

IPFS_PREFIX = "ipfs://"

_SCHEME_PATTERN = re.compile(r"^([a-z]+)://")

# Prefixes a Payload.uri may legitimately carry (empty string = inline)
_VALID_URI_PREFIXES = ("data:", IPFS_PREFIX, "https://", "http://")


def detect_payload_type(payload: Payload) -> PayloadType:
    """Classify a payload by its URI prefix.

    Returns:
        INLINE for an empty URI, DATA_URI, IPFS, HTTPS (for both http://
        and https://), or UNKNOWN for any other scheme
    """
    uri = payload.uri
    if not uri:
        return PayloadType.INLINE
    if uri.startswith("data:"):
        return PayloadType.DATA_URI
    if uri.startswith(IPFS_PREFIX):
        return PayloadType.IPFS
    if uri.startswith(("https://", "http://")):
        return PayloadType.HTTPS
    return PayloadType.UNKNOWN


def get_scheme(uri: str) -> str | None:
    """Extract the scheme name ("ipfs", "https", "data", ...) or None."""
    match = _SCHEME_PATTERN.match(uri)
    if match:
        return match.group(1)
    if uri.startswith("data:"):
        return "data"
    return None


def is_valid_payload_uri(value: str) -> bool:
    """Check whether value is acceptable as a Payload.uri."""
    return value == "" or value.startswith(_VALID_URI_PREFIXES)


def extract_ipfs_cid(uri: str) -> str:
    """Extract the CID from an ipfs:// URI.

    Percent-encoded forms (ipfs%3A%2F%2F...) are decoded first.

    Raises:
        UnsupportedLocatorError: If uri is not an IPFS locator
    """
    decoded = unquote(uri) if "%3A%2F%2F" in uri else uri
    if not decoded.startswith(IPFS_PREFIX):
        raise UnsupportedLocatorError(f"Invalid IPFS URI format: {uri[:50]!r}")
    return decoded[len(IPFS_PREFIX) :]


def create_payload(content_hash: str, uri: str) -> Payload:
    """Create a Payload from pre-computed values."""
    return Payload(content_hash=content_hash, uri=uri)


def create_inline_payload(content: bytes | str) -> Payload:
    """Create an inline Payload (hash only, empty URI)."""
    return encode_inline(content)


def create_data_uri_payload(content: bytes | str, mime_type: str = DEFAULT_MIME_TYPE) -> Payload:
    """Create a Payload that embeds content in a base64 data URI."""
    return Payload(
        content_hash=compute_content_hash(content),
        uri=encode_data_uri(content, mime_type),
    )


def create_ipfs_payload(content: bytes | str, cid: str) -> Payload:
    """Create a Payload pointing at an IPFS CID."""
    return Payload(content_hash=compute_content_hash(content), uri=f"{IPFS_PREFIX}{cid}")


def create_https_payload(content: bytes | str, url: str) -> Payload:
    """Create a Payload pointing at an HTTP(S) URL."""
    return Payload(content_hash=compute_content_hash(content), uri=url)


def parse_payload_from_bytes(content_hash: str, uri_bytes: str) -> Payload:
    """Build a Payload from a contract output's (bytes32, bytes) fields.

    The URI field arrives as 0x-prefixed hex of its UTF-8 text. Empty or
    bare "0x" means an inline payload. Hex that does not decode to UTF-8 is
    kept verbatim so the caller can still see what was emitted.
    """
    if not uri_bytes or uri_bytes == "0x":
        return Payload(content_hash=content_hash, uri="")

    if not uri_bytes.startswith("0x"):
        return Payload(content_hash=content_hash, uri=uri_bytes)

    try:
        uri = bytes.fromhex(uri_bytes[2:]).decode("utf-8")
    except ValueError:
        # Covers both malformed hex and UnicodeDecodeError
        uri = uri_bytes
    return Payload(content_hash=content_hash, uri=uri)
