"""Payload codec: base64 utilities and data URI encoding.

Data URI format:
    data:<mime_type>;base64,<payload>

Encoding works on raw bytes throughout, so arbitrary binary content
(not just valid UTF-8) round-trips exactly, including the empty sequence.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import NamedTuple
from urllib.parse import unquote_to_bytes

from payloadkit.contracts import Payload, UnsupportedLocatorError
from payloadkit.core.hashing import compute_content_hash, to_bytes

DEFAULT_MIME_TYPE = "application/json"
DATA_URI_PREFIX = "data:"

# data:[<mediatype>][;base64],<payload>; mediatype may carry ;key=value parameters
_DATA_URI_PATTERN = re.compile(r"^data:([^,]*),(.*)$", re.DOTALL)


class DataUri(NamedTuple):
    """Parsed components of a data URI."""

    content: bytes
    mime_type: str
    encoding: str


def encode_base64(content: bytes | str) -> str:
    """Base64-encode content (strings as UTF-8)."""
    return base64.b64encode(to_bytes(content)).decode("ascii")


def decode_base64(encoded: str) -> bytes:
    """Decode standard base64 to raw bytes.

    Raises:
        ValueError: If encoded is not valid base64
    """
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def encode_data_uri(content: bytes | str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Wrap content as a base64 data URI.

    Args:
        content: Raw bytes (strings are UTF-8 encoded)
        mime_type: MIME type recorded in the URI

    Returns:
        data:<mime_type>;base64,<payload>
    """
    return f"data:{mime_type};base64,{encode_base64(content)}"


def decode_data_uri(uri: str) -> DataUri:
    """Parse a data URI back into its content and metadata.

    Follows RFC 2397: a missing media type defaults to text/plain, media
    type parameters (charset=...) stay in mime_type, and without a trailing
    ;base64 flag the payload is percent-encoded text.

    Raises:
        UnsupportedLocatorError: If uri is not a well-formed data URI
    """
    if not uri.startswith(DATA_URI_PREFIX):
        raise UnsupportedLocatorError(f"Not a data URI: {uri[:50]!r}")

    match = _DATA_URI_PATTERN.match(uri)
    if match is None:
        raise UnsupportedLocatorError(f"Invalid data URI format: {uri[:50]!r}")

    header, encoded = match.group(1), match.group(2)
    params = header.split(";")
    # Only a trailing ";base64" is the encoding flag; anything before it
    # (charset=...) belongs to the media type
    is_base64 = len(params) > 1 and params[-1].strip().lower() == "base64"
    if is_base64:
        params.pop()
    media_type = params[0].strip() or "text/plain"
    mime_type = ";".join([media_type, *(p.strip() for p in params[1:] if p.strip())])
    encoding = "base64" if is_base64 else "utf-8"

    if is_base64:
        try:
            content = decode_base64(encoded)
        except ValueError as e:
            raise UnsupportedLocatorError(f"Invalid data URI payload: {e}") from e
    else:
        content = unquote_to_bytes(encoded)

    return DataUri(content=content, mime_type=mime_type, encoding=encoding)


def encode_inline(content: bytes | str) -> Payload:
    """Create an inline Payload: real content hash, no locator.

    Used when the bytes travel out-of-band (e.g. inline with a request)
    and only the hash is needed for later verification.
    """
    return Payload(content_hash=compute_content_hash(content), uri="")
