"""Security utilities: request signing for object storage."""

from payloadkit.core.security.sigv4 import (
    ALGORITHM,
    SIGNED_HEADERS,
    SignedHeaders,
    canonical_path,
    derive_signing_key,
    sha256_hex,
    sign_request,
)

__all__ = [
    "ALGORITHM",
    "SIGNED_HEADERS",
    "SignedHeaders",
    "canonical_path",
    "derive_signing_key",
    "sha256_hex",
    "sign_request",
]
