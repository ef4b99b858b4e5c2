"""AWS Signature Version 4 request signing using HMAC-SHA256.

Only the subset needed for a single-object PUT to an S3-compatible
endpoint is implemented: no query string, and exactly three signed headers
(host, x-amz-content-sha256, x-amz-date).

Usage:
    from payloadkit.core.security import sign_request

    signed = sign_request(
        method="PUT",
        canonical_uri="/bucket/key.json",
        host="s3.example.com",
        payload=b"...",
        access_key_id=key_id,
        secret_access_key=secret,
        region="auto",
        timestamp=datetime.now(UTC),
    )
    headers = signed.as_headers()
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import quote

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
SIGNED_HEADERS = "host;x-amz-content-sha256;x-amz-date"


@dataclass(frozen=True, slots=True)
class SignedHeaders:
    """Headers produced by signing a request."""

    authorization: str
    amz_date: str
    content_sha256: str
    host: str

    def as_headers(self) -> dict[str, str]:
        """Render as an HTTP header dict."""
        return {
            "Authorization": self.authorization,
            "x-amz-date": self.amz_date,
            "x-amz-content-sha256": self.content_sha256,
            "Host": self.host,
        }


def sha256_hex(data: bytes | str) -> str:
    """SHA-256 hex digest (strings are UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def _hmac_sha256(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(secret_access_key: str, date_stamp: str, region: str, service: str = SERVICE) -> bytes:
    """Derive the SigV4 signing key.

    kSigning = HMAC(HMAC(HMAC(HMAC("AWS4" + secret, date), region), service), "aws4_request")
    """
    k_date = _hmac_sha256(f"AWS4{secret_access_key}".encode(), date_stamp)
    k_region = _hmac_sha256(k_date, region)
    k_service = _hmac_sha256(k_region, service)
    return _hmac_sha256(k_service, "aws4_request")


def canonical_path(path: str) -> str:
    """URI-encode each path segment, keeping the slashes."""
    return quote(path, safe="/-_.~")


def sign_request(
    *,
    method: str,
    canonical_uri: str,
    host: str,
    payload: bytes,
    access_key_id: str,
    secret_access_key: str,
    region: str,
    timestamp: datetime,
    service: str = SERVICE,
) -> SignedHeaders:
    """Sign a request with AWS Signature Version 4.

    Args:
        method: HTTP method (e.g. "PUT")
        canonical_uri: Absolute path, already URI-encoded
        host: Host header value (hostname[:port])
        payload: Exact request body bytes
        access_key_id: Access key ID placed in the Credential scope
        secret_access_key: Secret used to derive the signing key
        region: Signing region ("auto" for Cloudflare R2)
        timestamp: Request time; must be timezone-aware
        service: Service name in the credential scope

    Returns:
        SignedHeaders ready to attach to the request
    """
    amz_date = timestamp.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")
    date_stamp = amz_date[:8]
    payload_hash = sha256_hex(payload)

    canonical_headers = f"host:{host}\nx-amz-content-sha256:{payload_hash}\nx-amz-date:{amz_date}\n"
    canonical_request = "\n".join(
        [
            method,
            canonical_uri,
            "",  # canonical query string
            canonical_headers,
            SIGNED_HEADERS,
            payload_hash,
        ]
    )

    credential_scope = f"{date_stamp}/{region}/{service}/aws4_request"
    string_to_sign = "\n".join([ALGORITHM, amz_date, credential_scope, sha256_hex(canonical_request)])

    signing_key = derive_signing_key(secret_access_key, date_stamp, region, service)
    signature = hmac.new(signing_key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

    authorization = (
        f"{ALGORITHM} Credential={access_key_id}/{credential_scope}, SignedHeaders={SIGNED_HEADERS}, Signature={signature}"
    )
    return SignedHeaders(
        authorization=authorization,
        amz_date=amz_date,
        content_sha256=payload_hash,
        host=host,
    )
