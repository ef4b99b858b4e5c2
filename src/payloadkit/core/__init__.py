"""Core infrastructure: hashing, codec, payload helpers, configuration, logging."""

from payloadkit.core.codec import (
    DataUri,
    decode_base64,
    decode_data_uri,
    encode_base64,
    encode_data_uri,
    encode_inline,
)
from payloadkit.core.config import (
    IpfsSettings,
    PayloadSettings,
    S3Settings,
    load_settings,
)
from payloadkit.core.hashing import (
    ZERO_HASH,
    compute_content_hash,
    is_content_hash,
    is_zero_hash,
    verify_content_hash,
)
from payloadkit.core.logging import (
    configure_logging,
    get_logger,
)
from payloadkit.core.payloads import (
    create_data_uri_payload,
    create_https_payload,
    create_inline_payload,
    create_ipfs_payload,
    create_payload,
    detect_payload_type,
    extract_ipfs_cid,
    get_scheme,
    is_valid_payload_uri,
    parse_payload_from_bytes,
)

__all__ = [
    "ZERO_HASH",
    "DataUri",
    "IpfsSettings",
    "PayloadSettings",
    "S3Settings",
    "compute_content_hash",
    "configure_logging",
    "create_data_uri_payload",
    "create_https_payload",
    "create_inline_payload",
    "create_ipfs_payload",
    "create_payload",
    "decode_base64",
    "decode_data_uri",
    "detect_payload_type",
    "encode_base64",
    "encode_data_uri",
    "encode_inline",
    "extract_ipfs_cid",
    "get_logger",
    "get_scheme",
    "is_content_hash",
    "is_valid_payload_uri",
    "is_zero_hash",
    "load_settings",
    "parse_payload_from_bytes",
    "verify_content_hash",
]
