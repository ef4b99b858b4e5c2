"""Status codes and kinds used across subsystem boundaries."""

from enum import StrEnum


class PayloadType(StrEnum):
    """Retrieval mechanism implied by a payload's URI.

    Classification is purely by prefix; no backend is consulted.
    """

    INLINE = "inline"
    DATA_URI = "data_uri"
    IPFS = "ipfs"
    HTTPS = "https"
    UNKNOWN = "unknown"


class StorageOperation(StrEnum):
    """Operation performed against a storage backend.

    Used as a span attribute and log field.
    """

    UPLOAD = "upload"
    DOWNLOAD = "download"
