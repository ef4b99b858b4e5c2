"""Shared contracts for cross-boundary data types.

All dataclasses, enums, protocols and exceptions that cross subsystem
boundaries are defined here.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes (PayloadSettings, S3Settings, ...) are NOT re-exported
here - import them from payloadkit.core.config.
"""

from payloadkit.contracts.enums import PayloadType, StorageOperation
from payloadkit.contracts.errors import (
    ConfigurationError,
    InlineContentRequiredError,
    NetworkError,
    PayloadError,
    PayloadTimeoutError,
    UnsupportedLocatorError,
    UnsupportedOperationError,
)
from payloadkit.contracts.payload import (
    ZERO_HASH,
    Payload,
    ResolveResult,
    UploadResult,
)
from payloadkit.contracts.storage import StorageBackend

__all__ = [
    "ZERO_HASH",
    "ConfigurationError",
    "InlineContentRequiredError",
    "NetworkError",
    "Payload",
    "PayloadError",
    "PayloadTimeoutError",
    "PayloadType",
    "ResolveResult",
    "StorageBackend",
    "StorageOperation",
    "UnsupportedLocatorError",
    "UnsupportedOperationError",
    "UploadResult",
]
