"""StorageBackend protocol for locator-addressed blob storage.

This protocol defines the interface implemented by every backend in
payloadkit.plugins.storage and consumed by the PayloadResolver.

Consolidated here to avoid circular imports and provide single source of truth.
"""

from typing import Protocol, runtime_checkable

from payloadkit.contracts.payload import UploadResult


@runtime_checkable
class StorageBackend(Protocol):
    """Protocol for payload storage backends.

    Implementations hold only immutable configuration and are safe to
    share across concurrent encode/resolve calls.
    """

    name: str
    # False for read-only backends; unnamed encode() never selects them
    supports_upload: bool

    def is_configured(self) -> bool:
        """Check whether the minimum required configuration is present.

        Returns:
            True if upload can be attempted
        """
        ...

    def can_handle(self, uri: str) -> bool:
        """Check whether this backend can download the given URI.

        Must be a pure predicate on the URI (no I/O).

        Args:
            uri: Locator to check

        Returns:
            True if download(uri) is supported
        """
        ...

    async def upload(self, content: bytes | str) -> UploadResult:
        """Store content and return its locator.

        Args:
            content: Raw bytes (strings are UTF-8 encoded)

        Returns:
            UploadResult with the locator and backend-specific content ID

        Raises:
            ConfigurationError: If is_configured() is False
            UnsupportedOperationError: If the backend is read-only
            NetworkError: On a non-success response
        """
        ...

    async def download(self, uri: str) -> bytes:
        """Fetch content by locator.

        Args:
            uri: Locator previously returned by upload (or any URI this
                backend can handle)

        Returns:
            Raw content bytes

        Raises:
            UnsupportedLocatorError: If can_handle(uri) is False
            NetworkError: On a non-success response
        """
        ...
