"""HttpStorage - plain HTTP(S) fetch, download only.

HTTP is a pass-through retrieval mechanism, not a write target. Because it
claims every http(s) URL, resolvers place it LAST so more specific
backends (object storage) get first refusal.
"""

from __future__ import annotations

from payloadkit.contracts import StorageOperation, UnsupportedOperationError, UploadResult
from payloadkit.plugins.storage.base import NetworkStorageBase, status_error


class HttpStorage(NetworkStorageBase):
    """Read-only storage backend for http:// and https:// URLs."""

    name = "http"
    supports_upload = False

    def is_configured(self) -> bool:
        # Nothing to configure for a plain GET; upload is still refused
        return True

    def can_handle(self, uri: str) -> bool:
        return uri.startswith(("https://", "http://"))

    async def upload(self, content: bytes | str) -> UploadResult:
        raise UnsupportedOperationError("HttpStorage does not support upload - use a dedicated storage service")

    async def download(self, uri: str) -> bytes:
        """GET the URL and return the body.

        Raises:
            UnsupportedLocatorError: If uri is not http(s)
            NetworkError: "HTTP fetch failed: <status> <reason>" on non-2xx
        """
        self._require_handled(uri)
        response = await self._request("GET", uri, operation=StorageOperation.DOWNLOAD)
        if not response.is_success:
            raise status_error("HTTP fetch failed", response)
        return response.content
