"""DataUriStorage - inline base64 storage.

No remote store is involved: upload wraps the bytes in a data URI and
download decodes it. Always configured, so it is the natural last entry
in an upload priority list.
"""

from __future__ import annotations

from payloadkit.contracts import UnsupportedLocatorError, UploadResult
from payloadkit.core.codec import DATA_URI_PREFIX, decode_data_uri, encode_data_uri
from payloadkit.core.hashing import compute_content_hash


class DataUriStorage:
    """Storage backend for data: URIs."""

    name = "data"
    supports_upload = True

    def is_configured(self) -> bool:
        return True

    def can_handle(self, uri: str) -> bool:
        return uri.startswith(DATA_URI_PREFIX)

    async def upload(self, content: bytes | str) -> UploadResult:
        """Encode content as data:application/json;base64,..."""
        return UploadResult(
            uri=encode_data_uri(content),
            content_id=compute_content_hash(content),
        )

    async def download(self, uri: str) -> bytes:
        """Decode a data URI back into its bytes.

        Raises:
            UnsupportedLocatorError: If uri is not a (well-formed) data URI
        """
        if not self.can_handle(uri):
            raise UnsupportedLocatorError(f"DataUriStorage cannot handle URI: {uri[:100]}")
        return decode_data_uri(uri).content
