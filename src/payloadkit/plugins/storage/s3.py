"""S3Storage - S3-compatible object storage (AWS S3, Cloudflare R2, MinIO).

Uploads are signed PUTs (AWS Signature Version 4) to path-style URLs:
    <endpoint>/<bucket>/[<key_prefix>/]<content hash hex>.json

Object keys are content-addressed, so uploading the same bytes twice
writes the same object.

Downloads are plain unsigned GETs: the bucket (or the public URL base in
front of it) is expected to allow public reads.
"""

from __future__ import annotations

from urllib.parse import urlparse

from payloadkit.contracts import ConfigurationError, StorageOperation, UploadResult
from payloadkit.core.clock import DEFAULT_CLOCK, Clock
from payloadkit.core.config import S3Settings
from payloadkit.core.hashing import compute_content_hash, to_bytes
from payloadkit.core.security import canonical_path, sign_request
from payloadkit.plugins.storage.base import DEFAULT_TIMEOUT_SECONDS, NetworkStorageBase, status_error


class S3Storage(NetworkStorageBase):
    """Storage backend for a configured S3-compatible bucket."""

    name = "s3"

    def __init__(
        self,
        settings: S3Settings,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Clock = DEFAULT_CLOCK,
    ) -> None:
        """Initialize S3 storage.

        Args:
            settings: Endpoint, bucket and credentials
            timeout: Request timeout in seconds
            clock: Source of the signing timestamp
        """
        super().__init__(timeout=timeout)
        self._settings = settings
        self._clock = clock

    @property
    def settings(self) -> S3Settings:
        return self._settings

    @property
    def bucket_url(self) -> str:
        """Path-style bucket URL: <endpoint>/<bucket>."""
        return f"{self._settings.endpoint}/{self._settings.bucket}"

    def is_configured(self) -> bool:
        s = self._settings
        return bool(s.endpoint and s.bucket and s.access_key_id and s.secret_access_key)

    def can_handle(self, uri: str) -> bool:
        """Match HTTPS URLs under the bucket URL or the public URL base.

        Plain http:// never matches, even if the endpoint itself is http.
        """
        if not uri.startswith("https://"):
            return False
        s = self._settings
        if s.endpoint and s.bucket and uri.startswith(f"{self.bucket_url}/"):
            return True
        return bool(s.public_url_base) and uri.startswith(f"{s.public_url_base}/")

    def object_key(self, content: bytes | str) -> str:
        """Content-addressed object key for content."""
        filename = f"{compute_content_hash(content)[2:]}.json"
        if self._settings.key_prefix:
            return f"{self._settings.key_prefix}/{filename}"
        return filename

    def public_url(self, key: str) -> str:
        """Read URL for an object key."""
        if self._settings.public_url_base:
            return f"{self._settings.public_url_base}/{key}"
        return f"{self.bucket_url}/{key}"

    async def upload(self, content: bytes | str) -> UploadResult:
        """PUT content under its content-addressed key.

        Raises:
            ConfigurationError: If endpoint, bucket or credentials are missing
            NetworkError: "S3 upload failed: <status> <body>" on non-2xx
        """
        if not self.is_configured():
            raise ConfigurationError("S3 upload requires endpoint, bucket, access_key_id and secret_access_key")

        data = to_bytes(content)
        key = self.object_key(data)
        url = f"{self.bucket_url}/{key}"
        parsed = urlparse(url)

        signed = sign_request(
            method="PUT",
            canonical_uri=canonical_path(parsed.path),
            host=parsed.netloc,
            payload=data,
            access_key_id=self._settings.access_key_id,
            secret_access_key=self._settings.secret_access_key,
            region=self._settings.region,
            timestamp=self._clock.now(),
        )

        response = await self._request(
            "PUT",
            url,
            operation=StorageOperation.UPLOAD,
            headers={**signed.as_headers(), "Content-Type": "application/json"},
            content=data,
        )
        if not response.is_success:
            raise status_error("S3 upload failed", response, use_body=True)

        return UploadResult(uri=self.public_url(key), content_id=key)

    async def download(self, uri: str) -> bytes:
        """Plain GET of an object URL.

        Raises:
            UnsupportedLocatorError: If uri is not under this bucket/public base
            NetworkError: "S3 download failed: <status> <reason>" on non-2xx
        """
        self._require_handled(uri)
        response = await self._request("GET", uri, operation=StorageOperation.DOWNLOAD)
        if not response.is_success:
            raise status_error("S3 download failed", response)
        return response.content
