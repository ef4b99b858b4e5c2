"""IpfsStorage - IPFS storage via Pinata pinning or a local node.

Upload paths (first match wins):
1. Pinata credentials (key AND secret) -> POST JSON to the pin-JSON endpoint
2. Local node API URL -> multipart POST to <api_url>/api/v0/add

Download always goes through an HTTP gateway: GET <gateway><cid>.

NOTE: Pinata pins *JSON*, re-serializing the document. Content that is
valid JSON but not in Pinata's serialization (whitespace, key order) will
come back with different bytes and fail hash verification. Use the local
node path when byte-exact round-trips matter.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from payloadkit.contracts import (
    ConfigurationError,
    NetworkError,
    StorageOperation,
    UnsupportedOperationError,
    UploadResult,
)
from payloadkit.core.clock import DEFAULT_CLOCK, Clock
from payloadkit.core.config import IpfsSettings
from payloadkit.core.hashing import to_bytes
from payloadkit.core.payloads import IPFS_PREFIX, extract_ipfs_cid
from payloadkit.plugins.storage.base import DEFAULT_TIMEOUT_SECONDS, NetworkStorageBase, status_error


class IpfsStorage(NetworkStorageBase):
    """Storage backend for ipfs:// URIs."""

    name = "ipfs"

    def __init__(
        self,
        settings: IpfsSettings | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Clock = DEFAULT_CLOCK,
    ) -> None:
        """Initialize IPFS storage.

        Args:
            settings: IPFS configuration. Defaults give a download-only
                backend using the public ipfs.io gateway.
            timeout: Request timeout in seconds
            clock: Clock used to name Pinata pins
        """
        super().__init__(timeout=timeout)
        self._settings = settings if settings is not None else IpfsSettings()
        self._clock = clock

    @property
    def settings(self) -> IpfsSettings:
        return self._settings

    @property
    def gateway(self) -> str:
        return self._settings.gateway

    @property
    def _has_pinata(self) -> bool:
        return bool(self._settings.pinata_api_key and self._settings.pinata_api_secret)

    def is_configured(self) -> bool:
        """Upload needs Pinata credentials or a local node URL."""
        return self._has_pinata or bool(self._settings.api_url)

    def can_handle(self, uri: str) -> bool:
        return uri.startswith(IPFS_PREFIX)

    async def upload(self, content: bytes | str) -> UploadResult:
        """Pin content and return ipfs://<cid>.

        Raises:
            ConfigurationError: If neither Pinata nor a local node is configured
            UnsupportedOperationError: If Pinata is selected and content is not UTF-8
            NetworkError: On a non-success response
        """
        data = to_bytes(content)

        if self._has_pinata:
            cid = await self._upload_to_pinata(data)
        elif self._settings.api_url:
            cid = await self._upload_to_local_node(data)
        else:
            raise ConfigurationError("IPFS upload requires either pinning credentials or local node URL")

        return UploadResult(uri=f"{IPFS_PREFIX}{cid}", content_id=cid)

    async def download(self, uri: str) -> bytes:
        """Fetch <gateway><cid>.

        Raises:
            UnsupportedLocatorError: If uri is not ipfs://
            NetworkError: "IPFS fetch failed: <status> <reason>" on non-2xx
        """
        self._require_handled(uri)
        cid = extract_ipfs_cid(uri)
        response = await self._request(
            "GET",
            f"{self._settings.gateway}{cid}",
            operation=StorageOperation.DOWNLOAD,
        )
        if not response.is_success:
            raise status_error("IPFS fetch failed", response)
        return response.content

    async def _upload_to_pinata(self, data: bytes) -> str:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnsupportedOperationError("Pinata JSON pinning requires UTF-8 content; configure a local IPFS node for binary payloads") from e

        # JSON documents are pinned as-is; anything else is pinned as a JSON string
        pinata_content: Any
        try:
            pinata_content = json.loads(text)
        except json.JSONDecodeError:
            pinata_content = text

        pinned_at_ms = int(self._clock.now().timestamp() * 1000)
        assert self._settings.pinata_api_key is not None  # Checked by _has_pinata
        assert self._settings.pinata_api_secret is not None  # Checked by _has_pinata
        response = await self._request(
            "POST",
            self._settings.pinata_endpoint,
            operation=StorageOperation.UPLOAD,
            headers={
                "Content-Type": "application/json",
                "pinata_api_key": self._settings.pinata_api_key,
                "pinata_secret_api_key": self._settings.pinata_api_secret,
            },
            content=json.dumps(
                {
                    "pinataContent": pinata_content,
                    "pinataMetadata": {"name": f"payload-{pinned_at_ms}"},
                }
            ),
        )
        if not response.is_success:
            raise status_error("Pinata upload failed", response, use_body=True)
        return _read_cid(response, "IpfsHash", "Pinata upload failed")

    async def _upload_to_local_node(self, data: bytes) -> str:
        response = await self._request(
            "POST",
            f"{self._settings.api_url}/api/v0/add",
            operation=StorageOperation.UPLOAD,
            files={"file": ("payload.json", data, "application/json")},
        )
        if not response.is_success:
            raise status_error("Local IPFS upload failed", response)
        return _read_cid(response, "Hash", "Local IPFS upload failed")


def _read_cid(response: httpx.Response, field: str, prefix: str) -> str:
    """Extract the CID field from a pinning response body."""
    try:
        body = response.json()
    except ValueError as e:
        raise NetworkError(f"{prefix}: response is not JSON", status_code=response.status_code) from e

    cid = body.get(field) if isinstance(body, dict) else None
    if not isinstance(cid, str) or not cid:
        raise NetworkError(f"{prefix}: response missing {field}", status_code=response.status_code)
    return cid
