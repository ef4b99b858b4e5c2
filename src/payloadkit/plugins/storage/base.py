"""Base class for storage backends that talk HTTP.

Wraps httpx.AsyncClient so every backend call gets:
- A per-request timeout, surfaced as PayloadTimeoutError
- Transport failures surfaced as NetworkError (status_code=None)
- Latency measurement and a structured log line per call

A fresh AsyncClient is opened per request, so backends own no connection
pool and need no explicit close(). Cancellation is native asyncio
cancellation: cancelling the awaiting task aborts the request.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from payloadkit.contracts import (
    NetworkError,
    PayloadTimeoutError,
    StorageOperation,
    UnsupportedLocatorError,
    UploadResult,
)

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class NetworkStorageBase(ABC):
    """Shared HTTP plumbing for network-backed storage backends.

    Subclasses set ``name`` and implement the StorageBackend protocol on
    top of ``_request``. Read-only backends also set supports_upload = False.
    """

    name: str = "network"
    supports_upload: bool = True

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        """Initialize with a per-request timeout.

        Args:
            timeout: Request timeout in seconds (default: 30.0)
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def _require_handled(self, uri: str) -> None:
        """Raise UnsupportedLocatorError unless this backend claims uri."""
        if not self.can_handle(uri):
            raise UnsupportedLocatorError(f"{type(self).__name__} cannot handle URI: {uri[:100]}")

    @abstractmethod
    def is_configured(self) -> bool:
        """True if the settings needed for upload are present."""

    @abstractmethod
    def can_handle(self, uri: str) -> bool:
        """True if download(uri) is supported. Pure predicate, no I/O."""

    @abstractmethod
    async def upload(self, content: bytes | str) -> UploadResult:
        """Store content and return its locator."""

    @abstractmethod
    async def download(self, uri: str) -> bytes:
        """Fetch content by locator."""

    async def _request(
        self,
        method: str,
        url: str,
        *,
        operation: StorageOperation,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one HTTP request and return the response, whatever its status.

        Status checking is left to the caller so each backend can word its
        own failure message.

        Raises:
            PayloadTimeoutError: If the request timed out
            NetworkError: On connection-level failure
        """
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            latency_ms = (time.perf_counter() - start) * 1000
            logger.warning(
                "storage_call_timed_out",
                backend=self.name,
                operation=operation.value,
                timeout_seconds=self._timeout,
                latency_ms=round(latency_ms, 2),
            )
            raise PayloadTimeoutError(
                f"{self.name} {operation.value} timed out after {self._timeout}s",
            ) from e
        except httpx.TransportError as e:
            logger.warning(
                "storage_call_failed",
                backend=self.name,
                operation=operation.value,
                error_type=type(e).__name__,
            )
            raise NetworkError(f"{self.name} {operation.value} failed: {type(e).__name__}: {e}") from e

        latency_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "storage_call_completed",
            backend=self.name,
            operation=operation.value,
            status_code=response.status_code,
            latency_ms=round(latency_ms, 2),
        )
        return response


def status_error(prefix: str, response: httpx.Response, *, use_body: bool = False) -> NetworkError:
    """Build a NetworkError for a non-success response.

    Message format: "<prefix>: <status> <reason>", where reason is the
    response body (use_body=True) or the HTTP status text.
    """
    reason = response.text if use_body else response.reason_phrase
    return NetworkError(
        f"{prefix}: {response.status_code} {reason}",
        status_code=response.status_code,
        reason=reason,
    )
