# src/payloadkit/engine/resolver.py
"""PayloadResolver: encode content into Payloads and resolve them back.

The resolver owns an ORDERED list of storage backends. That order is the
deployment's policy:
- encode() uploads through the first *configured* backend that supports
  upload (read-only HttpStorage is skipped)
- resolve() downloads through the first backend whose can_handle() claims
  the URI

HttpStorage claims every http(s) URL, so it must come last or it would
shadow object-storage URLs. from_settings() builds a list that respects
this.

Integrity:
    resolve() always re-hashes the fetched bytes. A mismatch does NOT
    raise; it is reported as ResolveResult.verified=False and logged, and
    the caller decides whether unverified content is usable.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from payloadkit.contracts import (
    ConfigurationError,
    InlineContentRequiredError,
    Payload,
    ResolveResult,
    StorageBackend,
    StorageOperation,
    UnsupportedLocatorError,
)
from payloadkit.core.clock import DEFAULT_CLOCK, Clock
from payloadkit.core.codec import encode_data_uri
from payloadkit.core.config import DEFAULT_UPLOAD_THRESHOLD, PayloadSettings
from payloadkit.core.hashing import compute_content_hash, is_zero_hash, to_bytes, verify_content_hash
from payloadkit.core.payloads import detect_payload_type
from payloadkit.core.spans import SpanFactory
from payloadkit.plugins.storage import DataUriStorage, HttpStorage, IpfsStorage, S3Storage

if TYPE_CHECKING:
    from opentelemetry.trace import Tracer

logger = structlog.get_logger(__name__)

# Download-capable backends in the order they follow the upload priority
_DOWNLOAD_ORDER = ("data", "ipfs", "s3")


class PayloadResolver:
    """Encodes and resolves Payloads over an ordered set of backends.

    Example:
        resolver = PayloadResolver([S3Storage(s3_settings), DataUriStorage(), HttpStorage()])
        payload = await resolver.encode(large_json)
        result = await resolver.resolve(payload)
        assert result.verified
    """

    def __init__(
        self,
        backends: Sequence[StorageBackend],
        *,
        upload_threshold: int = DEFAULT_UPLOAD_THRESHOLD,
        spans: SpanFactory | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            backends: Backends in priority order
            upload_threshold: Content strictly larger than this many bytes
                is uploaded; smaller content is embedded as a data URI
            spans: Span factory for tracing (default: no-op)
        """
        if upload_threshold < 0:
            raise ValueError(f"upload_threshold must be non-negative, got {upload_threshold}")
        self._backends: tuple[StorageBackend, ...] = tuple(backends)
        self._upload_threshold = upload_threshold
        self._spans = spans if spans is not None else SpanFactory()

    @classmethod
    def from_settings(
        cls,
        settings: PayloadSettings,
        *,
        tracer: Tracer | None = None,
        clock: Clock = DEFAULT_CLOCK,
    ) -> PayloadResolver:
        """Build a resolver from validated settings.

        Order: storage_priority, then the remaining download-capable
        backends, then HttpStorage. An "s3" entry without an s3 section is
        skipped, so encode(backend="s3") reports it as not configured.
        """
        timeout = settings.timeout_seconds
        available: dict[str, StorageBackend] = {
            "data": DataUriStorage(),
            "ipfs": IpfsStorage(settings.ipfs, timeout=timeout, clock=clock),
        }
        if settings.s3 is not None:
            available["s3"] = S3Storage(settings.s3, timeout=timeout, clock=clock)

        ordered: list[StorageBackend] = []
        for name in (*settings.storage_priority, *_DOWNLOAD_ORDER):
            backend = available.pop(name, None)
            if backend is not None:
                ordered.append(backend)
        ordered.append(HttpStorage(timeout=timeout))

        return cls(
            ordered,
            upload_threshold=settings.upload_threshold,
            spans=SpanFactory(tracer),
        )

    @property
    def upload_threshold(self) -> int:
        return self._upload_threshold

    @property
    def backends(self) -> tuple[StorageBackend, ...]:
        return self._backends

    def should_upload(self, content: bytes | str) -> bool:
        """Whether content exceeds the inline threshold (strictly greater)."""
        return len(to_bytes(content)) > self._upload_threshold

    def get_storage_for_uri(self, uri: str) -> StorageBackend | None:
        """First backend claiming uri, or None."""
        for backend in self._backends:
            if backend.can_handle(uri):
                return backend
        return None

    async def encode(
        self,
        content: bytes | str,
        *,
        force_upload: bool = False,
        backend: str | None = None,
    ) -> Payload:
        """Encode content into a Payload.

        Small content becomes a data URI; anything over the threshold (or
        everything, with force_upload) goes through a storage backend.

        Args:
            content: Raw content (str is UTF-8 encoded)
            force_upload: Upload regardless of size
            backend: Name of the backend to upload through, overriding
                priority order

        Raises:
            ConfigurationError: Named backend missing/unconfigured, or no
                backend configured at all
            NetworkError: Propagated from the uploading backend
        """
        data = to_bytes(content)
        content_hash = compute_content_hash(data)

        with self._spans.encode_span(len(data)) as span:
            if not force_upload and not self.should_upload(data):
                span.set_attribute("payload.type", "data_uri")
                return Payload(content_hash=content_hash, uri=encode_data_uri(data))

            storage = self._select_upload_backend(backend)
            with self._spans.storage_span(storage.name, StorageOperation.UPLOAD):
                result = await storage.upload(data)

            logger.debug(
                "payload_uploaded",
                backend=storage.name,
                content_id=result.content_id,
                size_bytes=len(data),
            )
            return Payload(content_hash=content_hash, uri=result.uri)

    async def resolve(
        self,
        payload: Payload,
        raw_content_fallback: bytes | str | None = None,
    ) -> ResolveResult:
        """Fetch and verify the content a Payload refers to.

        Args:
            payload: Payload to resolve
            raw_content_fallback: Out-of-band content. When given, no
                network fetch happens; this content is verified instead.
                Required for inline payloads.

        Raises:
            InlineContentRequiredError: Inline payload without fallback
            UnsupportedLocatorError: No backend handles the URI
            NetworkError: Propagated from the downloading backend
        """
        payload_type = detect_payload_type(payload)

        with self._spans.resolve_span(payload_type) as span:
            if raw_content_fallback is not None:
                content = to_bytes(raw_content_fallback)
            elif payload.is_inline:
                raise InlineContentRequiredError("Inline data required for inline payload")
            else:
                storage = self.get_storage_for_uri(payload.uri)
                if storage is None:
                    raise UnsupportedLocatorError(f"Unsupported URI: {payload.uri[:100]}")
                with self._spans.storage_span(storage.name, StorageOperation.DOWNLOAD):
                    content = await storage.download(payload.uri)

            verified = not is_zero_hash(payload.content_hash) and verify_content_hash(content, payload.content_hash)
            span.set_attribute("payload.verified", verified)

            if not verified:
                logger.warning(
                    "payload_verification_failed",
                    payload_type=payload_type.value,
                    expected_hash=payload.content_hash,
                    actual_hash=compute_content_hash(content),
                    uri=payload.uri[:100],
                )

            return ResolveResult(content=content, verified=verified, type=payload_type)

    def _select_upload_backend(self, name: str | None) -> StorageBackend:
        if name is not None:
            for storage in self._backends:
                if storage.name == name and storage.is_configured():
                    return storage
            raise ConfigurationError(f"{name} storage not configured")

        for storage in self._backends:
            if storage.supports_upload and storage.is_configured():
                return storage
        raise ConfigurationError("No storage backend configured for upload")
