"""OpenTelemetry spans for payload operations.

Tracing is optional: with no tracer every span is a shared NoOpSpan, so
callers never branch on whether tracing is on.

Span Hierarchy:
    payload:encode
    └── storage:{backend}:upload
    payload:resolve
    └── storage:{backend}:download
"""

from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager
from typing import TYPE_CHECKING, Any

from payloadkit.contracts import PayloadType, StorageOperation

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer


class NoOpSpan:
    """Stand-in span that records nothing."""

    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def set_status(self, status: Any) -> None:
        pass

    def record_exception(self, exception: Exception) -> None:
        pass

    def is_recording(self) -> bool:
        return False


_NOOP_SPAN = NoOpSpan()


class SpanFactory:
    """Opens spans for encode, resolve and individual backend calls.

    Example:
        spans = SpanFactory(tracer=opentelemetry.trace.get_tracer("payloadkit"))

        with spans.resolve_span(PayloadType.IPFS):
            with spans.storage_span("ipfs", StorageOperation.DOWNLOAD):
                ...
    """

    def __init__(self, tracer: "Tracer | None" = None) -> None:
        self._tracer = tracer

    @property
    def enabled(self) -> bool:
        return self._tracer is not None

    @contextmanager
    def _span(self, name: str, attributes: Mapping[str, Any]) -> Iterator["Span | NoOpSpan"]:
        if self._tracer is None:
            yield _NOOP_SPAN
            return

        with self._tracer.start_as_current_span(name) as span:
            for key, value in attributes.items():
                span.set_attribute(key, value)
            yield span

    def encode_span(self, content_size: int) -> AbstractContextManager["Span | NoOpSpan"]:
        """Span around PayloadResolver.encode; records the content size in bytes."""
        return self._span("payload:encode", {"payload.size": content_size})

    def resolve_span(self, payload_type: PayloadType) -> AbstractContextManager["Span | NoOpSpan"]:
        """Span around PayloadResolver.resolve; records the payload type."""
        return self._span("payload:resolve", {"payload.type": payload_type.value})

    def storage_span(self, backend_name: str, operation: StorageOperation) -> AbstractContextManager["Span | NoOpSpan"]:
        """Span around one backend upload or download."""
        return self._span(
            f"storage:{backend_name}:{operation.value}",
            {"storage.backend": backend_name, "storage.operation": operation.value},
        )
