"""Exception hierarchy for payload storage and resolution.

Every error raised by this package derives from PayloadError so callers
can catch the whole family in one place. Verification mismatch is NOT an
exception: it is reported via ResolveResult.verified = False, because the
caller decides whether unverified content is still usable.

Propagation policy:
    - Configuration and dispatch errors are raised before any network call.
    - Network errors surface as-is. There is no retry and no backend
      fallback; resilience belongs to the calling orchestrator.
"""


class PayloadError(Exception):
    """Base class for all payloadkit errors."""

    pass


class ConfigurationError(PayloadError):
    """Raised when a backend lacks required credentials or endpoints.

    Always raised before any network call is attempted.
    """

    pass


class UnsupportedLocatorError(PayloadError):
    """Raised when no backend claims a URI, or a codec gets the wrong scheme."""

    pass


class InlineContentRequiredError(UnsupportedLocatorError):
    """Raised when an inline payload is resolved without its raw content.

    Inline payloads carry only a hash; the bytes travel out-of-band and
    must be passed to resolve() as raw_content_fallback.
    """

    pass


class UnsupportedOperationError(PayloadError):
    """Raised when a backend structurally cannot perform an operation.

    Example: HttpStorage is read-only and never supports upload.
    """

    pass


class NetworkError(PayloadError):
    """Raised on a non-success HTTP response or a transport failure.

    Attributes:
        status_code: HTTP status, or None for transport-level failures
            (connection refused, DNS failure, timeout)
        reason: Status text or response body, when available
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class PayloadTimeoutError(NetworkError):
    """Raised when a backend request exceeds its configured timeout.

    Kept distinct from NetworkError so callers can tell "slow" from "broken"
    before deciding whether a retry is safe. None of the backends are
    idempotent-safe to retry without the caller's knowledge.
    """

    pass
