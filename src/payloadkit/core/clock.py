# src/payloadkit/core/clock.py
"""Clock abstraction for testable request signing.

SigV4 signatures embed the request timestamp, so a signed request is only
reproducible if the time is. Production code uses SystemClock (the
default). Tests inject MockClock to pin the timestamp.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Abstract wall clock.

    Implementations:
    - SystemClock: Uses datetime.now(UTC) (production)
    - MockClock: Returns controllable times (testing)
    """

    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...


class SystemClock:
    """Production clock using the system wall clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class MockClock:
    """Controllable clock for deterministic testing.

    Example:
        clock = MockClock(datetime(2024, 1, 15, 12, 0, tzinfo=UTC))
        storage = S3Storage(settings, clock=clock)
        # Every signature now carries x-amz-date 20240115T120000Z
    """

    def __init__(self, start: datetime) -> None:
        """Initialize mock clock at a given time.

        Args:
            start: Initial time (must be timezone-aware).

        Raises:
            ValueError: If start is naive.
        """
        if start.tzinfo is None:
            raise ValueError("MockClock requires a timezone-aware datetime")
        self._current = start.astimezone(UTC)

    def now(self) -> datetime:
        return self._current

    def advance(self, seconds: float) -> None:
        """Advance mock time by specified seconds.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current += timedelta(seconds=seconds)


# Default clock for production use
DEFAULT_CLOCK: Clock = SystemClock()
