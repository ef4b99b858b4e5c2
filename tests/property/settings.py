"""Standardized Hypothesis settings profiles for property tests.

Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(content=binary_content)
    @STANDARD_SETTINGS
    def test_something(content):
        ...

Tiers:
- DETERMINISM_SETTINGS: 500 examples - content hash tests (integrity)
- STANDARD_SETTINGS: 100 examples - Regular property tests
- SLOW_SETTINGS: 50 examples - Async tests that go through backends
- QUICK_SETTINGS: 20 examples - Fast validation tests (simple rejection)
"""

from hypothesis import settings

# Content hashing MUST be deterministic; it is the verification contract
DETERMINISM_SETTINGS = settings(max_examples=500)

STANDARD_SETTINGS = settings(max_examples=100)

# Each example spins up an event loop / mocked transport
SLOW_SETTINGS = settings(max_examples=50)

QUICK_SETTINGS = settings(max_examples=20)
