# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from datetime import UTC, datetime

import pytest
from hypothesis import Phase, Verbosity, settings

from payloadkit.core.clock import MockClock
from payloadkit.core.config import IpfsSettings, S3Settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Shared Fixtures
# =============================================================================

FIXED_TIME = datetime(2024, 1, 15, 12, 30, 45, tzinfo=UTC)


@pytest.fixture
def mock_clock() -> MockClock:
    """Clock pinned to FIXED_TIME so signatures and pin names are reproducible."""
    return MockClock(FIXED_TIME)


@pytest.fixture
def s3_settings() -> S3Settings:
    """Minimal fully-configured object storage settings."""
    return S3Settings(
        endpoint="https://s3.example.com",
        bucket="test-bucket",
        access_key_id="test-key",
        secret_access_key="test-secret",
        public_url_base="https://cdn.example.com",
    )


@pytest.fixture
def pinata_settings() -> IpfsSettings:
    return IpfsSettings(
        gateway="https://gateway.pinata.cloud/ipfs/",
        pinata_api_key="test-api-key",
        pinata_api_secret="test-api-secret",
    )


@pytest.fixture
def local_node_settings() -> IpfsSettings:
    return IpfsSettings(api_url="http://localhost:5001")
