"""Tests for URI dispatch across the standard backend set.

Among data, ipfs and object storage at most one backend claims any URI.
HttpStorage claims every http(s) URL and overlaps with object storage, so it
is the catch-all placed last.
"""

import pytest

from payloadkit.core.config import S3Settings
from payloadkit.engine import PayloadResolver
from payloadkit.plugins.storage import DataUriStorage, HttpStorage, IpfsStorage, S3Storage

SAMPLE_URIS = [
    "data:application/json;base64,e30=",
    "ipfs://QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG",
    "https://s3.example.com/test-bucket/abc.json",
    "https://cdn.example.com/abc.json",
    "https://example.com/abc.json",
    "http://localhost:8080/abc.json",
    "ftp://example.com/abc.json",
    "",
]


@pytest.fixture
def resolver(s3_settings: S3Settings) -> PayloadResolver:
    return PayloadResolver([DataUriStorage(), IpfsStorage(), S3Storage(s3_settings), HttpStorage()])


class TestDispatchExclusivity:
    @pytest.mark.parametrize("uri", SAMPLE_URIS)
    def test_at_most_one_specific_backend(self, s3_settings: S3Settings, uri: str) -> None:
        specific = [DataUriStorage(), IpfsStorage(), S3Storage(s3_settings)]
        assert sum(backend.can_handle(uri) for backend in specific) <= 1

    @pytest.mark.parametrize(
        ("uri", "expected"),
        [
            ("data:application/json;base64,e30=", "data"),
            ("ipfs://QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG", "ipfs"),
            ("https://s3.example.com/test-bucket/abc.json", "s3"),
            ("https://cdn.example.com/abc.json", "s3"),
            ("https://example.com/abc.json", "http"),
            ("http://localhost:8080/abc.json", "http"),
        ],
    )
    def test_first_match(self, resolver: PayloadResolver, uri: str, expected: str) -> None:
        backend = resolver.get_storage_for_uri(uri)
        assert backend is not None
        assert backend.name == expected

    @pytest.mark.parametrize("uri", ["ftp://example.com/abc.json", "", "ar://tx"])
    def test_unclaimed(self, resolver: PayloadResolver, uri: str) -> None:
        assert resolver.get_storage_for_uri(uri) is None

    def test_http_first_would_shadow_object_storage(self, s3_settings: S3Settings) -> None:
        misordered = PayloadResolver([HttpStorage(), S3Storage(s3_settings)])
        backend = misordered.get_storage_for_uri("https://cdn.example.com/abc.json")
        assert backend is not None
        assert backend.name == "http"
