"""Tests for keccak-256 content hashing."""

import hashlib

import pytest

from payloadkit.core.hashing import (
    ZERO_HASH,
    compute_content_hash,
    is_content_hash,
    is_zero_hash,
    to_bytes,
    verify_content_hash,
)

# keccak-256 of the empty byte string (well-known Ethereum constant)
EMPTY_KECCAK = "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


class TestComputeContentHash:
    def test_empty_content_known_vector(self) -> None:
        assert compute_content_hash(b"") == EMPTY_KECCAK
        assert compute_content_hash("") == EMPTY_KECCAK

    def test_is_not_sha3_256(self) -> None:
        """keccak-256 and NIST SHA3-256 differ in padding."""
        assert compute_content_hash(b"")[2:] != hashlib.sha3_256(b"").hexdigest()

    def test_format(self) -> None:
        digest = compute_content_hash(b"hello world")
        assert digest.startswith("0x")
        assert len(digest) == 66
        assert digest == digest.lower()
        assert is_content_hash(digest)

    def test_string_hashed_as_utf8(self) -> None:
        text = "Hello, 世界! 🎉"
        assert compute_content_hash(text) == compute_content_hash(text.encode("utf-8"))

    def test_deterministic(self) -> None:
        content = b'{"result": "test output"}'
        assert compute_content_hash(content) == compute_content_hash(content)

    def test_different_content_different_hash(self) -> None:
        assert compute_content_hash(b"a") != compute_content_hash(b"b")

    def test_accepts_bytearray(self) -> None:
        assert compute_content_hash(bytearray(b"abc")) == compute_content_hash(b"abc")


class TestToBytes:
    def test_str_encoded_utf8(self) -> None:
        assert to_bytes("é") == b"\xc3\xa9"

    def test_bytes_unchanged(self) -> None:
        assert to_bytes(b"\x00\xff") == b"\x00\xff"


class TestIsContentHash:
    @pytest.mark.parametrize(
        "value",
        [
            EMPTY_KECCAK,
            EMPTY_KECCAK.upper().replace("0X", "0x"),
            ZERO_HASH,
        ],
    )
    def test_valid(self, value: str) -> None:
        assert is_content_hash(value)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "0x",
            EMPTY_KECCAK[2:],
            EMPTY_KECCAK + "00",
            EMPTY_KECCAK[:-1],
            "0x" + "g" * 64,
            "0X" + "a" * 64,
        ],
    )
    def test_invalid(self, value: str) -> None:
        assert not is_content_hash(value)


class TestIsZeroHash:
    def test_zero(self) -> None:
        assert is_zero_hash(ZERO_HASH)

    def test_uppercase_zero(self) -> None:
        assert is_zero_hash("0X" + "0" * 64)

    def test_real_hash(self) -> None:
        assert not is_zero_hash(EMPTY_KECCAK)


class TestVerifyContentHash:
    def test_matching_hash(self) -> None:
        content = b"payload bytes"
        assert verify_content_hash(content, compute_content_hash(content))

    def test_case_insensitive(self) -> None:
        content = b"payload bytes"
        digest = compute_content_hash(content)
        assert verify_content_hash(content, "0x" + digest[2:].upper())

    def test_mismatch(self) -> None:
        assert not verify_content_hash(b"tampered", compute_content_hash(b"original"))

    def test_zero_hash_never_verifies(self) -> None:
        assert not verify_content_hash(b"", ZERO_HASH)
        assert not verify_content_hash(b"anything", ZERO_HASH)

    @pytest.mark.parametrize("bad_hash", ["", "0x", "not-a-hash", EMPTY_KECCAK[2:]])
    def test_malformed_hash_returns_false(self, bad_hash: str) -> None:
        """Malformed expected hashes are a verification failure, not an error."""
        assert not verify_content_hash(b"", bad_hash)
