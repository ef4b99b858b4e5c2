"""Tests for configuration schema and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from payloadkit.core.config import (
    DEFAULT_IPFS_GATEWAY,
    DEFAULT_PINATA_ENDPOINT,
    IpfsSettings,
    PayloadSettings,
    S3Settings,
    _expand_env_vars,
    load_settings,
)


class TestIpfsSettings:
    def test_defaults(self) -> None:
        settings = IpfsSettings()
        assert settings.gateway == DEFAULT_IPFS_GATEWAY
        assert settings.pinata_endpoint == DEFAULT_PINATA_ENDPOINT
        assert settings.pinata_api_key is None
        assert settings.api_url is None

    def test_gateway_must_be_http(self) -> None:
        with pytest.raises(ValidationError, match="gateway must be an http"):
            IpfsSettings(gateway="ipfs.io/ipfs/")

    def test_api_url_trailing_slash_stripped(self) -> None:
        assert IpfsSettings(api_url="http://localhost:5001/").api_url == "http://localhost:5001"

    def test_secrets_not_in_repr(self) -> None:
        settings = IpfsSettings(pinata_api_key="key-123", pinata_api_secret="secret-456")
        assert "key-123" not in repr(settings)
        assert "secret-456" not in repr(settings)

    def test_frozen(self) -> None:
        settings = IpfsSettings()
        with pytest.raises(ValidationError):
            settings.gateway = "https://other/"  # type: ignore[misc]

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IpfsSettings(gatway="https://typo/")  # type: ignore[call-arg]


class TestS3Settings:
    def test_defaults(self) -> None:
        settings = S3Settings()
        assert settings.region == "auto"
        assert settings.key_prefix is None
        assert settings.public_url_base is None

    def test_trailing_slashes_stripped(self) -> None:
        settings = S3Settings(endpoint="https://s3.example.com/", public_url_base="https://cdn.example.com/")
        assert settings.endpoint == "https://s3.example.com"
        assert settings.public_url_base == "https://cdn.example.com"

    def test_key_prefix_normalized(self) -> None:
        assert S3Settings(key_prefix="/noosphere/outputs/").key_prefix == "noosphere/outputs"
        assert S3Settings(key_prefix="/").key_prefix is None

    def test_scalar_values_coerced_to_str(self) -> None:
        settings = S3Settings(access_key_id=12345, secret_access_key=True, bucket=1.5)  # type: ignore[arg-type]
        assert settings.access_key_id == "12345"
        assert settings.secret_access_key == "true"
        assert settings.bucket == "1.5"

    def test_credentials_not_in_repr(self) -> None:
        settings = S3Settings(access_key_id="AKIA-visible-not", secret_access_key="very-secret")
        assert "AKIA-visible-not" not in repr(settings)
        assert "very-secret" not in repr(settings)


class TestPayloadSettings:
    def test_defaults(self) -> None:
        settings = PayloadSettings()
        assert settings.upload_threshold == 1024
        assert settings.storage_priority == ["data"]
        assert settings.timeout_seconds == 30.0
        assert settings.s3 is None

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PayloadSettings(upload_threshold=-1)

    def test_zero_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PayloadSettings(timeout_seconds=0)

    def test_empty_priority_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PayloadSettings(storage_priority=[])

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PayloadSettings(storage_priority=["arweave"])  # type: ignore[list-item]

    def test_duplicate_priority_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate storage backend"):
            PayloadSettings(storage_priority=["s3", "data", "s3"])


class TestExpandEnvVars:
    def test_expands_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_BUCKET", "my-bucket")
        expanded = _expand_env_vars({"s3": {"bucket": "${TEST_BUCKET}"}, "list": ["${TEST_BUCKET}"]})
        assert expanded == {"s3": {"bucket": "my-bucket"}, "list": ["my-bucket"]}

    def test_default_used_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("UNSET_REGION", raising=False)
        assert _expand_env_vars({"region": "${UNSET_REGION:-us-east-1}"}) == {"region": "us-east-1"}

    def test_unset_without_default_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("UNSET_VAR", raising=False)
        assert _expand_env_vars({"key": "${UNSET_VAR}"}) == {"key": "${UNSET_VAR}"}

    def test_non_strings_untouched(self) -> None:
        assert _expand_env_vars({"n": 5, "flag": True}) == {"n": 5, "flag": True}


class TestLoadSettings:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_loads_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_S3_SECRET", "from-env")
        config_file = tmp_path / "payloads.yaml"
        config_file.write_text(
            """
upload_threshold: 2048
storage_priority: [s3, data]
s3:
  endpoint: https://s3.example.com/
  bucket: outputs
  access_key_id: key
  secret_access_key: ${TEST_S3_SECRET}
  key_prefix: runs
ipfs:
  gateway: https://gateway.pinata.cloud/ipfs/
"""
        )

        settings = load_settings(config_file)

        assert settings.upload_threshold == 2048
        assert settings.storage_priority == ["s3", "data"]
        assert settings.s3 is not None
        assert settings.s3.endpoint == "https://s3.example.com"
        assert settings.s3.secret_access_key == "from-env"
        assert settings.s3.key_prefix == "runs"
        assert settings.ipfs.gateway == "https://gateway.pinata.cloud/ipfs/"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "payloads.yaml"
        config_file.write_text("upload_threshold: 2048\n")
        monkeypatch.setenv("PAYLOADKIT_UPLOAD_THRESHOLD", "4096")

        settings = load_settings(config_file)

        assert settings.upload_threshold == 4096

    def test_nested_env_override_keeps_yaml_siblings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "payloads.yaml"
        config_file.write_text(
            """
s3:
  endpoint: https://s3.example.com
  bucket: yaml-bucket
  access_key_id: yaml-key
  secret_access_key: yaml-secret
"""
        )
        monkeypatch.setenv("PAYLOADKIT_S3__BUCKET", "env-bucket")

        settings = load_settings(config_file)

        assert settings.s3 is not None
        assert settings.s3.bucket == "env-bucket"
        assert settings.s3.endpoint == "https://s3.example.com"
        assert settings.s3.access_key_id == "yaml-key"
        assert settings.s3.secret_access_key == "yaml-secret"

    def test_numeric_env_credentials_stay_strings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "payloads.yaml"
        config_file.write_text(
            """
s3:
  endpoint: https://s3.example.com
  bucket: outputs
  access_key_id: placeholder
  secret_access_key: placeholder
"""
        )
        monkeypatch.setenv("PAYLOADKIT_S3__ACCESS_KEY_ID", "12345")
        monkeypatch.setenv("PAYLOADKIT_S3__SECRET_ACCESS_KEY", "true")
        monkeypatch.setenv("PAYLOADKIT_IPFS__PINATA_API_KEY", "98765")

        settings = load_settings(config_file)

        assert settings.s3 is not None
        assert settings.s3.access_key_id == "12345"
        assert settings.s3.secret_access_key == "true"
        assert settings.ipfs.pinata_api_key == "98765"

    def test_invalid_value_raises_validation_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "payloads.yaml"
        config_file.write_text("upload_threshold: -5\n")

        with pytest.raises(ValidationError):
            load_settings(config_file)
