# src/payloadkit/core/config.py
"""
Configuration schema and loading for payload storage.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction, so backends built from
them hold no mutable state and can be shared across concurrent calls.

Defaults that the backends rely on (IPFS gateway, Pinata endpoint, S3
region) live here as named fields and are passed explicitly into each
backend's constructor. Nothing is read from mutable module globals at
request time.
"""

import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_UPLOAD_THRESHOLD = 1024  # bytes
DEFAULT_IPFS_GATEWAY = "https://ipfs.io/ipfs/"
DEFAULT_PINATA_ENDPOINT = "https://api.pinata.cloud/pinning/pinJSONToIPFS"
DEFAULT_S3_REGION = "auto"

StorageName = Literal["data", "ipfs", "s3"]


def _scalar_to_str(value: Any) -> Any:
    """Undo Dynaconf's TOML typing of env values destined for str fields.

    PAYLOADKIT_S3__ACCESS_KEY_ID=12345 arrives as int 12345 and =true as
    bool True. Booleans go back to their TOML spelling. Prefix a value with
    "@str " in the environment when the exact text must survive (e.g. 1e5).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


class IpfsSettings(BaseModel):
    """IPFS backend configuration.

    Upload requires either Pinata credentials (both key and secret) or a
    local node API URL. Download only needs the gateway, which always has
    a default.

    Example YAML:
        ipfs:
          gateway: "https://gateway.pinata.cloud/ipfs/"
          pinata_api_key: "${PINATA_API_KEY}"
          pinata_api_secret: "${PINATA_API_SECRET}"
    """

    model_config = {"frozen": True, "extra": "forbid"}

    gateway: str = Field(
        default=DEFAULT_IPFS_GATEWAY,
        description="Gateway URL prefix for downloads (CID is appended)",
    )
    pinata_api_key: str | None = Field(default=None, repr=False, description="Pinata API key")
    pinata_api_secret: str | None = Field(default=None, repr=False, description="Pinata API secret")
    api_url: str | None = Field(
        default=None,
        description="Local IPFS node API URL (e.g. http://localhost:5001)",
    )
    pinata_endpoint: str = Field(
        default=DEFAULT_PINATA_ENDPOINT,
        description="Pinata pin-JSON endpoint",
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_scalars(cls, v: Any) -> Any:
        return _scalar_to_str(v)

    @field_validator("gateway")
    @classmethod
    def validate_gateway(cls, v: str) -> str:
        """Gateway must be an HTTP(S) URL prefix."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"gateway must be an http(s) URL, got {v!r}")
        return v

    @field_validator("api_url")
    @classmethod
    def strip_api_url(cls, v: str | None) -> str | None:
        """Drop trailing slashes so endpoint joins are predictable."""
        if v is None:
            return v
        return v.rstrip("/")


class S3Settings(BaseModel):
    """S3-compatible object storage configuration (AWS S3, Cloudflare R2, MinIO).

    endpoint, bucket, access_key_id and secret_access_key are all required
    for upload. Empty strings are accepted here and reported by
    S3Storage.is_configured() rather than rejected, so a partially filled
    deployment config still loads.

    Example YAML:
        s3:
          endpoint: "https://<account>.r2.cloudflarestorage.com"
          bucket: "payloads"
          access_key_id: "${S3_ACCESS_KEY_ID}"
          secret_access_key: "${S3_SECRET_ACCESS_KEY}"
          public_url_base: "https://cdn.example.com"
          key_prefix: "outputs"
    """

    model_config = {"frozen": True, "extra": "forbid"}

    endpoint: str = Field(default="", description="S3-compatible endpoint URL")
    bucket: str = Field(default="", description="Bucket name")
    access_key_id: str = Field(default="", repr=False, description="Access key ID")
    secret_access_key: str = Field(default="", repr=False, description="Secret access key")
    region: str = Field(default=DEFAULT_S3_REGION, description="Signing region")
    key_prefix: str | None = Field(default=None, description="Optional object key prefix")
    public_url_base: str | None = Field(
        default=None,
        description="Public URL base for read access (e.g. a CDN)",
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_scalars(cls, v: Any) -> Any:
        return _scalar_to_str(v)

    @field_validator("endpoint", "public_url_base")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.rstrip("/")

    @field_validator("key_prefix")
    @classmethod
    def strip_prefix_slashes(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip("/") or None


class PayloadSettings(BaseModel):
    """Top-level payload storage configuration.

    storage_priority is the deployment's upload policy: content above the
    threshold goes to the first *configured* backend in this order. It is
    never hard-coded in the resolver.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    upload_threshold: int = Field(
        default=DEFAULT_UPLOAD_THRESHOLD,
        ge=0,
        description="Content larger than this many bytes is stored externally",
    )
    storage_priority: list[StorageName] = Field(
        default_factory=lambda: ["data"],
        min_length=1,
        description="Ordered upload backends",
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request network timeout")
    ipfs: IpfsSettings = Field(default_factory=IpfsSettings, description="IPFS configuration")
    s3: S3Settings | None = Field(default=None, description="Object storage configuration")

    @field_validator("storage_priority")
    @classmethod
    def validate_unique_priority(cls, v: list[StorageName]) -> list[StorageName]:
        """Each backend may appear at most once."""
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate storage backend(s) in storage_priority: {duplicates}")
        return v


# ${VAR} or ${VAR:-fallback}; unresolved references are left in place so
# validation reports them against the field that needed them
_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Z_][A-Z0-9_]*)(?::-(?P<fallback>[^}]*))?\}")

# Keys Dynaconf adds to as_dict() that are not payload settings
_DYNACONF_INTERNAL_KEYS = frozenset({"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"})


def _substitute_env(text: str) -> str:
    def lookup(match: re.Match[str]) -> str:
        value = os.environ.get(match["name"])
        if value is not None:
            return value
        if match["fallback"] is not None:
            return match["fallback"]
        return match.group(0)

    return _ENV_REFERENCE.sub(lookup, text)


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Expand ${VAR} / ${VAR:-fallback} in every string value, at any depth.

    Credentials are normally supplied this way:
        s3:
          secret_access_key: ${S3_SECRET_ACCESS_KEY}
    """
    return {key: _walk(value, _substitute_env) for key, value in config.items()}


def _lower_keys(value: Any) -> Any:
    """Lowercase dict keys recursively (Dynaconf uppercases env-sourced keys)."""
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lower_keys(item) for item in value]
    return value


def _walk(value: Any, on_string: Callable[[str], str]) -> Any:
    if isinstance(value, str):
        return on_string(value)
    if isinstance(value, dict):
        return {k: _walk(v, on_string) for k, v in value.items()}
    if isinstance(value, list):
        return [_walk(item, on_string) for item in value]
    return value


def load_settings(config_path: Path) -> PayloadSettings:
    """Load PayloadSettings from a YAML file plus PAYLOADKIT_* overrides.

    Precedence, highest first:
    1. Environment (PAYLOADKIT_UPLOAD_THRESHOLD, PAYLOADKIT_S3__BUCKET, ...)
    2. The YAML file
    3. Field defaults

    Args:
        config_path: YAML file to read

    Raises:
        FileNotFoundError: If config_path does not exist
        ValidationError: If the merged values fail validation
    """
    from dynaconf import Dynaconf

    # Dynaconf treats a missing settings file as empty
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    loaded = Dynaconf(
        envvar_prefix="PAYLOADKIT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    raw = {key: value for key, value in loaded.as_dict().items() if key not in _DYNACONF_INTERNAL_KEYS}
    return PayloadSettings(**_expand_env_vars(_lower_keys(raw)))
