"""Storage backends for payloads.

Each backend implements payloadkit.contracts.StorageBackend:
- DataUriStorage: inline base64 data: URIs (always configured)
- HttpStorage: read-only http(s):// fetch
- IpfsStorage: Pinata or local-node pinning, gateway download
- S3Storage: SigV4-signed PUT, public GET
"""

from payloadkit.plugins.storage.base import NetworkStorageBase
from payloadkit.plugins.storage.data_uri import DataUriStorage
from payloadkit.plugins.storage.http import HttpStorage
from payloadkit.plugins.storage.ipfs import IpfsStorage
from payloadkit.plugins.storage.s3 import S3Storage

__all__ = [
    "DataUriStorage",
    "HttpStorage",
    "IpfsStorage",
    "NetworkStorageBase",
    "S3Storage",
]
