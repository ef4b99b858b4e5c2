"""
payloadkit: Content-addressed payload storage with integrity verification.

Encodes content into Payloads (content hash + locator), stores it inline,
as a data URI, on IPFS or in S3-compatible object storage, and resolves
Payloads back to hash-verified bytes.
"""

__version__ = "0.1.0"
