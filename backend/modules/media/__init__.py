"""
Media module.

Private media delivery: presigned document URLs, the byte-range video
proxy, and uploads to object storage.

Public API:
- IMediaService / MediaService
- KeySigner, is_external_url
- ObjectStore
- parse_range_header
"""

from .interfaces import IMediaService
from .models import ByteRange, ObjectMetadata, PartialContent
from .ranges import parse_range_header
from .signer import KeySigner, is_external_url
from .exceptions import (
    InvalidRangeError,
    MissingKeyError,
    MissingRangeError,
    ObjectNotFoundError,
    SigningError,
    StorageError,
    StreamAccessDeniedError,
)

__all__ = [
    "IMediaService",
    "ByteRange",
    "ObjectMetadata",
    "PartialContent",
    "parse_range_header",
    "KeySigner",
    "is_external_url",
    "InvalidRangeError",
    "MissingKeyError",
    "MissingRangeError",
    "ObjectNotFoundError",
    "SigningError",
    "StorageError",
    "StreamAccessDeniedError",
]
