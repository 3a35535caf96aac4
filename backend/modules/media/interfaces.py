"""
Media module interface.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from .models import MultipleUploadResult, PartialContent, UploadResult


@runtime_checkable
class IMediaService(Protocol):
    """Access to private media in object storage."""

    async def sign_document(self, key: Optional[str]) -> Optional[str]:
        """
        Return a time-limited URL for a document or image.

        External URLs come back unchanged.

        Raises:
            MissingKeyError: If no key is given
        """
        ...

    async def open_stream(
        self,
        key: Optional[str],
        token: Optional[str],
        range_header: Optional[str],
    ) -> PartialContent:
        """
        Authorize a byte-range request and open the matching slice.

        Raises:
            StreamAccessDeniedError: Missing or invalid token (checked first)
            MissingKeyError / MissingRangeError / InvalidRangeError: Bad request
            ObjectNotFoundError: Key not in storage
            StorageError: Any other storage failure
        """
        ...

    async def upload(
        self,
        filename: str,
        content_type: Optional[str],
        data: bytes,
        folder: Optional[str] = None,
    ) -> UploadResult:
        """Store one file and return its key."""
        ...

    async def upload_many(
        self,
        files: Sequence[tuple[str, Optional[str], bytes]],
        folder: Optional[str] = None,
    ) -> MultipleUploadResult:
        """Store several files and return their keys."""
        ...

    async def delete_reference(self, ref: Optional[str]) -> bool:
        """Delete the object behind a private key. External URLs are skipped."""
        ...
