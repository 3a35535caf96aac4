"""
Media module data models.
"""

from dataclasses import dataclass
from typing import AsyncIterator, Optional
from pydantic import BaseModel, Field

from shared.models import CamelModel

DEFAULT_VIDEO_CONTENT_TYPE = "video/mp4"


class ByteRange(BaseModel):
    """An inclusive byte range ``[start, end]`` within an object."""

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def header_value(self) -> str:
        """Value for an outgoing storage ``Range`` header."""
        return f"bytes={self.start}-{self.end}"

    def content_range(self, file_size: int) -> str:
        """Value for the ``Content-Range`` response header."""
        return f"bytes {self.start}-{self.end}/{file_size}"


class ObjectMetadata(BaseModel):
    """Size and type of a stored object."""

    key: str
    size: int = Field(..., ge=0)
    content_type: Optional[str] = None


@dataclass
class PartialContent:
    """
    A ready-to-relay slice of an object.

    ``body`` yields the bytes of ``byte_range`` and closes the storage
    stream when exhausted or closed early.
    """

    metadata: ObjectMetadata
    byte_range: ByteRange
    body: AsyncIterator[bytes]

    @property
    def content_type(self) -> str:
        return self.metadata.content_type or DEFAULT_VIDEO_CONTENT_TYPE

    def headers(self) -> dict[str, str]:
        return {
            "Content-Range": self.byte_range.content_range(self.metadata.size),
            "Accept-Ranges": "bytes",
            "Content-Length": str(self.byte_range.length),
            "Content-Type": self.content_type,
        }


class SignedUrlResponse(BaseModel):
    """Response body for GET /media/sign."""

    url: Optional[str]


class UploadResult(BaseModel):
    """Response body for a single upload."""

    key: str


class UploadedItem(CamelModel):
    original_name: str
    key: str
    type: Optional[str] = None


class MultipleUploadResult(CamelModel):
    """Response body for a multi-file upload."""

    uploaded_items: list[UploadedItem]
