"""
Media delivery service.

Two paths out of private storage:
- documents and images get a presigned URL (``sign_document``)
- video is proxied one byte range at a time (``open_stream``)

Each stream request is authorized on its own. Nothing is cached or shared
between requests.
"""

import logging
import re
import time
from typing import Optional, Sequence

from shared.config import Settings, get_settings
from shared.exceptions import AuthenticationError
from modules.auth.interfaces import IAuthService

from .exceptions import (
    EmptyUploadError,
    MissingKeyError,
    MissingRangeError,
    StorageError,
    StreamAccessDeniedError,
    UploadTooLargeError,
)
from .interfaces import IMediaService
from .models import (
    MultipleUploadResult,
    PartialContent,
    UploadedItem,
    UploadResult,
)
from .ranges import parse_range_header
from .signer import KeySigner, is_external_url
from .storage import ObjectStore

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_FOLDER = "uploads"

_WHITESPACE = re.compile(r"\s+")


def make_object_key(folder: str, filename: str, now_ms: Optional[int] = None) -> str:
    """Build ``{folder}/{epoch_ms}-{filename}`` with whitespace runs replaced by '-'."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    safe_name = _WHITESPACE.sub("-", filename.strip()) or "file"
    folder = (folder or DEFAULT_UPLOAD_FOLDER).strip("/") or DEFAULT_UPLOAD_FOLDER
    return f"{folder}/{now_ms}-{safe_name}"


class MediaService(IMediaService):
    """Signs, streams, uploads and deletes stored media."""

    def __init__(
        self,
        store: ObjectStore,
        signer: KeySigner,
        auth: IAuthService,
        settings: Optional[Settings] = None,
    ):
        self._store = store
        self._signer = signer
        self._auth = auth
        self._settings = settings or get_settings()

    @property
    def signer(self) -> KeySigner:
        return self._signer

    async def sign_document(self, key: Optional[str]) -> Optional[str]:
        if not key:
            raise MissingKeyError()
        return await self._signer.sign(key, self._settings.document_url_ttl_seconds)

    async def open_stream(
        self,
        key: Optional[str],
        token: Optional[str],
        range_header: Optional[str],
    ) -> PartialContent:
        # Authorization comes first and says nothing about the object
        try:
            await self._auth.validate_token(token)
        except AuthenticationError:
            raise StreamAccessDeniedError()

        if not key:
            raise MissingKeyError()
        if not range_header:
            raise MissingRangeError()

        metadata = await self._store.head(key)
        byte_range = parse_range_header(range_header, metadata.size)
        body = await self._store.get_range(key, byte_range)

        return PartialContent(metadata=metadata, byte_range=byte_range, body=body)

    async def upload(
        self,
        filename: str,
        content_type: Optional[str],
        data: bytes,
        folder: Optional[str] = None,
    ) -> UploadResult:
        self._check_upload(filename, data)
        key = make_object_key(folder or DEFAULT_UPLOAD_FOLDER, filename)
        logger.info("Uploading %s (%d bytes) -> %s", filename, len(data), key)
        await self._store.put(key, data, content_type)
        return UploadResult(key=key)

    async def upload_many(
        self,
        files: Sequence[tuple[str, Optional[str], bytes]],
        folder: Optional[str] = None,
    ) -> MultipleUploadResult:
        if not files:
            raise EmptyUploadError("No files uploaded")
        for filename, _, data in files:
            self._check_upload(filename, data)

        items: list[UploadedItem] = []
        for filename, content_type, data in files:
            key = make_object_key(folder or DEFAULT_UPLOAD_FOLDER, filename)
            await self._store.put(key, data, content_type)
            items.append(
                UploadedItem(original_name=filename, key=key, type=content_type)
            )
        logger.info("Uploaded %d files to %s", len(items), folder or DEFAULT_UPLOAD_FOLDER)
        return MultipleUploadResult(uploaded_items=items)

    async def delete_reference(self, ref: Optional[str]) -> bool:
        """
        Delete a stored object if ``ref`` is a private key.

        External URLs are left alone. Storage failures are logged and
        reported as False so catalog cleanup can continue.
        """
        if not ref or is_external_url(ref):
            return False
        try:
            await self._store.delete(ref)
        except StorageError as e:
            logger.error("Failed to delete %s: %s", ref, e.message)
            return False
        return True

    def _check_upload(self, filename: str, data: bytes) -> None:
        if not filename or not data:
            raise EmptyUploadError()
        if len(data) > self._settings.upload_max_bytes:
            raise UploadTooLargeError(filename, self._settings.upload_max_bytes)
