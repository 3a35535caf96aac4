"""
Tests for the media service: stream authorization order, signing and uploads.
"""

import pytest

from modules.media.exceptions import (
    EmptyUploadError,
    InvalidRangeError,
    MissingKeyError,
    MissingRangeError,
    ObjectNotFoundError,
    StorageError,
    StreamAccessDeniedError,
    UploadTooLargeError,
)
from modules.media.service import make_object_key

from tests.conftest import create_test_token

KEY = "videos/c1/lesson1.mp4"


class TestOpenStream:

    @pytest.mark.asyncio
    async def test_partial_content_headers(self, media_service, store):
        content = await media_service.open_stream(KEY, create_test_token(), "bytes=500000-")

        headers = content.headers()
        assert headers["Content-Range"] == "bytes 500000-999999/1000000"
        assert headers["Content-Length"] == "500000"
        assert headers["Accept-Ranges"] == "bytes"
        assert headers["Content-Type"] == "video/mp4"
        store.get_range.assert_awaited_once()
        assert store.get_range.call_args[0][1].start == 500000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "garbage", create_test_token(expired=True)])
    async def test_bad_token_denied_before_storage(self, media_service, store, token):
        with pytest.raises(StreamAccessDeniedError):
            await media_service.open_stream(KEY, token, "bytes=0-")
        store.head.assert_not_called()
        store.get_range.assert_not_called()

    @pytest.mark.asyncio
    async def test_bad_token_checked_before_key(self, media_service, store):
        with pytest.raises(StreamAccessDeniedError):
            await media_service.open_stream(None, "garbage", None)

    @pytest.mark.asyncio
    async def test_missing_range_never_queries_storage(self, media_service, store):
        with pytest.raises(MissingRangeError):
            await media_service.open_stream(KEY, create_test_token(), None)
        store.head.assert_not_called()
        store.get_range.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_key(self, media_service, store):
        with pytest.raises(MissingKeyError):
            await media_service.open_stream("", create_test_token(), "bytes=0-")
        store.head.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_object(self, media_service, store):
        store.head.side_effect = ObjectNotFoundError(KEY)
        with pytest.raises(ObjectNotFoundError):
            await media_service.open_stream(KEY, create_test_token(), "bytes=0-")
        store.get_range.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_range_after_metadata(self, media_service, store):
        with pytest.raises(InvalidRangeError):
            await media_service.open_stream(KEY, create_test_token(), "bytes=9-1")
        store.get_range.assert_not_called()

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, media_service, store):
        store.get_range.side_effect = StorageError("get", "boom", KEY)
        with pytest.raises(StorageError):
            await media_service.open_stream(KEY, create_test_token(), "bytes=0-")


class TestSignDocument:

    @pytest.mark.asyncio
    async def test_uses_document_ttl(self, media_service, media_settings):
        url = await media_service.sign_document("notes/a.pdf")
        assert url.endswith(f"ttl={media_settings.document_url_ttl_seconds}")

    @pytest.mark.asyncio
    async def test_external_unchanged(self, media_service, store):
        assert await media_service.sign_document("https://x/a.pdf") == "https://x/a.pdf"
        store.presign_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_key(self, media_service):
        with pytest.raises(MissingKeyError):
            await media_service.sign_document(None)


class TestMakeObjectKey:

    def test_format(self):
        assert make_object_key("videos", "My Lesson 1.mp4", now_ms=1700000000000) == (
            "videos/1700000000000-My-Lesson-1.mp4"
        )

    def test_default_folder(self):
        assert make_object_key("", "a.pdf", now_ms=1).startswith("uploads/1-")

    def test_strips_slashes(self):
        assert make_object_key("/notes/", "a.pdf", now_ms=5) == "notes/5-a.pdf"


class TestUploads:

    @pytest.mark.asyncio
    async def test_upload_returns_key(self, media_service, store):
        result = await media_service.upload("a b.pdf", "application/pdf", b"%PDF", "notes")
        assert result.key.startswith("notes/")
        assert result.key.endswith("-a-b.pdf")
        store.put.assert_awaited_once_with(result.key, b"%PDF", "application/pdf")

    @pytest.mark.asyncio
    async def test_empty_upload(self, media_service, store):
        with pytest.raises(EmptyUploadError):
            await media_service.upload("", None, b"")
        store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_too_large(self, media_service, store):
        with pytest.raises(UploadTooLargeError):
            await media_service.upload("big.mp4", "video/mp4", b"x" * 2048)
        store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_many(self, media_service, store):
        result = await media_service.upload_many(
            [("a.pdf", "application/pdf", b"1"), ("b.pdf", None, b"2")], "notes"
        )
        assert [item.original_name for item in result.uploaded_items] == ["a.pdf", "b.pdf"]
        assert store.put.await_count == 2

    @pytest.mark.asyncio
    async def test_upload_many_validates_everything_first(self, media_service, store):
        with pytest.raises(EmptyUploadError):
            await media_service.upload_many([("a.pdf", None, b"1"), ("b.pdf", None, b"")])
        store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_many_requires_files(self, media_service):
        with pytest.raises(EmptyUploadError):
            await media_service.upload_many([])


class TestDeleteReference:

    @pytest.mark.asyncio
    async def test_deletes_keys(self, media_service, store):
        assert await media_service.delete_reference("videos/a.mp4") is True
        store.delete.assert_awaited_once_with("videos/a.mp4")

    @pytest.mark.asyncio
    async def test_skips_external(self, media_service, store):
        assert await media_service.delete_reference("https://youtube.com/x") is False
        store.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_storage_failure_is_reported(self, media_service, store):
        store.delete.side_effect = StorageError("delete", "boom", "videos/a.mp4")
        assert await media_service.delete_reference("videos/a.mp4") is False
