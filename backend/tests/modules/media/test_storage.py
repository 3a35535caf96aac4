import pytest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from modules.media.exceptions import ObjectNotFoundError, StorageError
from modules.media.models import ByteRange
from modules.media.storage import ObjectStore


def client_error(code: str, operation: str = "HeadObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeBody:
    def __init__(self, data: bytes):
        self.data = data
        self.closed = False

    def iter_chunks(self, chunk_size):
        for i in range(0, len(self.data), chunk_size):
            yield self.data[i:i + chunk_size]

    def close(self):
        self.closed = True


@pytest.fixture
def s3():
    return MagicMock()


@pytest.fixture
def store(s3) -> ObjectStore:
    return ObjectStore("media", client_factory=lambda: s3, chunk_size=4)


class TestHead:

    @pytest.mark.asyncio
    async def test_metadata(self, store, s3):
        s3.head_object.return_value = {"ContentLength": 1000, "ContentType": "video/webm"}

        metadata = await store.head("videos/a.webm")

        s3.head_object.assert_called_once_with(Bucket="media", Key="videos/a.webm")
        assert metadata.size == 1000
        assert metadata.content_type == "video/webm"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["NoSuchKey", "NotFound", "404"])
    async def test_missing(self, store, s3, code):
        s3.head_object.side_effect = client_error(code)
        with pytest.raises(ObjectNotFoundError):
            await store.head("videos/missing.mp4")

    @pytest.mark.asyncio
    async def test_other_errors(self, store, s3):
        s3.head_object.side_effect = client_error("AccessDenied")
        with pytest.raises(StorageError):
            await store.head("videos/a.mp4")

    @pytest.mark.asyncio
    async def test_unconfigured_client(self):
        def factory():
            raise RuntimeError("Object storage configuration missing")

        with pytest.raises(StorageError):
            await ObjectStore("media", client_factory=factory).head("videos/a.mp4")


class TestGetRange:

    @pytest.mark.asyncio
    async def test_relays_chunks_and_closes(self, store, s3):
        body = FakeBody(b"0123456789")
        s3.get_object.return_value = {"Body": body}

        stream = await store.get_range("videos/a.mp4", ByteRange(start=10, end=19))
        chunks = [chunk async for chunk in stream]

        s3.get_object.assert_called_once_with(
            Bucket="media", Key="videos/a.mp4", Range="bytes=10-19"
        )
        assert chunks == [b"0123", b"4567", b"89"]
        assert body.closed is True

    @pytest.mark.asyncio
    async def test_early_close_releases_body(self, store, s3):
        body = FakeBody(b"0123456789")
        s3.get_object.return_value = {"Body": body}

        stream = await store.get_range("videos/a.mp4", ByteRange(start=0, end=9))
        first = await stream.__anext__()
        await stream.aclose()

        assert first == b"0123"
        assert body.closed is True

    @pytest.mark.asyncio
    async def test_failure_before_streaming(self, store, s3):
        s3.get_object.side_effect = client_error("InternalError", "GetObject")
        with pytest.raises(StorageError):
            await store.get_range("videos/a.mp4", ByteRange(start=0, end=9))


class TestWrites:

    @pytest.mark.asyncio
    async def test_put_with_content_type(self, store, s3):
        await store.put("uploads/1-a.pdf", b"%PDF", "application/pdf")
        s3.put_object.assert_called_once_with(
            Bucket="media", Key="uploads/1-a.pdf", Body=b"%PDF", ContentType="application/pdf"
        )

    @pytest.mark.asyncio
    async def test_put_failure(self, store, s3):
        s3.put_object.side_effect = client_error("AccessDenied", "PutObject")
        with pytest.raises(StorageError):
            await store.put("uploads/1-a.pdf", b"%PDF", None)

    @pytest.mark.asyncio
    async def test_delete(self, store, s3):
        await store.delete("uploads/1-a.pdf")
        s3.delete_object.assert_called_once_with(Bucket="media", Key="uploads/1-a.pdf")

    @pytest.mark.asyncio
    async def test_presign(self, store, s3):
        s3.generate_presigned_url.return_value = "https://signed"
        assert await store.presign_get("notes/a.pdf", 600) == "https://signed"
        s3.generate_presigned_url.assert_called_once_with(
            "get_object", Params={"Bucket": "media", "Key": "notes/a.pdf"}, ExpiresIn=600
        )
