"""
Async facade over an S3-compatible bucket.

boto3 is blocking, so every call runs in Starlette's threadpool and the
event loop stays free while storage answers. Object bodies are relayed
chunk by chunk and never buffered whole.
"""

import logging
from typing import Any, AsyncIterator, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import iterate_in_threadpool, run_in_threadpool

from shared.storage import get_s3_client

from .exceptions import ObjectNotFoundError, StorageError
from .models import ByteRange, ObjectMetadata

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "NotFound", "404"}


def _is_not_found(error: ClientError) -> bool:
    code = str(error.response.get("Error", {}).get("Code", ""))
    return code in _NOT_FOUND_CODES


class ObjectStore:
    """Reads, writes and deletes objects in one bucket."""

    def __init__(
        self,
        bucket: str,
        client_factory: Callable[[], Any] = get_s3_client,
        chunk_size: int = 64 * 1024,
    ):
        self._bucket = bucket
        self._client_factory = client_factory
        self._chunk_size = chunk_size

    @property
    def bucket(self) -> str:
        return self._bucket

    def client(self) -> Any:
        return self._client_factory()

    async def head(self, key: str) -> ObjectMetadata:
        """
        Fetch size and content type.

        Raises:
            ObjectNotFoundError: If the key does not exist
            StorageError: On any other storage failure
        """
        try:
            response = await run_in_threadpool(
                self.client().head_object, Bucket=self._bucket, Key=key
            )
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(key)
            raise StorageError("head", str(e), key)
        except (BotoCoreError, RuntimeError) as e:
            raise StorageError("head", str(e), key)

        return ObjectMetadata(
            key=key,
            size=int(response["ContentLength"]),
            content_type=response.get("ContentType"),
        )

    async def get_range(self, key: str, byte_range: ByteRange) -> AsyncIterator[bytes]:
        """
        Open a ranged read and return an iterator over its bytes.

        The request to storage is made before this returns, so a failure
        surfaces here rather than after response headers are sent.
        """
        try:
            response = await run_in_threadpool(
                self.client().get_object,
                Bucket=self._bucket,
                Key=key,
                Range=byte_range.header_value(),
            )
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(key)
            raise StorageError("get", str(e), key)
        except (BotoCoreError, RuntimeError) as e:
            raise StorageError("get", str(e), key)

        return self._relay(key, response["Body"])

    async def _relay(self, key: str, body: Any) -> AsyncIterator[bytes]:
        try:
            async for chunk in iterate_in_threadpool(body.iter_chunks(self._chunk_size)):
                yield chunk
        except (BotoCoreError, ClientError) as e:
            # Headers are already on the wire; the client sees a short body
            logger.error("Stream of %s aborted by storage: %s", key, e)
        finally:
            body.close()

    async def put(self, key: str, data: bytes, content_type: Optional[str]) -> None:
        params: dict[str, Any] = {"Bucket": self._bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            await run_in_threadpool(self.client().put_object, **params)
        except (BotoCoreError, ClientError, RuntimeError) as e:
            raise StorageError("put", str(e), key)

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(
                self.client().delete_object, Bucket=self._bucket, Key=key
            )
        except (BotoCoreError, ClientError, RuntimeError) as e:
            raise StorageError("delete", str(e), key)

    async def presign_get(self, key: str, ttl_seconds: int) -> str:
        """Create a presigned GET URL for one object."""
        return await run_in_threadpool(
            self.client().generate_presigned_url,
            "get_object",
            Params={"Bucket": self._bucket, "Key": key},
            ExpiresIn=ttl_seconds,
        )
