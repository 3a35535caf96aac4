import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.media.models import ObjectMetadata
from modules.media.service import MediaService
from modules.media.signer import KeySigner
from shared.config import Settings

FILE_SIZE = 1_000_000


def make_body(length: int, chunk: int = 65536):
    """Async iterator yielding ``length`` bytes."""

    async def body():
        remaining = length
        while remaining > 0:
            size = min(chunk, remaining)
            remaining -= size
            yield b"\0" * size

    return body()


@pytest.fixture
def store():
    """Object store double whose calls can be counted."""
    store = MagicMock()
    store.head = AsyncMock(
        return_value=ObjectMetadata(key="videos/c1/lesson1.mp4", size=FILE_SIZE, content_type=None)
    )

    async def get_range(key, byte_range):
        return make_body(byte_range.length)

    store.get_range = AsyncMock(side_effect=get_range)
    store.put = AsyncMock()
    store.delete = AsyncMock()
    store.presign_get = AsyncMock(side_effect=lambda key, ttl: f"https://signed.example/{key}?ttl={ttl}")
    return store


@pytest.fixture
def media_settings() -> Settings:
    return Settings(_env_file=None, upload_max_bytes=1024)


@pytest.fixture
def media_service(store, auth_service, media_settings) -> MediaService:
    return MediaService(
        store=store,
        signer=KeySigner(store),
        auth=auth_service,
        settings=media_settings,
    )
