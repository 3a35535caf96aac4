"""
Turns storage keys into time-limited retrieval URLs.

A reference that already carries a URI scheme is public and is returned
as is. Anything else is a private key and gets a presigned GET URL.
"""

import asyncio
import logging
import re
from typing import Iterable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import SigningError
from .storage import ObjectStore

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")


def is_external_url(ref: Optional[str]) -> bool:
    """True for references that start with a URI scheme such as ``https://``."""
    return bool(ref) and bool(_SCHEME.match(ref))


class KeySigner:
    """
    Best-effort URL signer.

    When signing fails the original key is returned unless ``fail_closed``
    is set, in which case SigningError is raised.
    """

    def __init__(self, store: ObjectStore, fail_closed: bool = False):
        self._store = store
        self._fail_closed = fail_closed

    async def sign(self, key: Optional[str], ttl_seconds: int) -> Optional[str]:
        if not key or is_external_url(key):
            return key
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        try:
            return await self._store.presign_get(key, ttl_seconds)
        except (BotoCoreError, ClientError, RuntimeError) as e:
            logger.error("Failed to sign key %s: %s", key, e)
            if self._fail_closed:
                raise SigningError(key, str(e))
            return key

    async def sign_many(
        self, keys: Iterable[Optional[str]], ttl_seconds: int
    ) -> list[Optional[str]]:
        """Sign several references concurrently, preserving order."""
        return list(
            await asyncio.gather(*(self.sign(key, ttl_seconds) for key in keys))
        )
