"""
Object storage client factory.

Builds a boto3 S3 client for any S3-compatible store (AWS S3, Cloudflare R2,
MinIO). The client is created lazily and cached for the process.
"""

from typing import Any, Optional

import boto3
from botocore.config import Config

from .config import get_settings

# Module-level client cache
_s3_client: Optional[Any] = None


def get_s3_client() -> Any:
    """
    Get the shared S3 client.

    Returns:
        boto3 S3 client configured from settings

    Raises:
        RuntimeError: If storage credentials are not configured
    """
    global _s3_client

    if _s3_client is None:
        settings = get_settings()
        if not settings.storage_configured:
            raise RuntimeError(
                "Object storage configuration missing. "
                "Set STORAGE_BUCKET, STORAGE_ACCESS_KEY_ID and STORAGE_SECRET_ACCESS_KEY."
            )
        _s3_client = boto3.client(
            "s3",
            endpoint_url=settings.resolved_storage_endpoint,
            aws_access_key_id=settings.storage_access_key_id,
            aws_secret_access_key=settings.storage_secret_access_key,
            region_name=settings.storage_region,
            config=Config(signature_version="s3v4"),
        )

    return _s3_client


def reset_s3_client() -> None:
    """Reset the cached S3 client (for testing)."""
    global _s3_client
    _s3_client = None
