"""Storage configuration for the S3-compatible attachment cache.

The same settings address MinIO locally and AWS S3 in deployed environments.
"""

from dataclasses import dataclass
from typing import Optional

from config import Settings


@dataclass
class StorageConfig:
    """Where cached attachments live and how long to wait for them.

    Attributes:
        endpoint_url: Explicit endpoint (MinIO, Ceph) or None for AWS
        access_key: Access key id
        secret_key: Secret access key
        bucket_name: Bucket holding cached email attachments
        region: Signing region
        key_prefix: Optional prefix prepended to every content id
        connect_timeout: Connection timeout in seconds
        read_timeout: Read timeout in seconds
    """
    endpoint_url: Optional[str]
    access_key: str
    secret_key: str
    bucket_name: str
    region: str = "us-east-1"
    key_prefix: str = ""
    connect_timeout: float = 5.0
    read_timeout: float = 30.0


def load_storage_config(settings: Settings) -> StorageConfig:
    """Build storage configuration from application settings.

    Raises:
        ValueError: If the bucket name is empty
    """
    if not settings.S3_BUCKET_NAME:
        raise ValueError("S3_BUCKET_NAME must be set")

    return StorageConfig(
        endpoint_url=settings.S3_ENDPOINT_URL or None,
        access_key=settings.S3_ACCESS_KEY_ID,
        secret_key=settings.S3_SECRET_ACCESS_KEY,
        bucket_name=settings.S3_BUCKET_NAME,
        region=settings.S3_REGION,
        connect_timeout=settings.S3_CONNECT_TIMEOUT_SECONDS,
        read_timeout=settings.S3_READ_TIMEOUT_SECONDS,
    )
