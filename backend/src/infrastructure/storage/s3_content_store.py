"""S3 Content Store - ContentStorePort implementation using boto3.

Reads cached email attachments from AWS S3, MinIO or any other
S3-compatible service.
"""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from domain.handoff.errors import ContentFetchError
from domain.handoff.ports import ContentStorePort

from .storage_config import StorageConfig

logger = logging.getLogger(__name__)

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class S3ContentStore(ContentStorePort):
    """Attachment cache backed by an S3 bucket.

    Example:
        store = S3ContentStore(load_storage_config(get_settings()))
        content = store.get("a1b2c3")
    """

    def __init__(self, config: StorageConfig):
        """Initialize the S3 client.

        Raises:
            StorageError: If S3 client initialization fails
        """
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=config.endpoint_url,
                aws_access_key_id=config.access_key,
                aws_secret_access_key=config.secret_key,
                region_name=config.region,
                config=Config(
                    connect_timeout=config.connect_timeout,
                    read_timeout=config.read_timeout,
                    retries={"max_attempts": 2},
                ),
            )
        except (BotoCoreError, ValueError) as e:
            raise StorageError(f"Failed to initialize S3 client: {e}")

        self.bucket_name = config.bucket_name
        self.key_prefix = config.key_prefix

        logger.info(
            f"Initialized S3 content store: bucket={config.bucket_name}, "
            f"endpoint={config.endpoint_url or 'AWS S3'}, region={config.region}"
        )

    def _key(self, content_id: str) -> str:
        return f"{self.key_prefix}{content_id}"

    def get(self, content_id: str) -> bytes:
        """Return cached attachment bytes.

        Raises:
            ContentFetchError: If the object is missing or cannot be read
        """
        key = self._key(content_id)
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            content = response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code in MISSING_KEY_CODES:
                raise ContentFetchError(content_id, "not found in cache")
            raise ContentFetchError(content_id, str(e))
        except BotoCoreError as e:
            raise ContentFetchError(content_id, str(e))

        logger.debug(f"Retrieved cached content: key={key}, size={len(content)}")
        return content

    def bucket_exists(self) -> bool:
        """Check that the configured bucket is reachable (HEAD request)."""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Bucket check failed for {self.bucket_name}: {e}")
            return False
