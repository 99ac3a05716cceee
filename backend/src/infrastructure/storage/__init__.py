"""Storage infrastructure module - S3 attachment cache."""

from .s3_content_store import S3ContentStore, StorageError
from .storage_config import StorageConfig, load_storage_config

__all__ = ["S3ContentStore", "StorageError", "StorageConfig", "load_storage_config"]
