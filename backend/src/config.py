"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from typing import Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST set credentials and service URLs.

    Environment Variables:
        SFTP_HOST: Imaging backend SFTP host (also sent to the release service)
        SFTP_REMOTE_LOCATION: Base directory for uploads and release files
        S3_ENDPOINT_URL: S3-compatible endpoint holding cached attachments
        CELERY_BROKER_URL: Broker URL for the queue workers
        FAILURE_POLICY: log | retry | dead_letter
        DPS_EMAIL_API_BASE_URL: Mailbox state API (processed notification)
        DOCUMENT_SERVICE_BASE_URL: Document release/registration API
        ORDS_ORG_API_BASE_URL: ORDS organization validation API
        LOG_LEVEL: Logging level (default INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # SFTP (imaging backend drop)
    SFTP_HOST: str = "localhost"
    SFTP_PORT: int = 22
    SFTP_USERNAME: str = "dps"
    SFTP_PASSWORD: Optional[str] = None
    SFTP_SSH_KEY: Optional[str] = None
    SFTP_REMOTE_LOCATION: str = "/dps"
    SFTP_TIMEOUT_SECONDS: float = 30.0
    SFTP_ATOMIC_WRITE: bool = True

    # Content cache (S3/MinIO)
    S3_ENDPOINT_URL: Optional[str] = "http://localhost:9000"
    S3_ACCESS_KEY_ID: str = "minioadmin"
    S3_SECRET_ACCESS_KEY: str = "minioadmin"
    S3_BUCKET_NAME: str = "dps-email-content"
    S3_REGION: str = "us-east-1"
    S3_CONNECT_TIMEOUT_SECONDS: float = 5.0
    S3_READ_TIMEOUT_SECONDS: float = 30.0

    # Queues / Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: Optional[str] = None
    EMAIL_QUEUE_NAME: str = "DPS_EMAIL_QUEUE"
    NOTIFICATION_QUEUE_NAME: str = "CRRP_QUEUE"
    DEAD_LETTER_QUEUE_NAME: str = "DPS_DEAD_LETTER_QUEUE"

    # Failure policy for queue workers
    FAILURE_POLICY: str = "log"
    MAX_RETRIES: int = 5
    RETRY_BACKOFF_SECONDS: int = 30
    RETRY_BACKOFF_MAX_SECONDS: int = 3600

    # Downstream services
    DPS_EMAIL_API_BASE_URL: str = "http://localhost:8080"
    DOCUMENT_SERVICE_BASE_URL: str = "http://localhost:8081"
    ORDS_ORG_API_BASE_URL: str = "http://localhost:8082/ords/figcr"
    ORDS_USERNAME: Optional[str] = None
    ORDS_PASSWORD: Optional[str] = None
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Mailbox (IMAP)
    IMAP_HOST: str = "localhost"
    IMAP_PORT: int = 993
    IMAP_USERNAME: str = "dps"
    IMAP_PASSWORD: str = "dev_password"
    IMAP_INBOX_FOLDER: str = "INBOX"
    IMAP_PROCESSED_FOLDER: str = "Processed"
    IMAP_ERROR_FOLDER: str = "Error"
    IMAP_TIMEOUT_SECONDS: float = 30.0

    # Imaging backend
    IMPORT_REFERENCE_PLACEHOLDER: str = "TBD"
    IMPORT_BATCH_CLASS_NAME: str = "DPS_EMAIL"
    IMAGE_EXTENSION: str = "PDF"

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
