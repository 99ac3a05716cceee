"""Collaborator wiring for the HTTP facades and the queue workers.

Each factory builds a stateless adapter from Settings. FastAPI routes take
them through Depends() so tests can swap them via app.dependency_overrides;
workers call the same factories once per process.
"""

from functools import lru_cache

from config import get_settings
from domain.handoff.reference import PlaceholderReferenceIdProvider
from domain.organization.service import OrganizationService
from infrastructure.mailbox import ImapConfig, ImapMailboxMover
from infrastructure.services import DocumentServiceClient, DpsEmailClient, OrdsOrgApiClient
from infrastructure.sftp import SFTPConfig, SftpFileTransfer
from infrastructure.storage import S3ContentStore, load_storage_config
from mailbox_state.service import MailboxStateService


@lru_cache()
def get_content_store() -> S3ContentStore:
    return S3ContentStore(load_storage_config(get_settings()))


def get_sftp_config() -> SFTPConfig:
    settings = get_settings()
    return SFTPConfig(
        host=settings.SFTP_HOST,
        port=settings.SFTP_PORT,
        username=settings.SFTP_USERNAME,
        password=settings.SFTP_PASSWORD,
        ssh_key=settings.SFTP_SSH_KEY,
        remote_location=settings.SFTP_REMOTE_LOCATION,
        timeout_seconds=settings.SFTP_TIMEOUT_SECONDS,
        atomic_write=settings.SFTP_ATOMIC_WRITE,
    )


def get_file_transfer() -> SftpFileTransfer:
    return SftpFileTransfer(get_sftp_config())


def get_email_notification_client() -> DpsEmailClient:
    settings = get_settings()
    return DpsEmailClient(
        base_url=settings.DPS_EMAIL_API_BASE_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )


def get_document_service_client() -> DocumentServiceClient:
    settings = get_settings()
    return DocumentServiceClient(
        base_url=settings.DOCUMENT_SERVICE_BASE_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )


def get_reference_id_provider() -> PlaceholderReferenceIdProvider:
    return PlaceholderReferenceIdProvider(get_settings().IMPORT_REFERENCE_PLACEHOLDER)


def get_mailbox_mover() -> ImapMailboxMover:
    settings = get_settings()
    return ImapMailboxMover(
        ImapConfig(
            host=settings.IMAP_HOST,
            port=settings.IMAP_PORT,
            username=settings.IMAP_USERNAME,
            password=settings.IMAP_PASSWORD,
            inbox_folder=settings.IMAP_INBOX_FOLDER,
            processed_folder=settings.IMAP_PROCESSED_FOLDER,
            error_folder=settings.IMAP_ERROR_FOLDER,
            timeout_seconds=settings.IMAP_TIMEOUT_SECONDS,
        )
    )


def get_mailbox_state_service() -> MailboxStateService:
    return MailboxStateService(get_mailbox_mover())


def get_organization_service() -> OrganizationService:
    settings = get_settings()
    auth = None
    if settings.ORDS_USERNAME and settings.ORDS_PASSWORD:
        auth = (settings.ORDS_USERNAME, settings.ORDS_PASSWORD)
    client = OrdsOrgApiClient(
        base_url=settings.ORDS_ORG_API_BASE_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        auth=auth,
    )
    return OrganizationService(client)
