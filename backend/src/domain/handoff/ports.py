"""Ports for the external systems the handoff pipeline talks to.

Adapters live in the infrastructure layer. All ports are synchronous: each
call is a blocking I/O point inside one worker invocation, and adapters are
expected to enforce their own timeout.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO

from .registration import (
    DocumentReleaseRequest,
    DocumentReleaseResponse,
    RegistrationRequest,
    RegistrationResponse,
)


class ContentStorePort(ABC):
    """Binary content cache holding email attachments."""

    @abstractmethod
    def get(self, content_id: str) -> bytes:
        """Return the cached bytes.

        Raises:
            ContentFetchError: If nothing is cached under content_id
        """


class FileTransferPort(ABC):
    """Remote file drop shared with the imaging backend."""

    @abstractmethod
    def upload(self, stream: BinaryIO, remote_path: str) -> None:
        """Write stream to remote_path, overwriting any existing file.

        Raises:
            TransferError: On transport failure
        """

    @abstractmethod
    def download(self, remote_path: str) -> bytes:
        """Read the whole remote file.

        Raises:
            TransferError: On transport failure or missing file
        """

    @abstractmethod
    def move(self, source_path: str, dest_path: str) -> None:
        """Move a remote file, creating the destination folder if needed.

        Raises:
            TransferError: On transport failure
        """


class MailboxMoverPort(ABC):
    """Mailbox folder transitions for a source email."""

    @abstractmethod
    def move_to_processed_folder(self, email_id: str) -> None:
        pass

    @abstractmethod
    def move_to_error_folder(self, email_id: str) -> None:
        pass


class EmailNotificationPort(ABC):
    """Tells the mailbox side that an email has been handed off."""

    @abstractmethod
    def email_processed(self, email_id_base64: str, reference_id: str, correlation_id: str) -> bool:
        """Return the acknowledge flag reported by the mailbox side.

        Raises:
            CollaboratorCallError: If the call fails or is refused
        """


class DocumentServicePort(ABC):
    """Document release (imaging backend) and registration (Figaro)."""

    @abstractmethod
    def release_document(self, request: DocumentReleaseRequest) -> DocumentReleaseResponse:
        pass

    @abstractmethod
    def register_document(self, request: RegistrationRequest) -> RegistrationResponse:
        pass
