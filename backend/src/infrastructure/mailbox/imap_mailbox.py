"""IMAP adapter for mailbox folder transitions.

Mailbox message ids are IMAP UIDs in the inbox folder. Moves use the MOVE
extension when the server advertises it and fall back to COPY + delete.
"""

import imaplib
import logging
from dataclasses import dataclass

from domain.handoff.errors import MailboxError
from domain.handoff.ports import MailboxMoverPort

logger = logging.getLogger(__name__)


@dataclass
class ImapConfig:
    host: str
    username: str
    password: str
    port: int = 993
    inbox_folder: str = "INBOX"
    processed_folder: str = "Processed"
    error_folder: str = "Error"
    timeout_seconds: float = 30.0


class ImapMailboxMover(MailboxMoverPort):
    """Moves inbox messages to the processed or error folder over IMAPS."""

    def __init__(self, config: ImapConfig):
        self.config = config

    def move_to_processed_folder(self, email_id: str) -> None:
        self._move(email_id, self.config.processed_folder)

    def move_to_error_folder(self, email_id: str) -> None:
        self._move(email_id, self.config.error_folder)

    def _connect(self) -> imaplib.IMAP4_SSL:
        try:
            connection = imaplib.IMAP4_SSL(
                self.config.host, self.config.port, timeout=self.config.timeout_seconds
            )
            connection.login(self.config.username, self.config.password)
        except (imaplib.IMAP4.error, OSError) as e:
            raise MailboxError(f"Failed to connect to mailbox {self.config.host}: {e}")
        return connection

    def _move(self, email_id: str, folder: str) -> None:
        if not email_id.isdigit():
            raise MailboxError(f"Invalid mailbox message id '{email_id}'")

        connection = self._connect()
        try:
            status, _ = connection.select(self.config.inbox_folder)
            if status != "OK":
                raise MailboxError(f"Cannot open folder {self.config.inbox_folder}")

            status, data = connection.uid("FETCH", email_id, "(FLAGS)")
            if status != "OK" or not data or data[0] is None:
                raise MailboxError(f"Email {email_id} not found in {self.config.inbox_folder}")

            if "MOVE" in connection.capabilities:
                status, data = connection.uid("MOVE", email_id, folder)
                if status != "OK":
                    raise MailboxError(f"Failed to move email {email_id} to {folder}: {data}")
            else:
                status, data = connection.uid("COPY", email_id, folder)
                if status != "OK":
                    raise MailboxError(f"Failed to copy email {email_id} to {folder}: {data}")
                status, data = connection.uid("STORE", email_id, "+FLAGS", "(\\Deleted)")
                if status != "OK":
                    raise MailboxError(f"Failed to flag email {email_id} as deleted: {data}")
                if "UIDPLUS" in connection.capabilities:
                    connection.uid("EXPUNGE", email_id)
                else:
                    # Plain EXPUNGE also purges other \Deleted messages in the folder
                    connection.expunge()

            logger.info(f"Moved email {email_id} to {folder}")
        except imaplib.IMAP4.error as e:
            raise MailboxError(f"Failed to move email {email_id} to {folder}: {e}")
        finally:
            try:
                connection.logout()
            except (imaplib.IMAP4.error, OSError):
                logger.debug("Mailbox logout failed")
