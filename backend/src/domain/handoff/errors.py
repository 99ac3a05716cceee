"""Error taxonomy for the document handoff pipeline.

Adapters translate library exceptions (paramiko, botocore, httpx) into these
types so that workers and HTTP surfaces only deal with one hierarchy.
"""

from typing import Optional


class HandoffError(Exception):
    """Base exception for handoff pipeline operations."""
    pass


class ContentFetchError(HandoffError):
    """Requested attachment is not present in the content cache."""

    def __init__(self, content_id: str, reason: Optional[str] = None):
        self.content_id = content_id
        message = f"Content {content_id} could not be fetched"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TransferError(HandoffError):
    """SFTP upload, download or move failed (network, auth, path)."""
    pass


class MetadataParseError(HandoffError):
    """Metadata sidecar is not well-formed XML or has the wrong root."""
    pass


class CollaboratorCallError(HandoffError):
    """A downstream service call failed.

    The message is surfaced verbatim to callers of the HTTP facades.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class MailboxError(HandoffError):
    """Mailbox message could not be found or moved between folders."""
    pass
