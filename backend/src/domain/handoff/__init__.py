"""Handoff domain - work items, import descriptors, metadata sidecars, release lifecycle"""

from .errors import (
    HandoffError,
    ContentFetchError,
    TransferError,
    MetadataParseError,
    CollaboratorCallError,
    MailboxError,
)
from .models import (
    InboundFileInfo,
    WorkItem,
    ReleaseNotice,
    ReleaseFileInfo,
    encode_mailbox_id,
    decode_mailbox_id,
)
from .release_status import ReleaseStatus, can_transition, ALLOWED_TRANSITIONS

__all__ = [
    "HandoffError",
    "ContentFetchError",
    "TransferError",
    "MetadataParseError",
    "CollaboratorCallError",
    "MailboxError",
    "InboundFileInfo",
    "WorkItem",
    "ReleaseNotice",
    "ReleaseFileInfo",
    "encode_mailbox_id",
    "decode_mailbox_id",
    "ReleaseStatus",
    "can_transition",
    "ALLOWED_TRANSITIONS",
]
