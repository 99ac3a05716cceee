"""Value objects for inbound (email) and outbound (release) units of work.

Instances are built from queue payloads, live for a single worker invocation
and are never persisted. A redelivered message produces a fresh instance with
the same logical identifiers.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Mapping
from uuid import UUID


def encode_mailbox_id(email_id: str) -> str:
    """Encode a raw mailbox message id for use in queue payloads and URLs.

    Uses the URL-safe base64 alphabet so the value can be a path segment.
    """
    return base64.urlsafe_b64encode(email_id.encode("utf-8")).decode("ascii")


def decode_mailbox_id(email_id_base64: str) -> str:
    """Decode a base64 mailbox id back to the raw mailbox message id.

    Accepts both the standard and the URL-safe alphabet and tolerates
    stripped padding.

    Raises:
        ValueError: If the value is not valid base64 or not UTF-8
    """
    value = (email_id_base64 or "").strip()
    if not value:
        raise ValueError("Email id is empty")

    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid base64 email id '{email_id_base64}': {e}")


@dataclass(frozen=True)
class InboundFileInfo:
    """Cached attachment descriptor carried on the inbound queue."""
    id: str
    name: str


@dataclass(frozen=True)
class WorkItem:
    """One inbound unit of work: a mailbox message plus its cached attachment.

    Attributes:
        transaction_id: Idempotency key for the handoff
        correlation_id: Correlation id shared by all side effects of the handoff
        file_info: Cached attachment descriptor
        mailbox_id_base64: Base64-encoded mailbox message id
    """
    transaction_id: UUID
    correlation_id: str
    file_info: InboundFileInfo
    mailbox_id_base64: str

    @property
    def email_id(self) -> str:
        return decode_mailbox_id(self.mailbox_id_base64)

    @classmethod
    def from_email_id(
        cls,
        transaction_id: UUID,
        correlation_id: str,
        file_info: InboundFileInfo,
        email_id: str,
    ) -> "WorkItem":
        """Build a work item from a raw (not yet encoded) mailbox id."""
        return cls(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
            file_info=file_info,
            mailbox_id_base64=encode_mailbox_id(email_id),
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WorkItem":
        """Build a work item from the inbound queue JSON payload.

        Raises:
            ValueError: If a required key is missing or malformed
        """
        try:
            file_info = payload["fileInfo"]
            return cls(
                transaction_id=UUID(str(payload["transactionId"])),
                correlation_id=str(payload.get("correlationId") or ""),
                file_info=InboundFileInfo(id=str(file_info["id"]), name=str(file_info["name"])),
                mailbox_id_base64=str(payload["base64EmailId"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed email handoff message, missing {e}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "transactionId": str(self.transaction_id),
            "correlationId": self.correlation_id,
            "fileInfo": {"id": self.file_info.id, "name": self.file_info.name},
            "base64EmailId": self.mailbox_id_base64,
        }


@dataclass(frozen=True)
class ReleaseNotice:
    """One outbound unit of work: a rendered document is ready."""
    file_id: str
    business_area_cd: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ReleaseNotice":
        try:
            return cls(
                file_id=str(payload["fileId"]),
                business_area_cd=str(payload.get("businessAreaCd") or ""),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed output notification message, missing {e}")

    def to_payload(self) -> Dict[str, Any]:
        return {"fileId": self.file_id, "businessAreaCd": self.business_area_cd}


METADATA_EXTENSION = "xml"
ARCHIVE_FOLDER = "archive"
ERROR_FOLDER = "error"


@dataclass(frozen=True)
class ReleaseFileInfo:
    """Remote file naming for a released document and its metadata sidecar.

    Both names derive only from file_id, so they are stable across retries and
    differ only by extension.
    """
    file_id: str
    extension: str
    remote_base: str

    @property
    def image_release_file_name(self) -> str:
        return f"{self.file_id}.{self.extension}"

    @property
    def metadata_release_file_name(self) -> str:
        return f"{self.file_id}.{METADATA_EXTENSION}"

    @property
    def image_release_path(self) -> str:
        return self._path(self.image_release_file_name)

    @property
    def metadata_release_path(self) -> str:
        return self._path(self.metadata_release_file_name)

    def release_path(self, file_name: str) -> str:
        return self._path(file_name)

    def archive_path(self, file_name: str) -> str:
        return self._path(f"{ARCHIVE_FOLDER}/{file_name}")

    def error_path(self, file_name: str) -> str:
        return self._path(f"{ERROR_FOLDER}/{file_name}")

    def release_file_names(self):
        return (self.image_release_file_name, self.metadata_release_file_name)

    def _path(self, name: str) -> str:
        return f"{self.remote_base.rstrip('/')}/{name}"
