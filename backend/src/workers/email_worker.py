"""Email handoff worker - pushes a cached email attachment to the imaging drop.

Consumes messages from the email queue. For each message the worker:
1. Fetches the attachment from the content cache
2. Uploads it to ``{remote_location}/{file name}`` on the SFTP drop
3. Builds the import-session descriptor for the imaging backend
4. Notifies the mailbox side that the email was processed

The three external side effects are not transactional. A redelivered message
overwrites the same remote file and repeats the notification.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Dict, Optional

from celery import shared_task

from config import get_settings
from dependencies import (
    get_content_store,
    get_email_notification_client,
    get_file_transfer,
    get_reference_id_provider,
)
from domain.handoff.errors import CollaboratorCallError
from domain.handoff.import_session import generate_import_session_xml
from domain.handoff.models import WorkItem
from domain.handoff.ports import ContentStorePort, EmailNotificationPort, FileTransferPort
from domain.handoff.reference import ReferenceIdProvider
from observability.metrics import handoff_messages_total
from observability.work_context import WorkContext

from .base import HandoffTask

logger = logging.getLogger(__name__)

WORKER_NAME = "email"


@dataclass
class InboundOutcome:
    """Result of one email handoff invocation."""
    transaction_id: str
    success: bool
    remote_path: Optional[str] = None
    reference_id: Optional[str] = None
    error: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "status": "success" if self.success else "failed",
            "transaction_id": self.transaction_id,
        }
        if self.remote_path:
            result["remote_path"] = self.remote_path
        if self.reference_id:
            result["reference_id"] = self.reference_id
        if self.error is not None:
            result["error"] = str(self.error)
        return result


class EmailHandoffWorker:
    """Hands one cached email attachment to the imaging backend.

    Args:
        content_store: Content cache holding the attachment bytes
        file_transfer: SFTP drop shared with the imaging backend
        notifier: Mailbox-side processed notification
        reference_provider: Source of the backend reference id
        remote_location: Base folder on the SFTP drop
        batch_class_name: Kofax batch class named in the import descriptor
    """

    def __init__(
        self,
        content_store: ContentStorePort,
        file_transfer: FileTransferPort,
        notifier: EmailNotificationPort,
        reference_provider: ReferenceIdProvider,
        remote_location: str,
        batch_class_name: str = "DPS_EMAIL",
    ):
        self.content_store = content_store
        self.file_transfer = file_transfer
        self.notifier = notifier
        self.reference_provider = reference_provider
        self.remote_location = remote_location
        self.batch_class_name = batch_class_name

    def remote_path_for(self, item: WorkItem) -> str:
        return f"{self.remote_location.rstrip('/')}/{item.file_info.name}"

    def handle(self, item: WorkItem) -> InboundOutcome:
        """Run the handoff steps in order; any failure ends the invocation.

        Errors are caught here and reported on the outcome, never raised.
        """
        context = context_for(item)
        extra = context.log_extra()
        transaction_id = str(item.transaction_id)
        remote_path = self.remote_path_for(item)

        try:
            logger.info(f"Fetching attachment {item.file_info.id} from content cache", extra=extra)
            content = self.content_store.get(item.file_info.id)

            logger.info(f"Uploading {len(content)} bytes to {remote_path}", extra=extra)
            self.file_transfer.upload(BytesIO(content), remote_path)

            descriptor = generate_import_session_xml(
                item,
                batch_class_name=self.batch_class_name,
                import_folder=self.remote_location,
            )
            logger.debug(f"Import session descriptor: {descriptor}", extra=extra)

            reference_id = self.reference_provider.reference_for(item)
            acknowledged = self.notifier.email_processed(
                item.mailbox_id_base64, reference_id, item.correlation_id
            )
            if not acknowledged:
                raise CollaboratorCallError(
                    f"Processed notification for email {item.mailbox_id_base64} was not acknowledged"
                )

        except Exception as e:
            # Invocation boundary: the failure policy decides what happens next
            logger.error(
                f"Email handoff {transaction_id} failed: {type(e).__name__}: {e}",
                extra=extra,
                exc_info=True,
            )
            handoff_messages_total.labels(worker=WORKER_NAME, outcome="failed").inc()
            return InboundOutcome(transaction_id=transaction_id, success=False, error=e)

        logger.info(f"Email handoff {transaction_id} completed", extra=extra)
        handoff_messages_total.labels(worker=WORKER_NAME, outcome="success").inc()
        return InboundOutcome(
            transaction_id=transaction_id,
            success=True,
            remote_path=remote_path,
            reference_id=reference_id,
        )


def context_for(item: WorkItem) -> WorkContext:
    return WorkContext(
        correlation_id=item.correlation_id or None,
        transaction_id=str(item.transaction_id),
        file_id=item.file_info.id,
    )


def build_email_handoff_worker() -> EmailHandoffWorker:
    """Wire the worker from settings."""
    settings = get_settings()
    return EmailHandoffWorker(
        content_store=get_content_store(),
        file_transfer=get_file_transfer(),
        notifier=get_email_notification_client(),
        reference_provider=get_reference_id_provider(),
        remote_location=settings.SFTP_REMOTE_LOCATION,
        batch_class_name=settings.IMPORT_BATCH_CLASS_NAME,
    )


class EmailHandoffTask(HandoffTask):

    def build_worker(self) -> EmailHandoffWorker:
        return build_email_handoff_worker()


@shared_task(name="dps.email.handoff", base=EmailHandoffTask, bind=True)
def handle_email_handoff(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Hand one cached email attachment to the imaging backend (background task).

    Args:
        payload: Email queue message
            ``{transactionId, correlationId, fileInfo: {id, name}, base64EmailId}``

    Returns:
        Dict with handoff result:
        - status: 'success', 'failed' or 'rejected'
        - transaction_id: Idempotency key of the handoff
        - remote_path: Uploaded file path (if success)
        - error: Error message (if failed)
        - action: Applied failure policy action (if failed)

    Raises:
        celery.exceptions.Retry: When the retry policy reschedules the message

    Example:
        handle_email_handoff.delay(item.to_payload())
    """
    try:
        item = WorkItem.from_payload(payload)
    except ValueError as e:
        key = payload.get("transactionId") if isinstance(payload, dict) else None
        return self.reject_payload(WORKER_NAME, payload, e, key)

    outcome = self.worker.handle(item)
    if outcome.success:
        return outcome.to_dict()

    return self.handle_failure(
        WORKER_NAME,
        payload,
        outcome,
        idempotency_key=outcome.transaction_id,
        context=context_for(item),
    )
