"""Mailbox state transitions requested by the pipeline.

Decodes the base64 email id, asks the mailbox to move the message and folds
the result into an AckResponse. Collaborator failures become a refused
acknowledgment carrying the failure text; nothing is retried here.
"""

import logging
from typing import Callable, Optional

from domain.handoff.models import decode_mailbox_id
from domain.handoff.ports import MailboxMoverPort
from observability.metrics import mailbox_transitions_total
from observability.work_context import WorkContext

from .schemas import AckResponse, MailboxAckRequest

logger = logging.getLogger(__name__)


class MailboxStateService:
    """Moves source emails to the processed or error folder."""

    def __init__(self, mover: MailboxMoverPort):
        self.mover = mover

    def mark_processed(
        self,
        email_id_base64: str,
        request: MailboxAckRequest,
        context: Optional[WorkContext] = None,
    ) -> AckResponse:
        return self._transition(
            "processed", self.mover.move_to_processed_folder, email_id_base64, request, context
        )

    def mark_failed(
        self,
        email_id_base64: str,
        request: MailboxAckRequest,
        context: Optional[WorkContext] = None,
    ) -> AckResponse:
        return self._transition(
            "failed", self.mover.move_to_error_folder, email_id_base64, request, context
        )

    def _transition(
        self,
        operation: str,
        move: Callable[[str], None],
        email_id_base64: str,
        request: MailboxAckRequest,
        context: Optional[WorkContext],
    ) -> AckResponse:
        context = (context or WorkContext()).with_correlation(request.correlation_id)
        extra = context.log_extra()

        try:
            email_id = decode_mailbox_id(email_id_base64)
            logger.info(f"Moving email to {operation} folder", extra=extra)
            move(email_id)
        except Exception as e:
            # Translation boundary: every failure is reported to the caller
            logger.error(
                f"Email {email_id_base64} could not be moved to {operation} folder: {e}",
                extra=extra,
            )
            mailbox_transitions_total.labels(operation=operation, acknowledge="false").inc()
            return AckResponse.failure(str(e))

        if request.reference_id:
            logger.info(f"Email handed off with reference {request.reference_id}", extra=extra)
        mailbox_transitions_total.labels(operation=operation, acknowledge="true").inc()
        return AckResponse.success()
