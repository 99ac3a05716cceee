"""Client for the mailbox state API (processed / failed notifications)."""

import logging
from dataclasses import dataclass
from urllib.parse import quote

from domain.handoff.errors import CollaboratorCallError
from domain.handoff.ports import EmailNotificationPort

from .http import HttpServiceClient

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


@dataclass
class DpsEmailClient(HttpServiceClient, EmailNotificationPort):
    """Calls ``PUT /emails/{id}/processed`` on the mailbox state API."""

    def email_processed(self, email_id_base64: str, reference_id: str, correlation_id: str) -> bool:
        path = f"/emails/{quote(email_id_base64, safe='')}/processed"
        response = self._send(
            "PUT",
            path,
            headers={CORRELATION_HEADER: correlation_id},
            json={"correlationId": correlation_id, "referenceId": reference_id},
        )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("acknowledge", False):
            message = body.get("message") or f"status {response.status_code}"
            raise CollaboratorCallError(
                f"Email {email_id_base64} was not acknowledged: {message}",
                status_code=response.status_code,
            )

        logger.debug(f"Email {email_id_base64} acknowledged as processed")
        return True
